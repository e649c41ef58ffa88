"""
API data models for the dbt-core-interface server.

Contains Pydantic models for the payloads the server returns and the
error containers the client builds when the server cannot be reached.
"""

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class FullReparse(str, Enum):
    """Values accepted by the server's reset endpoint."""

    TRUE = "true"
    FALSE = "false"


class ErrorCode(IntEnum):
    """Error codes shared with the server."""

    FAILED_TO_REACH_SERVER = -1
    UNLINTABLE_UNFIXABLE = 0
    COMPILE_SQL_FAILURE = 1
    EXECUTE_SQL_FAILURE = 2
    PROJECT_PARSE_FAILURE = 3


class RunResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    column_names: list[str]
    rows: list[list[Any]]
    raw_sql: str
    compiled_sql: str


class CompileResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    result: str


class ResetResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    result: str


class ErrorDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    data: dict[str, str | int]


class ErrorContainer(BaseModel):
    """Error payload, either built locally or parsed from a server response."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


PROJECT_NOT_REGISTERED_ERROR = ErrorContainer(
    error=ErrorDetail(
        code=ErrorCode.COMPILE_SQL_FAILURE,
        message=(
            "Sqlfluff currently unavailable. "
            "Check that your project does not contain compilation errors."
        ),
        data={"error": ""},
    )
)


def failed_to_reach_server_error(host: str, port: int | str) -> ErrorContainer:
    """Build the payload returned when a request never got an answer."""
    return ErrorContainer(
        error=ErrorDetail(
            code=ErrorCode.FAILED_TO_REACH_SERVER,
            message="Query failed to reach dbt sync server.",
            data={"error": f"Is the server listening on the http://{host}:{port} address?"},
        )
    )


def is_error_response(payload: Any) -> bool:
    """Check whether a lint/format result carries an error.

    Works for locally built containers and for raw JSON bodies the
    server encoded as errors.
    """
    if isinstance(payload, ErrorContainer):
        return True
    return isinstance(payload, dict) and isinstance(payload.get("error"), dict)
