"""HTTP client for the dbt-core-interface lint/format server"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from urllib.parse import quote

import httpx

from ..api.models import PROJECT_NOT_REGISTERED_ERROR, failed_to_reach_server_error
from ..config.settings import InterfaceConfig, get_config
from .output_channel import OutputChannel

logger = logging.getLogger(__name__)

# Characters encodeURI leaves untouched besides letters, digits and "-_.~"
_URI_SAFE = ";,/?:@&=+$!*'()#"


def encode_uri(url: str) -> str:
    """Percent-encode a full URL, keeping its reserved characters."""
    return quote(url, safe=_URI_SAFE)


@asynccontextmanager
async def request_deadline(milliseconds: float) -> AsyncIterator[None]:
    """Cancel the enclosed block once ``milliseconds`` have elapsed.

    Expiry surfaces as ``TimeoutError`` when the block is left. The pending
    timer is cancelled on every exit, whether the block finished, raised or
    timed out.
    """
    async with asyncio.timeout(milliseconds / 1000):
        yield


class DbtInterface:
    """Client for one lint or format request against dbt-core-interface.

    Exactly one of ``sql`` (SQL text mode) or ``sql_path`` (path mode) is
    expected; the combination is not validated. Host and port are looked up
    in the configuration each time a URL is built.
    """

    def __init__(
        self,
        sql: str | None,
        sql_path: str | None,
        extra_config_path: str = "",
        *,
        config: InterfaceConfig | None = None,
        output_channel: OutputChannel | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._sql = sql
        self._sql_path = sql_path
        self._extra_config_path = extra_config_path
        self._config = config
        self.output_channel = output_channel or OutputChannel()
        self._transport = transport

    @property
    def sql(self) -> str | None:
        return self._sql

    @property
    def sql_path(self) -> str | None:
        return self._sql_path

    @property
    def extra_config_path(self) -> str:
        return self._extra_config_path

    @property
    def config(self) -> InterfaceConfig:
        return self._config if self._config is not None else get_config()

    def _build_url(self, endpoint: str) -> str:
        base_url = self.config.base_url
        if self._sql is not None:
            url = f"{base_url}/{endpoint}?"
        else:
            url = f"{base_url}/{endpoint}?sql_path={self._sql_path}"

        # Appended in both modes, which leaves "?&" in SQL text mode.
        if self._extra_config_path:
            url += f"&extra_config_path={self._extra_config_path}"

        return url

    def get_lint_url(self) -> str:
        return self._build_url("lint")

    def get_format_url(self) -> str:
        """URL of the endpoint equivalent to ``sqlfluff format``.

        The behavior is similar to ``sqlfluff fix`` but applies a different
        set of rules.
        """
        return self._build_url("format")

    def _client(self) -> httpx.AsyncClient:
        # Deadlines are enforced by request_deadline, not by httpx.
        return httpx.AsyncClient(transport=self._transport, timeout=None)

    async def health_check(self) -> bool:
        """Check that the server answers GET /health with a 200."""
        try:
            async with self._client() as client:
                async with request_deadline(self.config.health_timeout_ms):
                    response = await client.get(f"{self.config.base_url}/health")
            return response.status_code == 200
        except Exception:
            logger.debug("dbt-core-interface health check failed", exc_info=True)
            return False

    async def lint(self, timeout: int | None = None) -> Any:
        """Lint the SQL on the server.

        Args:
            timeout: Request deadline in milliseconds, defaults to the
                configured ``timeouts.request_ms``.

        Returns:
            The decoded JSON body as sent by the server, or an
            ``ErrorContainer`` when the server is unhealthy or unreachable.
        """
        return await self._post("lint", timeout)

    async def format(self, timeout: int | None = None) -> Any:
        """Format the SQL on the server. Same contract as :meth:`lint`."""
        return await self._post("format", timeout)

    async def _post(self, endpoint: str, timeout: int | None) -> Any:
        if not await self.health_check():
            self.output_channel.append_hyphenated_line()
            self.output_channel.append_line("Unhealthy dbt project:")
            self.output_channel.append_hyphenated_line()
            return PROJECT_NOT_REGISTERED_ERROR

        config = self.config
        try:
            if timeout is None:
                timeout = config.request_timeout_ms
            url = encode_uri(self._build_url(endpoint))
            logger.debug("POST %s", url)

            async with self._client() as client:
                async with request_deadline(timeout):
                    response = await client.post(url, content=self._sql)
            return response.json()
        except Exception as error:
            self.output_channel.append_hyphenated_line()
            self.output_channel.append_line(f"Raw dbt-core-interface /{endpoint} error response:")
            self.output_channel.append_hyphenated_line()
            self.output_channel.append_line(f"{type(error).__name__}: {error}")
            self.output_channel.append_hyphenated_line()

            return failed_to_reach_server_error(config.host, config.port)
