"""
Pytest configuration and shared fixtures for dbt-core-interface client tests.

This module provides a fake server backed by ``httpx.MockTransport``, a mock
configuration and a recorder for request deadlines.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from src.utils import http_client
from src.utils.output_channel import OUTPUT_CHANNEL_NAME


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


class MockInterfaceConfig:
    """Mock InterfaceConfig that behaves like the real one."""

    def __init__(self, host: str = "localhost", port: int = 8581):
        self.host = host
        self.port = port
        self.request_timeout_ms = 25000
        self.health_timeout_ms = 1000
        self.overrides: list[dict[str, Any]] = []

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def override_from_cli(self, cli_args: dict[str, Any]):
        self.overrides.append(cli_args)
        if cli_args.get("host") is not None:
            self.host = cli_args["host"]
        if cli_args.get("port") is not None:
            self.port = cli_args["port"]


@pytest.fixture
def mock_interface_config():
    """Provide a realistic mock configuration."""
    return MockInterfaceConfig()


@pytest.fixture(autouse=True)
def patch_config_globally(mock_interface_config):
    """Auto-patch get_config everywhere it has been imported."""
    with patch("src.config.settings.get_config", return_value=mock_interface_config), patch(
        "src.utils.http_client.get_config", return_value=mock_interface_config
    ), patch("src.main.get_config", return_value=mock_interface_config):
        yield


class FakeInterfaceServer:
    """In-process stand-in for a dbt-core-interface server."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.health_status = 200
        self.health_error: Exception | None = None
        self.health_delay = 0.0
        self.post_error: Exception | None = None
        self.post_delay = 0.0
        self.response_status = 200
        self.response_json: Any = {"result": "ok"}
        self.response_text: str | None = None

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/health":
            if self.health_delay:
                await asyncio.sleep(self.health_delay)
            if self.health_error is not None:
                raise self.health_error
            return httpx.Response(self.health_status, json={"result": {"status": "ready"}})

        if self.post_delay:
            await asyncio.sleep(self.post_delay)
        if self.post_error is not None:
            raise self.post_error
        if self.response_text is not None:
            return httpx.Response(self.response_status, text=self.response_text)
        return httpx.Response(self.response_status, json=self.response_json)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def posts(self) -> list[httpx.Request]:
        return [request for request in self.requests if request.method == "POST"]


@pytest.fixture
def fake_server() -> FakeInterfaceServer:
    """Provide a fake server with a healthy default state."""
    return FakeInterfaceServer()


class DeadlineRecorder:
    """Wraps request_deadline and counts how each scope is entered and left."""

    def __init__(self, deadline):
        self._deadline = deadline
        self.delays: list[float] = []
        self.entered = 0
        self.exited = 0
        self.exit_errors: list[type[BaseException] | None] = []

    def __call__(self, milliseconds: float):
        self.delays.append(milliseconds)
        return self._scope(milliseconds)

    @asynccontextmanager
    async def _scope(self, milliseconds: float):
        self.entered += 1
        try:
            async with self._deadline(milliseconds):
                yield
        except BaseException as e:
            self.exit_errors.append(type(e))
            raise
        else:
            self.exit_errors.append(None)
        finally:
            self.exited += 1


@pytest.fixture
def deadline_recorder(monkeypatch) -> DeadlineRecorder:
    """Record every request deadline opened by the client."""
    recorder = DeadlineRecorder(http_client.request_deadline)
    monkeypatch.setattr(http_client, "request_deadline", recorder)
    return recorder


@pytest.fixture
def output_lines(caplog):
    """Collect lines written to the output channel."""
    caplog.set_level(logging.DEBUG, logger=OUTPUT_CHANNEL_NAME)

    def _lines() -> list[str]:
        return [record.getMessage() for record in caplog.records if record.name == OUTPUT_CHANNEL_NAME]

    return _lines
