"""Pytest configuration and shared fixtures for ccDeluge tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from ccdeluge.exceptions import DaemonError
from ccdeluge.rpc.protocol import RPCResponse


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("asyncio", "marks tests as async (deselect with '-m \"not asyncio\"')"),
        ("unit", "marks tests as unit tests"),
        ("rpc", "marks tests as RPC command layer tests"),
        ("config", "marks tests as configuration tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _clear_ccdeluge_env(monkeypatch):
    """Keep CCDELUGE_* variables from the developer's shell out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("CCDELUGE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    package_logger = logging.getLogger("ccdeluge")
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)


class FakeTransport:
    """Transport double returning queued envelopes and recording calls."""

    def __init__(self, *responses: RPCResponse | BaseException):
        self.responses = list(responses)
        self.calls: list[tuple[str, list[Any], dict[str, Any]]] = []

    async def call(self, method: str, args: list[Any], kwargs: dict[str, Any]) -> RPCResponse:
        self.calls.append((method, args, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def last_call(self) -> tuple[str, list[Any], dict[str, Any]]:
        return self.calls[-1]


@pytest.fixture
def daemon_error():
    """A daemon-side error as a legacy daemon reports it."""
    return DaemonError("InvalidTorrentError", "torrent_id not in session", "Traceback ...")


@pytest.fixture
def make_transport():
    """Factory building a FakeTransport from queued responses."""
    return FakeTransport
