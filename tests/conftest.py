"""Shared fixtures for the server tests."""

import io
import itertools
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from snakeserver import (
    BattlesnakeServer,
    InfoResponse,
    LogLevel,
    MoveResponse,
    ServerConfig,
    new_line_logger,
)

FIXTURES = Path(__file__).parent / "fixtures"

_logger_ids = itertools.count()


@pytest.fixture
def info() -> InfoResponse:
    return InfoResponse(author="foo", color="#000000", head="default", tail="default", version="9.9")


@pytest.fixture
def move_resp() -> MoveResponse:
    return MoveResponse(move="up", shout="Hi!")


@pytest.fixture
def move_payload() -> dict:
    return json.loads((FIXTURES / "move_test.json").read_text())


@pytest.fixture
def log_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_server(info, move_resp, log_buffer):
    """Factory building a server whose log lines land in `log_buffer`."""

    def _make(levels=LogLevel.DEFAULT, move_func=None, info_override=None):
        sink = new_line_logger(log_buffer, name=f"snakeserver.test.{next(_logger_ids)}")
        config = ServerConfig(
            info=info if info_override is None else info_override,
            port=0,
            log_levels=levels,
            host="127.0.0.1",
        )
        return BattlesnakeServer(
            config,
            move_func or (lambda state, logger: move_resp),
            logger=sink,
        )

    return _make


@pytest.fixture
def client(make_server) -> TestClient:
    return TestClient(make_server())
