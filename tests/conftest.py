from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from sqlprep import AsyncConnection, Connection

here = Path(__file__).parent
root_path = here.parent


class RecordingTransport:
    """In-memory transport that records every literal query it is sent."""

    def __init__(self, result: tuple[Any, int] = (1, 1), rows: Any = None) -> None:
        self.result = result
        self.rows = rows if rows is not None else iter([("a",), ("b",)])
        self.sent: list[tuple[str, str]] = []
        self.send_error: Exception | None = None
        self.receive_error: Exception | None = None

    def write_exec(self, sql: str) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(("exec", sql))

    def write_query(self, sql: str) -> None:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(("query", sql))

    def read_result(self) -> tuple[Any, int]:
        if self.receive_error is not None:
            raise self.receive_error
        return self.result

    def read_rows(self) -> Any:
        if self.receive_error is not None:
            raise self.receive_error
        return self.rows


class AsyncRecordingTransport(RecordingTransport):
    async def write_exec(self, sql: str) -> None:  # type: ignore[override]
        RecordingTransport.write_exec(self, sql)

    async def write_query(self, sql: str) -> None:  # type: ignore[override]
        RecordingTransport.write_query(self, sql)

    async def read_result(self) -> tuple[Any, int]:  # type: ignore[override]
        return RecordingTransport.read_result(self)

    async def read_rows(self) -> Any:  # type: ignore[override]
        return RecordingTransport.read_rows(self)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def connection(transport: RecordingTransport) -> Connection:
    return Connection(transport)


@pytest.fixture
def async_transport() -> AsyncRecordingTransport:
    return AsyncRecordingTransport()


@pytest.fixture
def async_connection(async_transport: AsyncRecordingTransport) -> AsyncConnection:
    return AsyncConnection(async_transport)
