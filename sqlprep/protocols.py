"""Runtime-checkable protocols for the connection's transport.

A transport is what a connection talks to: a request sink that accepts literal
queries and a response source that yields their outcome. Failures are
signalled by raising.
"""

from typing import Any, Protocol, runtime_checkable

__all__ = (
    "AsyncRequestSink",
    "AsyncResponseSource",
    "AsyncTransport",
    "RequestSink",
    "ResponseSource",
    "Transport",
)


@runtime_checkable
class RequestSink(Protocol):
    """Protocol for sending literal queries."""

    def write_exec(self, sql: str) -> None:
        """Send a query that does not return rows."""
        ...

    def write_query(self, sql: str) -> None:
        """Send a query that returns rows."""
        ...


@runtime_checkable
class ResponseSource(Protocol):
    """Protocol for receiving query outcomes."""

    def read_result(self) -> "tuple[Any, int]":
        """Receive ``(last_inserted_id, rows_affected)`` for the last sent query."""
        ...

    def read_rows(self) -> Any:
        """Receive the row stream for the last sent query."""
        ...


@runtime_checkable
class Transport(RequestSink, ResponseSource, Protocol):
    """Request sink and response source over one connection."""


@runtime_checkable
class AsyncRequestSink(Protocol):
    """Protocol for sending literal queries asynchronously."""

    async def write_exec(self, sql: str) -> None:
        """Send a query that does not return rows."""
        ...

    async def write_query(self, sql: str) -> None:
        """Send a query that returns rows."""
        ...


@runtime_checkable
class AsyncResponseSource(Protocol):
    """Protocol for receiving query outcomes asynchronously."""

    async def read_result(self) -> "tuple[Any, int]":
        """Receive ``(last_inserted_id, rows_affected)`` for the last sent query."""
        ...

    async def read_rows(self) -> Any:
        """Receive the row stream for the last sent query."""
        ...


@runtime_checkable
class AsyncTransport(AsyncRequestSink, AsyncResponseSource, Protocol):
    """Asynchronous request sink and response source over one connection."""
