from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

__all__ = (
    "ParameterCountError",
    "ParameterError",
    "PlaceholderIndexError",
    "PlaceholderParseError",
    "ReceiveError",
    "SQLPrepError",
    "SendError",
    "StatementStateError",
    "TransportError",
    "UnsupportedOperationError",
    "wrap_exceptions",
)


class SQLPrepError(Exception):
    """Base exception class from which all sqlprep exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLPrepError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


# -- Parameter Errors --
class ParameterError(SQLPrepError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class PlaceholderIndexError(ParameterError, IndexError):
    """Raised when a numbered placeholder has no corresponding argument."""


class PlaceholderParseError(ParameterError):
    """Raised when a placeholder index cannot be parsed as an integer."""


class ParameterCountError(ParameterError):
    """Raised when the number of arguments does not match the placeholders."""


# -- Transport Errors --
class TransportError(SQLPrepError):
    """Base class for failures reported by the connection's transport."""


class SendError(TransportError):
    """The request sink rejected or failed to transmit a query."""


class ReceiveError(TransportError):
    """The response source failed after the query was sent."""


# -- Statement Errors --
class UnsupportedOperationError(SQLPrepError):
    """The requested operation is not implemented by this driver."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Not implemented."
        super().__init__(message)


class StatementStateError(SQLPrepError):
    """A statement was used outside of its prepare/execute protocol."""


@contextmanager
def wrap_exceptions(error_type: "type[SQLPrepError]", message: str = "") -> Generator[None, None, None]:
    """Convert foreign exceptions raised in the block into ``error_type``.

    sqlprep exceptions pass through untouched. The original exception is kept
    as ``__cause__``.

    Args:
        error_type: Exception class to raise instead
        message: Prefix prepended to the original error text
    """
    try:
        yield

    except SQLPrepError:
        raise
    except Exception as exc:
        detail = f"{message}{exc}" if message else str(exc)
        raise error_type(detail or type(exc).__name__) from exc
