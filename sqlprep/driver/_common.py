"""Common statement attributes and utilities.

This module provides what the sync and async statements share:
- Placeholder counting at prepare time
- Rewriting the template into the literal query for one execution
- The PREPARED -> EXECUTING -> IDLE state machine guarding the connection claim
- Informational operation type detection via sqlglot
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any, Final, Optional

import sqlglot
from mypy_extensions import trait
from sqlglot import exp
from sqlglot.errors import SqlglotError
from typing_extensions import Literal

from sqlprep.exceptions import StatementStateError, UnsupportedOperationError
from sqlprep.parameters import (
    UNKNOWN_PARAMETER_COUNT,
    ParameterConfig,
    ParameterConverter,
    ParameterProfile,
    ParameterStyle,
    count_parameters,
)
from sqlprep.utils.logging import get_logger, log_with_context

__all__ = ("CommonStatementAttributesMixin", "OperationType", "StatementState", "detect_operation_type")

logger = get_logger("driver")

OperationType = Literal["SELECT", "INSERT", "UPDATE", "DELETE", "DDL", "EXECUTE", "UNKNOWN"]

_KEYWORD_OPERATIONS: Final["dict[str, OperationType]"] = {
    "SELECT": "SELECT",
    "WITH": "SELECT",
    "INSERT": "INSERT",
    "UPDATE": "UPDATE",
    "DELETE": "DELETE",
    "CREATE": "DDL",
    "DROP": "DDL",
    "ALTER": "DDL",
    "TRUNCATE": "DDL",
}


class StatementState(str, Enum):
    """Lifecycle of a statement's claim on its connection."""

    PREPARED = "prepared"
    EXECUTING = "executing"
    IDLE = "idle"


def _operation_from_keyword(sql: str) -> OperationType:
    words = sql.lstrip(" \t\r\n(").split(None, 1)
    if not words:
        return "UNKNOWN"
    return _KEYWORD_OPERATIONS.get(words[0].upper(), "UNKNOWN")


def detect_operation_type(sql: str, dialect: Optional[str] = None) -> OperationType:
    """Classify ``sql`` by its top-level statement.

    Uses the sqlglot AST when the template parses, and the leading keyword
    otherwise. Never raises.

    Args:
        sql: Query template
        dialect: sqlglot dialect name

    Returns:
        Operation type string
    """
    try:
        expression = sqlglot.parse_one(sql, dialect=dialect)
    except SqlglotError:
        return _operation_from_keyword(sql)

    if isinstance(expression, (exp.Select, exp.Union)):
        return "SELECT"
    if isinstance(expression, exp.Insert):
        return "INSERT"
    if isinstance(expression, exp.Update):
        return "UPDATE"
    if isinstance(expression, exp.Delete):
        return "DELETE"
    if isinstance(expression, (exp.Create, exp.Drop, exp.Alter)):
        return "DDL"
    if isinstance(expression, exp.Command):
        return "EXECUTE"
    return _operation_from_keyword(sql)


@trait
class CommonStatementAttributesMixin:
    """State and behavior shared by sync and async statements.

    A statement holds its connection's exclusivity claim from the moment it is
    prepared until its first execution returns.
    """

    __slots__ = ("_converter", "_operation_type", "_profile", "_state", "config", "connection", "sql")
    connection: Any
    sql: str
    config: ParameterConfig

    def __init__(self, connection: Any, sql: str, config: Optional[ParameterConfig] = None) -> None:
        """Initialize statement attributes.

        Args:
            connection: Connection the statement runs on. Borrowed, never closed here.
            sql: Query template
            config: Rewriting configuration, defaulting to the connection's
        """
        self.connection = connection
        self.sql = sql
        self.config = config or connection.parameter_config
        self._profile: ParameterProfile = count_parameters(sql)
        self._converter = ParameterConverter(self.config)
        self._operation_type: Optional[OperationType] = None
        self._state = StatementState.PREPARED

    @property
    def num_input(self) -> int:
        """Number of placeholder parameters, or ``UNKNOWN_PARAMETER_COUNT``."""
        return self._profile.count

    def parameter_count(self) -> int:
        return self.num_input

    @property
    def has_known_parameter_count(self) -> bool:
        return self._profile.count != UNKNOWN_PARAMETER_COUNT

    @property
    def parameter_style(self) -> ParameterStyle:
        return self._profile.style

    @property
    def state(self) -> StatementState:
        return self._state

    @property
    def operation_type(self) -> OperationType:
        if self._operation_type is None:
            self._operation_type = detect_operation_type(self.sql, self.config.dialect)
        return self._operation_type

    @property
    def returns_rows(self) -> bool:
        return self.operation_type == "SELECT"

    def close(self) -> None:
        """Closing a statement is not supported.

        Raises:
            UnsupportedOperationError: Always.
        """
        msg = "Not implemented."
        raise UnsupportedOperationError(msg)

    def _begin_execution(self) -> None:
        if self._state is not StatementState.PREPARED:
            msg = (
                f"Statement is {self._state.value} and no longer holds its connection; "
                "prepare it again to execute another time"
            )
            raise StatementStateError(msg)
        self._state = StatementState.EXECUTING

    def _finish_execution(self) -> None:
        self._state = StatementState.IDLE
        self.connection._release()

    def _build_query(self, parameters: "Optional[Sequence[Any]]", label: str) -> str:
        """Rewrite the template for one execution and log the literal query."""
        result = self._converter.convert(self.sql, parameters or (), self._profile)
        _log_query(logger, label, result.sql, result.style, result.complete)
        return result.sql

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self.sql!r}, num_input={self.num_input}, state={self._state.value})"


def _log_query(log: logging.Logger, label: str, sql: str, style: ParameterStyle, complete: bool) -> None:
    log_with_context(
        log, logging.INFO, f"{label} <{sql}>", operation=label.lower(), parameter_style=style.value, complete=complete
    )
