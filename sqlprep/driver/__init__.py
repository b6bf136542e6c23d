"""Prepared statements and the connections they run on."""

from typing import Union

from sqlprep.driver._async import AsyncStatement
from sqlprep.driver._common import CommonStatementAttributesMixin, OperationType, StatementState, detect_operation_type
from sqlprep.driver._sync import Statement
from sqlprep.driver.connection import AsyncConnection, Connection

__all__ = (
    "AsyncConnection",
    "AsyncStatement",
    "CommonStatementAttributesMixin",
    "Connection",
    "OperationType",
    "Statement",
    "StatementProtocol",
    "StatementState",
    "detect_operation_type",
)

StatementProtocol = Union[Statement, AsyncStatement]
