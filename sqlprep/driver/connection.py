"""Connections shared by prepared statements.

A connection wraps one transport and owns the lock that gives a single
statement at a time exclusive use of it.
"""

import asyncio
import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Optional

from sqlprep.driver._async import AsyncStatement
from sqlprep.driver._sync import Statement
from sqlprep.parameters import ParameterConfig
from sqlprep.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlprep.protocols import AsyncTransport, Transport
    from sqlprep.result import EffectResult

__all__ = ("AsyncConnection", "Connection")

logger = get_logger("driver.connection")


class Connection:
    """Synchronous connection guarded by a mutex.

    :meth:`prepare` acquires the mutex and the statement's first execution
    releases it.
    """

    __slots__ = ("_lock", "parameter_config", "transport")

    def __init__(self, transport: "Transport", parameter_config: Optional[ParameterConfig] = None) -> None:
        """Initialize the connection.

        Args:
            transport: Request sink and response source for literal queries
            parameter_config: Default rewriting configuration for prepared statements
        """
        self.transport = transport
        self.parameter_config = parameter_config or ParameterConfig()
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def prepare(self, sql: str, config: Optional[ParameterConfig] = None) -> Statement:
        """Prepare ``sql``, blocking until the connection is free."""
        return Statement(self, sql, config)

    def execute(self, sql: str, parameters: "Optional[Sequence[Any]]" = None) -> "EffectResult":
        """Prepare and execute a statement that does not return rows."""
        return self.prepare(sql).execute(parameters)

    def query(self, sql: str, parameters: "Optional[Sequence[Any]]" = None) -> Any:
        """Prepare and execute a statement that returns rows."""
        return self.prepare(sql).query(parameters)

    def _acquire(self) -> None:
        self._lock.acquire()
        logger.debug("Connection claimed")

    def _release(self) -> None:
        self._lock.release()
        logger.debug("Connection released")


class AsyncConnection:
    """Asynchronous connection guarded by an :class:`asyncio.Lock`."""

    __slots__ = ("_lock", "parameter_config", "transport")

    def __init__(self, transport: "AsyncTransport", parameter_config: Optional[ParameterConfig] = None) -> None:
        self.transport = transport
        self.parameter_config = parameter_config or ParameterConfig()
        self._lock = asyncio.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    async def prepare(self, sql: str, config: Optional[ParameterConfig] = None) -> AsyncStatement:
        """Prepare ``sql``, waiting until the connection is free."""
        return await AsyncStatement.prepare(self, sql, config)

    async def execute(self, sql: str, parameters: "Optional[Sequence[Any]]" = None) -> "EffectResult":
        statement = await self.prepare(sql)
        return await statement.execute(parameters)

    async def query(self, sql: str, parameters: "Optional[Sequence[Any]]" = None) -> Any:
        statement = await self.prepare(sql)
        return await statement.query(parameters)

    async def _acquire(self) -> None:
        await self._lock.acquire()
        logger.debug("Connection claimed")

    def _release(self) -> None:
        self._lock.release()
        logger.debug("Connection released")
