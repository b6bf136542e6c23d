"""Asynchronous prepared statement."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Optional

from sqlprep.driver._common import CommonStatementAttributesMixin
from sqlprep.exceptions import ReceiveError, SendError, wrap_exceptions
from sqlprep.result import EffectResult
from sqlprep.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlprep.driver.connection import AsyncConnection
    from sqlprep.parameters import ParameterConfig

__all__ = ("AsyncStatement",)

logger = get_logger("driver.async")

_SEND_ERROR_PREFIX = "Cannot send query to server: "


class AsyncStatement(CommonStatementAttributesMixin):
    """A prepared statement bound to an :class:`AsyncConnection`.

    The constructor expects the connection claim to be held already. Use
    :meth:`AsyncConnection.prepare` or :meth:`AsyncStatement.prepare`, which
    await the claim first.
    """

    __slots__ = ()

    @classmethod
    async def prepare(
        cls, connection: "AsyncConnection", sql: str, config: "Optional[ParameterConfig]" = None
    ) -> "AsyncStatement":
        """Claim ``connection`` and return a prepared statement for ``sql``."""
        await connection._acquire()
        return cls(connection, sql, config)

    async def execute(self, parameters: "Optional[Sequence[Any]]" = None) -> EffectResult:
        """Execute a statement that does not return rows.

        Args:
            parameters: Bound arguments in placeholder order

        Raises:
            StatementStateError: The statement was already executed.
            PlaceholderIndexError: A numbered placeholder has no matching argument.
            SendError: The query could not be sent.
            ReceiveError: The result could not be read.

        Returns:
            The last inserted identifier and the number of affected rows.
        """
        self._begin_execution()
        try:
            sql = self._build_query(parameters, "Exec")
            transport = self.connection.transport
            try:
                with wrap_exceptions(SendError, _SEND_ERROR_PREFIX):
                    await transport.write_exec(sql)
            except SendError as exc:
                logger.warning("Exec: %s", exc)
                raise

            with wrap_exceptions(ReceiveError):
                last_inserted_id, rows_affected = await transport.read_result()
            return EffectResult(last_inserted_id, rows_affected, sql)
        finally:
            self._finish_execution()

    async def query(self, parameters: "Optional[Sequence[Any]]" = None) -> Any:
        """Execute a statement that may return rows.

        Returns:
            The row stream produced by the connection's transport.
        """
        self._begin_execution()
        try:
            sql = self._build_query(parameters, "Query")
            transport = self.connection.transport
            with wrap_exceptions(SendError, _SEND_ERROR_PREFIX):
                await transport.write_query(sql)
            with wrap_exceptions(ReceiveError):
                return await transport.read_rows()
        finally:
            self._finish_execution()
