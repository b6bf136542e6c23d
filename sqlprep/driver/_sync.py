"""Synchronous prepared statement."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Optional

from sqlprep.driver._common import CommonStatementAttributesMixin
from sqlprep.exceptions import ReceiveError, SendError, wrap_exceptions
from sqlprep.result import EffectResult
from sqlprep.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlprep.driver.connection import Connection
    from sqlprep.parameters import ParameterConfig

__all__ = ("Statement",)

logger = get_logger("driver.sync")

_SEND_ERROR_PREFIX = "Cannot send query to server: "


class Statement(CommonStatementAttributesMixin):
    """A prepared statement bound to a :class:`Connection`.

    Creating the statement claims the connection. The claim is released when
    the first call to :meth:`execute` or :meth:`query` returns, whether it
    succeeded or not. Until then no other statement can be prepared on the same
    connection, so every prepared statement must be executed exactly once.
    """

    __slots__ = ()

    def __init__(self, connection: "Connection", sql: str, config: "Optional[ParameterConfig]" = None) -> None:
        super().__init__(connection, sql, config)
        connection._acquire()

    def execute(self, parameters: "Optional[Sequence[Any]]" = None) -> EffectResult:
        """Execute a statement that does not return rows, such as an INSERT or UPDATE.

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
                    transport.write_exec(sql)
            except SendError as exc:
                logger.warning("Exec: %s", exc)
                raise

            with wrap_exceptions(ReceiveError):
                last_inserted_id, rows_affected = transport.read_result()
            return EffectResult(last_inserted_id, rows_affected, sql)
        finally:
            self._finish_execution()

    def query(self, parameters: "Optional[Sequence[Any]]" = None) -> Any:
        """Execute a statement that may return rows, such as a SELECT.

        Args:
            parameters: Bound arguments in placeholder order

        Raises:
            StatementStateError: The statement was already executed.
            PlaceholderIndexError: A numbered placeholder has no matching argument.
            SendError: The query could not be sent.
            ReceiveError: The row stream could not be read.

        Returns:
            The row stream produced by the connection's transport.
        """
        self._begin_execution()
        try:
            sql = self._build_query(parameters, "Query")
            transport = self.connection.transport
            with wrap_exceptions(SendError, _SEND_ERROR_PREFIX):
                transport.write_query(sql)
            with wrap_exceptions(ReceiveError):
                return transport.read_rows()
        finally:
            self._finish_execution()
