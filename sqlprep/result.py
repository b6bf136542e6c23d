"""Result of a statement executed for its effect."""

from typing import Any, Optional

from mypy_extensions import mypyc_attr

__all__ = ("EffectResult",)


@mypyc_attr(allow_interpreted_subclasses=False)
class EffectResult:
    """Outcome of a non-row-returning statement.

    Args:
        last_inserted_id: Identifier generated by the statement, if any.
        rows_affected: Number of rows changed by the statement.
        sql: The literal query that produced this result.
    """

    __slots__ = ("last_inserted_id", "rows_affected", "sql")

    def __init__(self, last_inserted_id: Any = None, rows_affected: int = 0, sql: Optional[str] = None) -> None:
        self.last_inserted_id = last_inserted_id
        self.rows_affected = rows_affected
        self.sql = sql

    def last_insert_id(self) -> Any:
        return self.last_inserted_id

    def row_count(self) -> int:
        return self.rows_affected

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EffectResult):
            return NotImplemented
        return (self.last_inserted_id, self.rows_affected) == (other.last_inserted_id, other.rows_affected)

    def __repr__(self) -> str:
        return f"EffectResult(last_inserted_id={self.last_inserted_id!r}, rows_affected={self.rows_affected})"
