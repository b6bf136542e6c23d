"""Placeholder counting and dialect detection.

Counting is purely textual: placeholders inside string literals or comments
are counted like any other occurrence.
"""

from typing import Final

from sqlprep.parameters.types import NUMERIC_MARKER_PREFIX, QMARK_MARKER, ParameterProfile, ParameterStyle
from sqlprep.utils.logging import get_logger

__all__ = ("count_parameters",)

logger = get_logger("parameters.validator")

_NO_PARAMETERS: Final = ParameterProfile(0, ParameterStyle.NONE)


def _count_numeric(sql: str) -> int:
    """Length of the contiguous run ``$1``, ``$2``, ... present in ``sql``.

    Probing stops at the first absent index, so ``$1 ... $3`` yields 1.
    """
    index = 1
    while f"{NUMERIC_MARKER_PREFIX}{index}" in sql:
        index += 1
    return index - 1


def count_parameters(sql: str) -> ParameterProfile:
    """Determine how many positional parameters ``sql`` declares.

    ``?`` markers take precedence: when any are present, numbered markers are
    not scanned at all.

    Args:
        sql: Query template

    Returns:
        The parameter count and the detected style. Never raises.
    """
    qmark_count = sql.count(QMARK_MARKER)
    if qmark_count > 0:
        return ParameterProfile(qmark_count, ParameterStyle.QMARK)

    numeric_count = _count_numeric(sql)
    if numeric_count > 0:
        return ParameterProfile(numeric_count, ParameterStyle.NUMERIC)
    logger.debug("No placeholders detected in <%s>", sql)
    return _NO_PARAMETERS

