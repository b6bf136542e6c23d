"""Placeholder counting and substitution for prepared statements.

Two placeholder styles are understood: ``?`` markers consumed in order and
``$n`` markers carrying a 1-based argument index.
"""

from sqlprep.parameters.config import LiteralStyle, ParameterConfig
from sqlprep.parameters.converter import ParameterConverter, rewrite_query
from sqlprep.parameters.types import (
    QMARK_MARKER,
    UNKNOWN_PARAMETER_COUNT,
    ArgumentKind,
    ParameterProfile,
    ParameterStyle,
    RewriteResult,
    TypedParameter,
    wrap_with_type,
)
from sqlprep.parameters.validator import count_parameters

__all__ = (
    "QMARK_MARKER",
    "UNKNOWN_PARAMETER_COUNT",
    "ArgumentKind",
    "LiteralStyle",
    "ParameterConfig",
    "ParameterConverter",
    "ParameterProfile",
    "ParameterStyle",
    "RewriteResult",
    "TypedParameter",
    "count_parameters",
    "rewrite_query",
    "wrap_with_type",
)
