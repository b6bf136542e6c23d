"""Core parameter types used throughout sqlprep.

This module contains the placeholder styles, the bound-argument wrapper
and the small result records shared by the counter and the rewriter.
"""

from decimal import Decimal
from enum import Enum
from functools import singledispatch
from typing import Any, Final, NamedTuple, Optional

from mypy_extensions import mypyc_attr

__all__ = (
    "QMARK_MARKER",
    "UNKNOWN_PARAMETER_COUNT",
    "ArgumentKind",
    "ParameterProfile",
    "ParameterStyle",
    "RewriteResult",
    "TypedParameter",
    "wrap_with_type",
)

QMARK_MARKER: Final = "?"
NUMERIC_MARKER_PREFIX: Final = "$"
UNKNOWN_PARAMETER_COUNT: Final = -1


class ParameterStyle(str, Enum):
    """Placeholder dialect of a query template.

    - QMARK: ``?`` placeholders consumed left to right
    - NUMERIC: ``$1``, ``$2`` placeholders carrying a 1-based index
    - NONE: no placeholders detected
    """

    NONE = "none"
    QMARK = "qmark"
    NUMERIC = "numeric"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value


class ArgumentKind(str, Enum):
    """Tag of a bound argument. Quoting decisions dispatch on this."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"
    OPAQUE = "opaque"


@mypyc_attr(allow_interpreted_subclasses=False)
class TypedParameter:
    """Bound argument tagged with its kind.

    Attributes:
        value: The parameter value as supplied by the caller
        kind: The tag used to pick a rendering
    """

    __slots__ = ("kind", "value")

    def __init__(self, value: Any, kind: ArgumentKind) -> None:
        self.value = value
        self.kind = kind

    @property
    def is_text(self) -> bool:
        return self.kind is ArgumentKind.TEXT

    def render(self) -> str:
        """Default string form of the value, without any quoting.

        Returns:
            The textual form inserted into a literal query.
        """
        if self.kind is ArgumentKind.NULL:
            return "NULL"
        if self.kind is ArgumentKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is ArgumentKind.TEXT and isinstance(self.value, (bytes, bytearray)):
            return bytes(self.value).decode("utf-8", errors="replace")
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedParameter):
            return False
        return self.kind is other.kind and self.value == other.value

    def __repr__(self) -> str:
        return f"TypedParameter({self.value!r}, kind={self.kind.value})"


@singledispatch
def _classify(value: Any) -> ArgumentKind:
    """Type-specific classification using singledispatch.

    Args:
        value: Parameter value to classify

    Returns:
        The argument kind for ``value``
    """
    return ArgumentKind.OPAQUE


@_classify.register(type(None))
def _(value: Any) -> ArgumentKind:
    return ArgumentKind.NULL


@_classify.register
def _(value: str) -> ArgumentKind:
    return ArgumentKind.TEXT


@_classify.register(bytes)
@_classify.register(bytearray)
def _(value: Any) -> ArgumentKind:
    return ArgumentKind.TEXT


@_classify.register
def _(value: bool) -> ArgumentKind:
    return ArgumentKind.BOOLEAN


@_classify.register
def _(value: int) -> ArgumentKind:
    return ArgumentKind.INTEGER


@_classify.register(float)
@_classify.register(Decimal)
def _(value: Any) -> ArgumentKind:
    return ArgumentKind.FLOAT


def wrap_with_type(value: Any) -> TypedParameter:
    """Wrap a bound argument with its kind tag.

    Already wrapped values are returned unchanged.

    Args:
        value: Parameter value supplied by the caller

    Returns:
        The tagged parameter
    """
    if isinstance(value, TypedParameter):
        return value
    return TypedParameter(value, _classify(value))


class ParameterProfile(NamedTuple):
    """Placeholder count and dialect detected for a template."""

    count: int
    style: ParameterStyle

    @property
    def is_known(self) -> bool:
        return self.count != UNKNOWN_PARAMETER_COUNT


class RewriteResult(NamedTuple):
    """Outcome of a rewrite.

    Attributes:
        sql: The literal query, possibly only partially rewritten
        style: The algorithm that produced ``sql``
        complete: False when a placeholder index could not be parsed
        error: Description of the parse failure when ``complete`` is False
    """

    sql: str
    style: ParameterStyle
    complete: bool = True
    error: Optional[str] = None
