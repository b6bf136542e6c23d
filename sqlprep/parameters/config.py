"""Parameter configuration for prepared statements."""

from enum import Enum
from typing import Any, Optional

from typing_extensions import Self

__all__ = ("LiteralStyle", "ParameterConfig")


class LiteralStyle(str, Enum):
    """How bound arguments are turned into SQL text.

    - HEURISTIC: the driver's historical quoting rules (no escaping)
    - ESCAPED: standard SQL literals generated by sqlglot
    """

    HEURISTIC = "heuristic"
    ESCAPED = "escaped"


class ParameterConfig:
    """Declarative configuration for placeholder rewriting.

    The defaults reproduce the observed driver behavior. Each flag opts in to a
    stricter rule.
    """

    __slots__ = ("dialect", "literal_style", "local_quote_context", "strict_parsing", "unified_style_detection")

    def __init__(
        self,
        unified_style_detection: bool = False,
        strict_parsing: bool = False,
        local_quote_context: bool = False,
        literal_style: LiteralStyle = LiteralStyle.HEURISTIC,
        dialect: Optional[str] = None,
    ) -> None:
        """Initialize parameter configuration.

        Args:
            unified_style_detection: Rewrite with the dialect found while counting
                placeholders instead of re-deriving it from the argument count
            strict_parsing: Raise when a numbered placeholder index cannot be parsed
                instead of returning the partially rewritten query
            local_quote_context: Decide whether text needs quoting from the character
                right before the placeholder rather than the end of the whole query
            literal_style: Literal rendering for bound arguments
            dialect: sqlglot dialect name used for escaped literals and operation
                type detection
        """
        self.unified_style_detection = unified_style_detection
        self.strict_parsing = strict_parsing
        self.local_quote_context = local_quote_context
        self.literal_style = LiteralStyle(literal_style)
        self.dialect = dialect

    def replace(self, **kwargs: Any) -> Self:
        """Return a copy with the given attributes replaced.

        Raises:
            TypeError: If an unknown attribute name is given.
        """
        for key in kwargs:
            if key not in self.__slots__:
                msg = f"{key!r} is not a field of {type(self).__name__}"
                raise TypeError(msg)
        current = {name: getattr(self, name) for name in self.__slots__}
        current.update(kwargs)
        return type(self)(**current)

    def hash(self) -> int:
        """Deterministic hash of the configuration for cache keys."""
        return hash(
            (
                self.unified_style_detection,
                self.strict_parsing,
                self.local_quote_context,
                self.literal_style.value,
                self.dialect,
            )
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterConfig):
            return False
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __hash__(self) -> int:
        return self.hash()

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in sorted(self.__slots__))
        return f"{type(self).__name__}({fields})"
