"""Placeholder substitution.

Turns a query template and its bound arguments into a literal query string.
Two algorithms exist, one per placeholder style:

- QMARK: split on ``?`` and interleave the rendered arguments
- NUMERIC: repeatedly replace the leftmost ``$<n>`` with argument ``n``

The rewrite is best-effort. An unparsable placeholder index stops the rewrite
and the query produced so far is returned, unless strict parsing is enabled.
"""

import re
from collections.abc import Sequence
from typing import Any, Final, Optional

from sqlglot import exp

from sqlprep.exceptions import ParameterCountError, PlaceholderIndexError, PlaceholderParseError
from sqlprep.parameters.config import LiteralStyle, ParameterConfig
from sqlprep.parameters.types import (
    QMARK_MARKER,
    ArgumentKind,
    ParameterProfile,
    ParameterStyle,
    RewriteResult,
    TypedParameter,
    wrap_with_type,
)
from sqlprep.parameters.validator import count_parameters
from sqlprep.utils.logging import get_logger

__all__ = ("ParameterConverter", "rewrite_query")

logger = get_logger("parameters.converter")

_NUMERIC_PLACEHOLDER: Final = re.compile(r"\$[0-9]+")
_QUOTE: Final = "'"
_DEFAULT_CONFIG: Final = ParameterConfig()


class ParameterConverter:
    """Rewrites query templates into literal queries."""

    __slots__ = ("config",)

    def __init__(self, config: Optional[ParameterConfig] = None) -> None:
        self.config = config or _DEFAULT_CONFIG

    def select_style(
        self, sql: str, parameters: "Sequence[TypedParameter]", profile: Optional[ParameterProfile] = None
    ) -> ParameterStyle:
        """Pick the substitution algorithm for ``sql``.

        By default the QMARK algorithm is used only when the number of ``?``
        markers equals the number of arguments; anything else goes through the
        NUMERIC algorithm. With unified detection the style found while counting
        is reused as is.

        Args:
            sql: Query template
            parameters: Bound arguments
            profile: Counting result for ``sql`` when already known

        Returns:
            The style whose algorithm will rewrite ``sql``.
        """
        if self.config.unified_style_detection:
            return (profile or count_parameters(sql)).style
        if sql.count(QMARK_MARKER) == len(parameters):
            return ParameterStyle.QMARK
        return ParameterStyle.NUMERIC

    def convert(
        self, sql: str, parameters: "Sequence[Any]", profile: Optional[ParameterProfile] = None
    ) -> RewriteResult:
        """Rewrite ``sql`` with ``parameters`` substituted for its placeholders.

        Args:
            sql: Query template
            parameters: Bound arguments, in placeholder order
            profile: Counting result for ``sql`` when already known

        Raises:
            PlaceholderIndexError: A numbered placeholder has no matching argument.
            PlaceholderParseError: An index could not be parsed and strict parsing is on.
            ParameterCountError: Unified detection found ``?`` markers that do not
                match the number of arguments.

        Returns:
            The rewrite outcome.
        """
        typed = [wrap_with_type(value) for value in parameters]
        style = self.select_style(sql, typed, profile)
        if style is ParameterStyle.QMARK:
            return RewriteResult(self._convert_qmark(sql, typed), ParameterStyle.QMARK)
        if style is ParameterStyle.NONE:
            return RewriteResult(sql, ParameterStyle.NONE)
        return self._convert_numeric(sql, typed)

    def _convert_qmark(self, sql: str, parameters: "list[TypedParameter]") -> str:
        segments = sql.split(QMARK_MARKER)
        expected = len(segments) - 1
        if expected != len(parameters):
            msg = f"Query has {expected} '?' placeholder(s) but {len(parameters)} argument(s) were supplied"
            raise ParameterCountError(msg, sql)

        parts = [segments[0]]
        for parameter, segment in zip(parameters, segments[1:]):
            parts.append(self._render_qmark(parameter))
            parts.append(segment)
        return "".join(parts)

    def _convert_numeric(self, sql: str, parameters: "list[TypedParameter]") -> RewriteResult:
        query = sql
        position = 0
        match = _NUMERIC_PLACEHOLDER.search(query, position)
        while match is not None:
            marker = match.group()
            try:
                index = int(marker[1:])
            except ValueError as exc:
                if self.config.strict_parsing:
                    msg = f"Matched {marker[:32]} as a placeholder but cannot get index"
                    raise PlaceholderParseError(msg, sql) from exc
                logger.warning("Matched %s as a placeholder but cannot get index: %s", marker[:32], exc)
                return RewriteResult(query, ParameterStyle.NUMERIC, complete=False, error=str(exc))

            if index < 1 or index > len(parameters):
                msg = f"Placeholder {marker} refers to argument {index} but {len(parameters)} were supplied"
                raise PlaceholderIndexError(msg, sql)

            value = self._render_numeric(parameters[index - 1], query, match.start())
            logger.debug("Replacing %s with %s", marker, value)
            query = query[: match.start()] + value + query[match.end() :]
            # Inserted text is never rescanned for placeholders.
            position = match.start() + len(value)
            match = _NUMERIC_PLACEHOLDER.search(query, position)

        return RewriteResult(query, ParameterStyle.NUMERIC)

    def _render_qmark(self, parameter: TypedParameter) -> str:
        if self.config.literal_style is LiteralStyle.ESCAPED:
            return self.to_literal(parameter)
        text = parameter.render()
        if " " in text:
            return f"{_QUOTE}{text}{_QUOTE}"
        return text

    def _render_numeric(self, parameter: TypedParameter, query: str, start: int) -> str:
        if self.config.literal_style is LiteralStyle.ESCAPED:
            return self.to_literal(parameter)
        if not parameter.is_text:
            return parameter.render()
        if self.config.local_quote_context:
            already_quoted = start > 0 and query[start - 1] == _QUOTE
        else:
            already_quoted = query.endswith(_QUOTE)
        if already_quoted:
            return parameter.render()
        return f"{_QUOTE}{parameter.render()}{_QUOTE}"

    def to_literal(self, parameter: TypedParameter) -> str:
        """Render ``parameter`` as a standard SQL literal with sqlglot.

        Args:
            parameter: Tagged argument

        Returns:
            SQL text in the configured dialect.
        """
        node: exp.Expression
        if parameter.kind is ArgumentKind.NULL:
            node = exp.null()
        elif parameter.kind is ArgumentKind.BOOLEAN:
            node = exp.Boolean(this=bool(parameter.value))
        elif parameter.kind in {ArgumentKind.INTEGER, ArgumentKind.FLOAT}:
            node = exp.Literal.number(parameter.render())
        else:
            node = exp.Literal.string(parameter.render())
        return node.sql(dialect=self.config.dialect)


def rewrite_query(sql: str, parameters: "Sequence[Any]", config: Optional[ParameterConfig] = None) -> str:
    """Produce the literal query for ``sql`` and ``parameters``.

    Args:
        sql: Query template
        parameters: Bound arguments
        config: Optional rewriting configuration

    Returns:
        The literal query. Partially rewritten when an index could not be parsed.
    """
    return ParameterConverter(config).convert(sql, parameters).sql
