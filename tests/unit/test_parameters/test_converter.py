"""Tests for placeholder substitution."""

import sys
from decimal import Decimal

import pytest

from sqlprep.exceptions import ParameterCountError, PlaceholderIndexError, PlaceholderParseError
from sqlprep.parameters import (
    LiteralStyle,
    ParameterConfig,
    ParameterConverter,
    ParameterStyle,
    count_parameters,
    rewrite_query,
)

requires_int_digit_limit = pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits") or sys.get_int_max_str_digits() == 0,
    reason="integer string conversion is unbounded on this interpreter",
)


def test_numeric_text_and_integer() -> None:
    result = rewrite_query("SELECT * FROM t WHERE a = $1 AND b = $2", ["x", 5])

    assert result == "SELECT * FROM t WHERE a = 'x' AND b = 5"


def test_qmark_quotes_only_values_with_spaces() -> None:
    result = rewrite_query("INSERT INTO t VALUES (?, ?)", ["hello world", 42])

    assert result == "INSERT INTO t VALUES ('hello world', 42)"


def test_qmark_preserves_segments_and_order() -> None:
    sql = "SELECT * FROM t WHERE a = ? AND b IN (?, ?) ORDER BY c"
    result = rewrite_query(sql, ["x", "y", "z"])

    assert result == "SELECT * FROM t WHERE a = x AND b IN (y, z) ORDER BY c"


def test_qmark_does_not_escape_embedded_quotes() -> None:
    assert rewrite_query("SELECT ?", ["it's here"]) == "SELECT 'it's here'"


def test_qmark_renders_null_and_booleans() -> None:
    assert rewrite_query("INSERT INTO t VALUES (?, ?, ?)", [None, False, 1.5]) == "INSERT INTO t VALUES (NULL, false, 1.5)"


def test_numeric_non_text_values_are_unquoted() -> None:
    result = rewrite_query("INSERT INTO t VALUES ($1, $2, $3, $4)", [None, True, 1.5, Decimal("2.50")])

    assert result == "INSERT INTO t VALUES (NULL, true, 1.5, 2.50)"


def test_numeric_out_of_order_and_repeated() -> None:
    result = rewrite_query("SELECT * FROM t WHERE b = $2 AND a = $1 OR c = $2", ["x", 7])

    assert result == "SELECT * FROM t WHERE b = 7 AND a = 'x' OR c = 7"


def test_numeric_repeated_text_marker() -> None:
    result = rewrite_query("SELECT * FROM t WHERE a = $1 OR b = $1", ["x"])

    assert result == "SELECT * FROM t WHERE a = 'x' OR b = 'x'"


def test_numeric_text_unquoted_when_query_ends_with_quote() -> None:
    result = rewrite_query("SELECT * FROM t WHERE a = $1 AND b = 'z'", ["x"])

    assert result == "SELECT * FROM t WHERE a = x AND b = 'z'"


def test_numeric_inserted_values_are_not_rescanned() -> None:
    assert rewrite_query("SELECT $1, $2", ["$2", "y"]) == "SELECT '$2', 'y'"


def test_numeric_index_out_of_range() -> None:
    with pytest.raises(PlaceholderIndexError) as exc_info:
        rewrite_query("SELECT * FROM t WHERE a = $3", ["a", "b"])

    assert "$3" in str(exc_info.value)
    assert exc_info.value.sql == "SELECT * FROM t WHERE a = $3"


def test_numeric_index_zero_is_out_of_range() -> None:
    with pytest.raises(PlaceholderIndexError):
        rewrite_query("SELECT $0", ["a"])


def test_placeholder_index_error_is_an_index_error() -> None:
    with pytest.raises(IndexError):
        rewrite_query("SELECT $2", ["a"])


def test_mismatched_qmark_count_falls_back_to_numeric() -> None:
    sql = "SELECT * FROM t WHERE a = ? AND b = ?"

    assert rewrite_query(sql, ["x"]) == sql


def test_no_placeholders_no_arguments() -> None:
    assert rewrite_query("SELECT 1", []) == "SELECT 1"


def test_numeric_template_without_arguments_is_unchanged() -> None:
    assert rewrite_query("SELECT * FROM t WHERE a = $1", []) == "SELECT * FROM t WHERE a = $1"


def test_convert_reports_style() -> None:
    converter = ParameterConverter()

    assert converter.convert("SELECT ?", [1]).style is ParameterStyle.QMARK
    assert converter.convert("SELECT $1", [1]).style is ParameterStyle.NUMERIC


@requires_int_digit_limit
def test_unparsable_index_returns_partial_query() -> None:
    marker = "$" + "9" * (sys.get_int_max_str_digits() + 1)
    sql = f"SELECT * FROM t WHERE a = $1 AND b = {marker}"

    result = ParameterConverter().convert(sql, ["x"])

    assert not result.complete
    assert result.error
    assert result.sql == f"SELECT * FROM t WHERE a = 'x' AND b = {marker}"


@requires_int_digit_limit
def test_unparsable_index_raises_when_strict() -> None:
    marker = "$" + "9" * (sys.get_int_max_str_digits() + 1)
    config = ParameterConfig(strict_parsing=True)

    with pytest.raises(PlaceholderParseError):
        rewrite_query(f"SELECT {marker}", ["x"], config)


def test_local_quote_context_looks_at_marker_site() -> None:
    sql = "SELECT * FROM t WHERE a = '$1' AND b = $2"

    assert rewrite_query(sql, ["x", 3]) == "SELECT * FROM t WHERE a = ''x'' AND b = 3"
    local = ParameterConfig(local_quote_context=True)
    assert rewrite_query(sql, ["x", 3], local) == "SELECT * FROM t WHERE a = 'x' AND b = 3"


def test_local_quote_context_quotes_bare_marker_before_trailing_literal() -> None:
    config = ParameterConfig(local_quote_context=True)

    result = rewrite_query("SELECT * FROM t WHERE a = $1 AND b = 'z'", ["x"], config)

    assert result == "SELECT * FROM t WHERE a = 'x' AND b = 'z'"


def test_unified_detection_rejects_qmark_count_mismatch() -> None:
    config = ParameterConfig(unified_style_detection=True)

    with pytest.raises(ParameterCountError):
        rewrite_query("SELECT * FROM t WHERE a = ? AND b = ?", ["x"], config)


def test_unified_detection_uses_counted_style() -> None:
    sql = "SELECT * FROM t WHERE a = $1"
    config = ParameterConfig(unified_style_detection=True)

    # Without unified detection zero arguments match zero "?" markers and
    # the template is returned as is.
    assert rewrite_query(sql, []) == sql
    with pytest.raises(PlaceholderIndexError):
        rewrite_query(sql, [], config)


def test_unified_detection_accepts_precomputed_profile() -> None:
    sql = "INSERT INTO t VALUES (?, ?)"
    converter = ParameterConverter(ParameterConfig(unified_style_detection=True))

    result = converter.convert(sql, ["hello world", 42], count_parameters(sql))

    assert result.sql == "INSERT INTO t VALUES ('hello world', 42)"


def test_escaped_literals_numeric() -> None:
    config = ParameterConfig(literal_style=LiteralStyle.ESCAPED)

    result = rewrite_query("SELECT * FROM t WHERE a = $1 AND b = $2", ["it's", 5], config)

    assert result == "SELECT * FROM t WHERE a = 'it''s' AND b = 5"


def test_escaped_literals_qmark() -> None:
    config = ParameterConfig(literal_style="escaped")

    result = rewrite_query("INSERT INTO t VALUES (?, ?, ?, ?)", ["O'Brien", None, True, "x"], config)

    assert result == "INSERT INTO t VALUES ('O''Brien', NULL, TRUE, 'x')"
