"""Unit tests for the filter query parser."""

from __future__ import annotations

import pytest

from issueflow.search.ast_nodes import And, Condition, Group, Or, Token, TokenKind
from issueflow.search.lexer import tokenize
from issueflow.search.parser import (
    INVALID_QUERY_MESSAGE,
    parse,
    parse_filter_query,
    validate_filter_query,
)


def _parse(text: str):
    return parse(tokenize(text))


# ---------------------------------------------------------------------------
# AST shape
# ---------------------------------------------------------------------------


class TestParse:
    def test_single_condition(self) -> None:
        assert _parse("label:bug") == Condition("label", "bug")

    def test_implicit_and(self) -> None:
        assert _parse("label:bug author:alice") == And(
            Condition("label", "bug"), Condition("author", "alice")
        )

    def test_comma_or(self) -> None:
        assert _parse("label:bug,label:feature") == Or(
            Condition("label", "bug"), Condition("label", "feature")
        )

    def test_negated(self) -> None:
        assert _parse("-author:bob") == Condition("author", "bob", negated=True)

    def test_grouped_or_and_condition(self) -> None:
        assert _parse("(label:bug OR label:feature) state:open") == And(
            Group(Or(Condition("label", "bug"), Condition("label", "feature"))),
            Condition("state", "open"),
        )

    def test_and_binds_tighter_than_or(self) -> None:
        assert _parse("label:a label:b,label:c") == Or(
            And(Condition("label", "a"), Condition("label", "b")),
            Condition("label", "c"),
        )

    def test_or_is_left_associative(self) -> None:
        assert _parse("label:a,label:b,label:c") == Or(
            Or(Condition("label", "a"), Condition("label", "b")),
            Condition("label", "c"),
        )

    def test_and_is_left_associative(self) -> None:
        assert _parse("label:a label:b label:c") == And(
            And(Condition("label", "a"), Condition("label", "b")),
            Condition("label", "c"),
        )

    def test_nested_groups(self) -> None:
        assert _parse("((label:a))") == Group(Group(Condition("label", "a")))

    def test_unclosed_group_is_tolerated(self) -> None:
        assert _parse("(label:bug OR label:feature") == Group(
            Or(Condition("label", "bug"), Condition("label", "feature"))
        )

    def test_trailing_operator_ignored(self) -> None:
        assert _parse("label:bug OR") == Condition("label", "bug")
        assert _parse("label:bug AND") == Condition("label", "bug")

    @pytest.mark.parametrize("text", ["OR label:x", ",label:x", "AND label:x", ") label:x"])
    def test_leading_junk_skipped(self, text: str) -> None:
        assert _parse(text) == Condition("label", "x")

    def test_unmatched_close_paren_splits_into_and(self) -> None:
        assert _parse("label:bug ) label:x") == And(
            Condition("label", "bug"), Condition("label", "x")
        )

    def test_doubled_comma_is_single_or(self) -> None:
        assert _parse("label:a,,label:b") == Or(Condition("label", "a"), Condition("label", "b"))

    def test_mixed_operators_use_the_first(self) -> None:
        assert _parse("label:a AND OR label:b") == And(
            Condition("label", "a"), Condition("label", "b")
        )

    def test_empty_group_skipped(self) -> None:
        assert _parse("() label:bug") == Condition("label", "bug")
        assert _parse("label:a () label:b") == And(
            Condition("label", "a"), Condition("label", "b")
        )

    def test_stray_operator_inside_group_skipped(self) -> None:
        assert _parse("(, label:a) label:b") == And(
            Group(Condition("label", "a")), Condition("label", "b")
        )

    def test_recovered_pieces_are_grouped(self) -> None:
        assert _parse("label:a,label:b ) label:c") == And(
            Group(Or(Condition("label", "a"), Condition("label", "b"))),
            Condition("label", "c"),
        )
        assert _parse("label:a ) label:b label:c") == And(
            Condition("label", "a"),
            Group(And(Condition("label", "b"), Condition("label", "c"))),
        )

    @pytest.mark.parametrize(
        "text", ["", "   ", "crash", "milestone:v1", "()", "(())", "OR", ") ,", "crash AND"]
    )
    def test_no_usable_condition_is_none(self, text: str) -> None:
        assert _parse(text) is None

    def test_empty_token_list(self) -> None:
        assert parse([]) is None

    def test_missing_eof_is_tolerated(self) -> None:
        tokens = [Token(TokenKind.FILTER, "label:bug", 0, 9, field="label", value="bug")]
        assert parse(tokens) == Condition("label", "bug")


# ---------------------------------------------------------------------------
# parse_filter_query
# ---------------------------------------------------------------------------


class TestParseFilterQuery:
    def test_two_anded_conditions(self) -> None:
        result = parse_filter_query("label:bug author:alice")
        assert result.success is True
        assert result.error is None
        assert isinstance(result.ast, And)
        assert [(c.field, c.value) for c in result.conditions] == [
            ("label", "bug"),
            ("author", "alice"),
        ]

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_input_is_no_filter(self, text: str) -> None:
        result = parse_filter_query(text)
        assert result.success is True
        assert result.ast is None
        assert result.conditions == []

    def test_unrecognised_input_fails(self) -> None:
        result = parse_filter_query("just some words")
        assert result.success is False
        assert result.ast is None
        assert result.conditions == []
        assert result.error == INVALID_QUERY_MESSAGE
        assert result.error_offset == 0

    def test_error_offset_skips_leading_blanks(self) -> None:
        result = parse_filter_query("   nothing")
        assert result.error_offset == 3

    def test_error_offset_points_at_first_token(self) -> None:
        result = parse_filter_query("crash ) ,")
        assert result.success is False
        assert result.error_offset == 6

    @pytest.mark.parametrize(
        ("text", "labels"),
        [
            (",label:bug", ["label:bug"]),
            ("() label:bug", ["label:bug"]),
            ("label:bug ) label:x", ["label:bug", "label:x"]),
            ("label:bug,,label:x", ["label:bug", "label:x"]),
        ],
    )
    def test_recovers_every_condition(self, text: str, labels: list[str]) -> None:
        result = parse_filter_query(text)
        assert result.success is True
        assert result.error is None
        assert [c.label for c in result.conditions] == labels

    def test_negated_condition_chip(self) -> None:
        result = parse_filter_query("-author:bob")
        assert len(result.conditions) == 1
        chip = result.conditions[0]
        assert chip.negated is True
        assert chip.label == "NOT author:bob"


class TestValidateFilterQuery:
    def test_valid(self) -> None:
        assert validate_filter_query("label:bug") == (True, None)

    def test_blank_is_valid(self) -> None:
        assert validate_filter_query("") == (True, None)

    def test_invalid(self) -> None:
        assert validate_filter_query("bug") == (False, INVALID_QUERY_MESSAGE)
