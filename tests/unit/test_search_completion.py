"""Unit tests for filter query completion."""

from __future__ import annotations

from issueflow.search.completion import complete_filter
from issueflow.search.fields import FILTER_FIELDS


class TestCompleteFilter:
    def test_empty_offers_all_fields(self) -> None:
        suggestions, prefix = complete_filter("")
        assert suggestions == [f"{f}:" for f in FILTER_FIELDS]
        assert prefix == ""

    def test_after_space_offers_all_fields(self) -> None:
        suggestions, prefix = complete_filter("label:bug ")
        assert len(suggestions) == len(FILTER_FIELDS)
        assert prefix == ""

    def test_field_prefix(self) -> None:
        suggestions, prefix = complete_filter("a")
        assert suggestions == ["author:", "assignee:"]
        assert prefix == "a"

    def test_field_prefix_case_insensitive(self) -> None:
        suggestions, _ = complete_filter("LA")
        assert suggestions == ["label:"]

    def test_negated_field_prefix(self) -> None:
        suggestions, prefix = complete_filter("-st")
        assert suggestions == ["state:"]
        assert prefix == "st"

    def test_unknown_field_prefix(self) -> None:
        suggestions, _ = complete_filter("xyz")
        assert suggestions == []

    def test_state_values(self) -> None:
        suggestions, prefix = complete_filter("state:")
        assert suggestions == ["open", "closed"]
        assert prefix == ""

    def test_is_values_with_partial(self) -> None:
        suggestions, prefix = complete_filter("label:bug is:p")
        assert suggestions == ["pr"]
        assert prefix == "p"

    def test_free_form_field_has_no_values(self) -> None:
        suggestions, _ = complete_filter("label:")
        assert suggestions == []

    def test_cursor_in_middle(self) -> None:
        suggestions, prefix = complete_filter("state:o label:bug", cursor=7)
        assert suggestions == ["open"]
        assert prefix == "o"
