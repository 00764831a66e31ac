"""Unit tests for evaluating filter queries against issues."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from issueflow.ranking.models import Issue
from issueflow.search.ast_nodes import Condition
from issueflow.search.parser import parse_filter_query
from issueflow.search.query import filter_issues, matches


@pytest.fixture
def issues(make_issue: Callable[..., Issue]) -> list[Issue]:
    return [
        make_issue(1, labels=["bug"], author="alice", assignees=["carol"]),
        make_issue(2, labels=["Good First Issue", "docs"], author="bob"),
        make_issue(3, labels=["feature"], author="alice", state="closed"),
        make_issue(4, labels=["bug"], author="dave", is_pull_request=True),
    ]


def _numbers(issues: list[Issue], query: str) -> list[int]:
    result = parse_filter_query(query)
    assert result.success
    return [i.number for i in filter_issues(issues, result.ast)]


class TestMatches:
    def test_none_matches_everything(self, issues: list[Issue]) -> None:
        assert all(matches(None, issue) for issue in issues)

    def test_label(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "label:bug") == [1, 4]

    def test_label_case_insensitive(self, issues: list[Issue]) -> None:
        assert _numbers(issues, 'label:"good first issue"') == [2]

    def test_author(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "author:alice") == [1, 3]

    def test_assignee(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "assignee:carol") == [1]

    def test_state(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "state:closed") == [3]

    def test_is_pr(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "is:pr") == [4]

    def test_is_issue(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "is:issue") == [1, 2, 3]

    def test_is_state(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "is:open") == [1, 2, 4]

    def test_negation(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "-author:alice") == [2, 4]

    def test_and(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "label:bug author:alice") == [1]

    def test_or(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "label:feature,label:docs") == [2, 3]

    def test_group(self, issues: list[Issue]) -> None:
        assert _numbers(issues, "(label:bug OR label:feature) -is:pr") == [1, 3]

    def test_unknown_field_never_matches(self, issues: list[Issue]) -> None:
        assert not matches(Condition("milestone", "v1"), issues[0])
        assert matches(Condition("milestone", "v1", negated=True), issues[0])


class TestFilterIssues:
    def test_input_not_modified(self, issues: list[Issue]) -> None:
        before = list(issues)
        filter_issues(issues, Condition("label", "bug"))
        assert issues == before

    def test_empty(self) -> None:
        assert filter_issues([], Condition("label", "bug")) == []
