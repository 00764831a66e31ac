"""Evaluate a filter AST against in-memory issues."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from issueflow.search.ast_nodes import And, ASTNode, Condition, Group, Or

if TYPE_CHECKING:
    from issueflow.ranking.models import Issue


def _label_matches(issue: Issue, value: str) -> bool:
    wanted = value.lower()
    return any(name.lower() == wanted for name in issue.labels)


def _author_matches(issue: Issue, value: str) -> bool:
    return issue.author is not None and issue.author.lower() == value.lower()


def _assignee_matches(issue: Issue, value: str) -> bool:
    wanted = value.lower()
    return any(login.lower() == wanted for login in issue.assignees)


def _state_matches(issue: Issue, value: str) -> bool:
    return issue.state.lower() == value.lower()


def _is_matches(issue: Issue, value: str) -> bool:
    """``is:`` accepts a state (open/closed) or a kind (issue/pr)."""
    wanted = value.lower()
    if wanted == "issue":
        return not issue.is_pull_request
    if wanted == "pr":
        return issue.is_pull_request
    return _state_matches(issue, wanted)


# Map filter field names to their predicates.
_FIELD_MATCHERS: dict[str, Callable[[Issue, str], bool]] = {
    "label": _label_matches,
    "author": _author_matches,
    "assignee": _assignee_matches,
    "state": _state_matches,
    "is": _is_matches,
}


def _condition_matches(cond: Condition, issue: Issue) -> bool:
    matcher = _FIELD_MATCHERS.get(cond.field)
    result = matcher(issue, cond.value) if matcher is not None else False
    return not result if cond.negated else result


def matches(ast: ASTNode | None, issue: Issue) -> bool:
    """Return True if *issue* satisfies *ast*. A None AST matches everything."""
    if ast is None:
        return True
    if isinstance(ast, Condition):
        return _condition_matches(ast, issue)
    if isinstance(ast, And):
        return matches(ast.left, issue) and matches(ast.right, issue)
    if isinstance(ast, Or):
        return matches(ast.left, issue) or matches(ast.right, issue)
    if isinstance(ast, Group):
        return matches(ast.inner, issue)
    raise TypeError(f"Not an AST node: {ast!r}")


def filter_issues(issues: Iterable[Issue], ast: ASTNode | None) -> list[Issue]:
    """Return the issues matching *ast*, in input order.

    Args:
        issues: Issues to filter; not modified.
        ast: Parsed query, or None for "no filter".

    Returns:
        New list of matching issues.
    """
    return [issue for issue in issues if matches(ast, issue)]
