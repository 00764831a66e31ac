"""Order issue collections by relevance, date, comments or reactions."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from issueflow.exceptions import ValidationError
from issueflow.ranking.freshness import as_utc, utc_now
from issueflow.ranking.models import Issue
from issueflow.ranking.relevance import score, total_reaction_count

logger = logging.getLogger(__name__)

LOW_COMMENT_THRESHOLD = 5


class SortCriterion(Enum):
    """What to sort issues by."""

    RELEVANCE = "relevance"
    DATE = "date"
    COMMENTS = "comments"
    REACTIONS = "reactions"


class SortDirection(Enum):
    """Ascending or descending order."""

    ASC = "asc"
    DESC = "desc"


# comments ascends by default: low-discussion issues are easier entry points.
DEFAULT_DIRECTIONS: dict[SortCriterion, SortDirection] = {
    SortCriterion.RELEVANCE: SortDirection.DESC,
    SortCriterion.DATE: SortDirection.DESC,
    SortCriterion.COMMENTS: SortDirection.ASC,
    SortCriterion.REACTIONS: SortDirection.DESC,
}

SORT_CRITERION_LABELS: dict[SortCriterion, str] = {
    SortCriterion.RELEVANCE: "Relevance",
    SortCriterion.DATE: "Date Created",
    SortCriterion.COMMENTS: "Comments",
    SortCriterion.REACTIONS: "Reactions",
}


def to_criterion(value: SortCriterion | str) -> SortCriterion:
    """Coerce a criterion name to :class:`SortCriterion`.

    Raises:
        ValidationError: If *value* names no criterion.
    """
    if isinstance(value, SortCriterion):
        return value
    try:
        return SortCriterion(value)
    except ValueError:
        choices = ", ".join(c.value for c in SortCriterion)
        raise ValidationError("sort criterion", value, f"expected one of {choices}") from None


def to_direction(value: SortDirection | str) -> SortDirection:
    """Coerce a direction name to :class:`SortDirection`.

    Raises:
        ValidationError: If *value* is neither ``asc`` nor ``desc``.
    """
    if isinstance(value, SortDirection):
        return value
    try:
        return SortDirection(value)
    except ValueError:
        raise ValidationError("sort direction", value, "expected asc or desc") from None


def default_direction(criterion: SortCriterion | str) -> SortDirection:
    """Return the natural direction for *criterion*."""
    return DEFAULT_DIRECTIONS[to_criterion(criterion)]


def _sort_key(criterion: SortCriterion, now: datetime) -> Callable[[Issue], float]:
    if criterion is SortCriterion.RELEVANCE:
        return lambda issue: score(issue, now)
    if criterion is SortCriterion.DATE:
        return lambda issue: (
            as_utc(issue.created_at).timestamp() if issue.created_at is not None else -math.inf
        )
    if criterion is SortCriterion.COMMENTS:
        return lambda issue: issue.comment_count or 0
    return total_reaction_count


def sort_issues(
    issues: Iterable[Issue],
    criterion: SortCriterion | str = SortCriterion.RELEVANCE,
    direction: SortDirection | str | None = None,
    *,
    now: datetime | None = None,
) -> list[Issue]:
    """Return *issues* ordered by *criterion*.

    The input is never modified. The sort is stable, so issues with equal
    keys keep their input order in either direction.

    Args:
        issues: Issues to order.
        criterion: relevance, date, comments or reactions.
        direction: asc or desc; None picks the criterion's default.
        now: Reference time for relevance scores. One value is used for the
            whole call so every issue is scored against the same clock.

    Returns:
        New ordered list.
    """
    criterion = to_criterion(criterion)
    direction = default_direction(criterion) if direction is None else to_direction(direction)
    key = _sort_key(criterion, now or utc_now())
    logger.debug("Sorting by %s %s", criterion.value, direction.value)
    return sorted(issues, key=key, reverse=direction is SortDirection.DESC)


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SortPreferences:
    """A user's chosen sort order."""

    by: SortCriterion = SortCriterion.RELEVANCE
    direction: SortDirection = SortDirection.DESC


DEFAULT_SORT_PREFERENCES = SortPreferences()


def validate_sort_preferences(data: object) -> SortPreferences:
    """Normalise stored preferences.

    Accepts a mapping with ``by`` (or ``sortBy``) and ``direction`` keys.
    Missing or invalid parts fall back to the defaults independently.
    """
    if not isinstance(data, Mapping):
        return DEFAULT_SORT_PREFERENCES

    by = DEFAULT_SORT_PREFERENCES.by
    raw_by = data.get("by", data.get("sortBy"))
    if isinstance(raw_by, str) and raw_by in {c.value for c in SortCriterion}:
        by = SortCriterion(raw_by)

    direction = DEFAULT_SORT_PREFERENCES.direction
    raw_direction = data.get("direction")
    if isinstance(raw_direction, str) and raw_direction in {d.value for d in SortDirection}:
        direction = SortDirection(raw_direction)

    return SortPreferences(by=by, direction=direction)


def sort_by_preferences(
    issues: Iterable[Issue], preferences: SortPreferences, *, now: datetime | None = None
) -> list[Issue]:
    return sort_issues(issues, preferences.by, preferences.direction, now=now)


# ---------------------------------------------------------------------------
# Comment activity
# ---------------------------------------------------------------------------


class CommentLevel(Enum):
    """Comment activity buckets: zero, low (1-5), active (6+ or unknown)."""

    ZERO = "zero"
    LOW = "low"
    ACTIVE = "active"


def comment_level(issue: Issue) -> CommentLevel:
    count = issue.comment_count
    if count is None:
        return CommentLevel.ACTIVE
    if count == 0:
        return CommentLevel.ZERO
    if count <= LOW_COMMENT_THRESHOLD:
        return CommentLevel.LOW
    return CommentLevel.ACTIVE


def is_zero_comment(issue: Issue) -> bool:
    """True only when the comment count is known to be zero."""
    return issue.comment_count == 0


def filter_zero_comment(issues: Iterable[Issue]) -> list[Issue]:
    return [issue for issue in issues if is_zero_comment(issue)]


def filter_by_comment_level(issues: Iterable[Issue], level: CommentLevel) -> list[Issue]:
    return [issue for issue in issues if comment_level(issue) is level]


def count_zero_comment(issues: Iterable[Issue]) -> int:
    return sum(1 for issue in issues if is_zero_comment(issue))
