"""Relevance scoring for issues.

The score favours beginner-friendly, fresh issues with community interest::

    score = reaction_score + freshness_bonus + label_bonus - comment_penalty

- reaction_score: positive reactions x 2, uncapped
- freshness_bonus: (30 - days_old) x 0.5, clamped to 0..15
- label_bonus: highest single bonus among the issue's labels
- comment_penalty: comments x 0.5, capped at 10

The freshness term depends on the current time, so scores are computed on
demand and never stored on the issue. Pass ``now`` for reproducible
results.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from issueflow.ranking.freshness import days_since, utc_now

if TYPE_CHECKING:
    from issueflow.ranking.models import Issue

REACTION_WEIGHT = 2
FRESHNESS_MAX = 15
FRESHNESS_DECAY_DAYS = 30
FRESHNESS_RATE = 0.5
COMMENT_PENALTY_RATE = 0.5
COMMENT_PENALTY_MAX = 10

POSITIVE_REACTIONS: frozenset[str] = frozenset({"THUMBS_UP", "HEART", "HOORAY", "ROCKET"})

# Lower-cased label name -> bonus. Bonuses do not stack.
BEGINNER_LABELS: dict[str, int] = {
    "good first issue": 15,
    "good-first-issue": 15,
    "first-timers-only": 15,
    "help wanted": 10,
    "help-wanted": 10,
    "beginner": 10,
    "beginner-friendly": 10,
    "up-for-grabs": 10,
    "easy": 5,
    "starter": 5,
}


@dataclass(frozen=True)
class ScoreBreakdown:
    """Individual components of a relevance score."""

    reaction_score: float
    freshness_bonus: float
    label_bonus: float
    comment_penalty: float

    @property
    def total(self) -> float:
        return self.reaction_score + self.freshness_bonus + self.label_bonus - self.comment_penalty


def positive_reaction_count(issue: Issue) -> int:
    """Count thumbs-up, heart, hooray and rocket reactions."""
    return sum(
        count for kind, count in issue.reactions.items() if kind.upper() in POSITIVE_REACTIONS
    )


def total_reaction_count(issue: Issue) -> int:
    """Count reactions of every kind."""
    return sum(issue.reactions.values())


def _freshness_bonus(issue: Issue, now: datetime) -> float:
    if issue.created_at is None:
        return 0.0
    raw = (FRESHNESS_DECAY_DAYS - days_since(issue.created_at, now)) * FRESHNESS_RATE
    return max(0.0, min(raw, FRESHNESS_MAX))


def _label_bonus(issue: Issue) -> float:
    return max((BEGINNER_LABELS.get(name.lower(), 0) for name in issue.labels), default=0)


def _comment_penalty(issue: Issue) -> float:
    raw = (issue.comment_count or 0) * COMMENT_PENALTY_RATE
    return max(0.0, min(raw, COMMENT_PENALTY_MAX))


def score_breakdown(issue: Issue, now: datetime | None = None) -> ScoreBreakdown:
    """Compute each relevance component for *issue*.

    Args:
        issue: The issue to score. Missing reactions, labels or comment
            counts contribute zero.
        now: Reference time for the freshness bonus; defaults to the
            current UTC time.
    """
    now = now or utc_now()
    return ScoreBreakdown(
        reaction_score=positive_reaction_count(issue) * REACTION_WEIGHT,
        freshness_bonus=_freshness_bonus(issue, now),
        label_bonus=_label_bonus(issue),
        comment_penalty=_comment_penalty(issue),
    )


def score(issue: Issue, now: datetime | None = None) -> float:
    """Relevance score for *issue*; may be negative."""
    return score_breakdown(issue, now).total


@dataclass(frozen=True)
class ScoredIssue:
    """An issue paired with the relevance score it had at scoring time."""

    issue: Issue
    relevance_score: float


def score_issues(issues: Iterable[Issue], now: datetime | None = None) -> list[ScoredIssue]:
    """Score every issue against a single reference time."""
    now = now or utc_now()
    return [ScoredIssue(issue, score(issue, now)) for issue in issues]
