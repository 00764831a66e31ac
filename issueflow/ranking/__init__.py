"""Relevance scoring and sorting of issue collections."""

from issueflow.ranking.models import Issue, load_issues
from issueflow.ranking.relevance import ScoredIssue, score, score_breakdown, score_issues
from issueflow.ranking.sorting import (
    SortCriterion,
    SortDirection,
    SortPreferences,
    default_direction,
    sort_issues,
)

__all__ = [
    "Issue",
    "ScoredIssue",
    "SortCriterion",
    "SortDirection",
    "SortPreferences",
    "default_direction",
    "load_issues",
    "score",
    "score_breakdown",
    "score_issues",
    "sort_issues",
]
