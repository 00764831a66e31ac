"""Rank repository suggestions for the search box.

History entries score by recency (100, 90, ... floored at 10); a static
list of popular repositories scores 0. History wins duplicates, results
are prefix-filtered and capped at ``MAX_SUGGESTIONS``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from jinja2 import Environment

from issueflow.suggestions.history import HistoryRecord

MAX_SUGGESTIONS = 5

HISTORY_TOP_SCORE = 100
HISTORY_SCORE_STEP = 10
HISTORY_MIN_SCORE = 10

# (owner, repo) pairs offered when history has nothing better.
POPULAR_REPOS: tuple[tuple[str, str], ...] = (
    ("facebook", "react"),
    ("microsoft", "vscode"),
    ("vercel", "next.js"),
    ("sveltejs", "svelte"),
    ("tailwindlabs", "tailwindcss"),
)

HIGHLIGHT_CLASS = "autocomplete-highlight"


class SuggestionOrigin(Enum):
    HISTORY = "history"
    POPULAR = "popular"


@dataclass(frozen=True)
class Suggestion:
    """One entry in the suggestion dropdown."""

    origin: SuggestionOrigin
    owner: str
    repo: str
    display_name: str
    score: int
    full_url: str = ""
    last_used: datetime | None = None
    use_count: int | None = None
    issue_count: int | None = None


def popular_suggestions() -> list[Suggestion]:
    return [
        Suggestion(
            origin=SuggestionOrigin.POPULAR,
            owner=owner,
            repo=repo,
            display_name=f"{owner}/{repo}",
            score=0,
            full_url=f"https://github.com/{owner}/{repo}",
        )
        for owner, repo in POPULAR_REPOS
    ]


def history_to_suggestion(record: HistoryRecord, index: int) -> Suggestion:
    """Convert the *index*-th most recent history record."""
    return Suggestion(
        origin=SuggestionOrigin.HISTORY,
        owner=record.owner,
        repo=record.repo,
        display_name=record.display_name,
        score=max(HISTORY_TOP_SCORE - HISTORY_SCORE_STEP * index, HISTORY_MIN_SCORE),
        full_url=record.full_url,
        last_used=record.last_searched,
        use_count=record.search_count,
        issue_count=record.issue_count,
    )


def filter_by_prefix(items: Iterable[Suggestion], query: str) -> list[Suggestion]:
    """Keep suggestions whose display name or bare repo name starts with *query*.

    Case-insensitive; a blank query keeps everything.
    """
    needle = query.strip().lower()
    if not needle:
        return list(items)
    return [
        item
        for item in items
        if item.display_name.lower().startswith(needle) or item.repo.lower().startswith(needle)
    ]


def rank_suggestions(history: Iterable[HistoryRecord], query: str = "") -> list[Suggestion]:
    """Merge history and popular repositories into at most five suggestions.

    Args:
        history: Past searches, most recent first.
        query: Text typed so far.

    Returns:
        Suggestions ordered by descending score; equal scores keep their
        merge order (history before popular).
    """
    candidates = [history_to_suggestion(r, i) for i, r in enumerate(history)]
    candidates.extend(popular_suggestions())

    seen: set[str] = set()
    unique: list[Suggestion] = []
    for item in candidates:
        key = item.display_name.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)

    matching = filter_by_prefix(unique, query)
    matching.sort(key=lambda s: s.score, reverse=True)
    return matching[:MAX_SUGGESTIONS]


# ---------------------------------------------------------------------------
# Highlighting
# ---------------------------------------------------------------------------

_env = Environment(autoescape=True)
# Segments alternate: even index is plain text, odd index is a match.
_HIGHLIGHT_TEMPLATE = _env.from_string(
    "{% for part in parts %}"
    "{% if loop.index0 is odd %}"
    '<mark class="{{ css_class }}">{{ part }}</mark>'
    "{% else %}{{ part }}{% endif %}"
    "{% endfor %}"
)


def highlight_match(text: str, query: str) -> str:
    """Return *text* as HTML with case-insensitive matches of *query* marked.

    Both the text and the matched portions are HTML-escaped, and the query
    is regex-escaped before it becomes a pattern, so neither input can
    inject markup or pattern syntax.
    """
    needle = query.strip()
    if not needle:
        parts = [text]
    else:
        pattern = re.compile(f"({re.escape(needle)})", re.IGNORECASE)
        parts = pattern.split(text)
    return _HIGHLIGHT_TEMPLATE.render(parts=parts, css_class=HIGHLIGHT_CLASS)
