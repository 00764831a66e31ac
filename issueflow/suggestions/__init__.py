"""Repository suggestions from search history and popular projects."""

from issueflow.suggestions.history import HistoryRecord, load_history, record_search
from issueflow.suggestions.ranker import Suggestion, highlight_match, rank_suggestions

__all__ = [
    "HistoryRecord",
    "Suggestion",
    "highlight_match",
    "load_history",
    "rank_suggestions",
    "record_search",
]
