"""The closed filter field vocabulary and its display tables.

Adding a field means updating ``FILTER_FIELDS`` and ``FIELD_LABELS``
together; the lexer drops any ``field:value`` word whose field is not
listed here.
"""

from __future__ import annotations

# Order matters: completion offers fields in this order.
FILTER_FIELDS: tuple[str, ...] = ("label", "author", "state", "is", "assignee")

FIELD_LABELS: dict[str, str] = {
    "label": "Label",
    "author": "Author",
    "state": "State",
    "is": "Is",
    "assignee": "Assignee",
}

STATE_VALUES: tuple[str, ...] = ("open", "closed")

IS_VALUES: tuple[str, ...] = ("open", "closed", "issue", "pr")

# Fields with a fixed value set, used for completion.
FIELD_VALUES: dict[str, tuple[str, ...]] = {
    "state": STATE_VALUES,
    "is": IS_VALUES,
}


def is_filter_field(name: str) -> bool:
    """Return True if *name* is a recognised filter field."""
    return name in FILTER_FIELDS
