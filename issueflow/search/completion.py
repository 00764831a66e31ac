"""Completion candidates for a partially typed filter query."""

from __future__ import annotations

import re

from issueflow.search.fields import FIELD_VALUES, FILTER_FIELDS

# The word under the cursor: optional "-", a field name, optional ":value".
_CURRENT_WORD = re.compile(r"-?(\w+)(?::(\w*))?$")


def complete_filter(text: str, cursor: int | None = None) -> tuple[list[str], str]:
    """Suggest completions for the word ending at *cursor*.

    Args:
        text: The query being edited.
        cursor: Cursor offset; defaults to the end of *text*.

    Returns:
        Tuple of (suggestions, prefix) where prefix is the already typed part
        the suggestions extend.
    """
    before = text if cursor is None else text[:cursor]
    match = _CURRENT_WORD.search(before)
    if match is None:
        return [f"{name}:" for name in FILTER_FIELDS], ""

    name = match.group(1)
    partial = match.group(2)

    if partial is None:
        prefix = name.lower()
        return [f"{f}:" for f in FILTER_FIELDS if f.startswith(prefix)], prefix

    prefix = partial.lower()
    values = FIELD_VALUES.get(name.lower(), ())
    return [v for v in values if v.startswith(prefix)], prefix
