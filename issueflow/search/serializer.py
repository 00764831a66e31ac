"""Render ASTs and chip lists back into canonical query text."""

from __future__ import annotations

import re
from collections.abc import Iterable

from issueflow.search.ast_nodes import And, ASTNode, Condition, FilterChip, Group, Or

# Values containing any of these must be quoted to survive re-tokenizing.
_NEEDS_QUOTES = re.compile(r"[\s,()\"']")


def quote_value(value: str) -> str:
    """Quote *value* if the tokenizer would otherwise split or drop it."""
    if not _NEEDS_QUOTES.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_condition(field: str, value: str, negated: bool = False) -> str:
    prefix = "-" if negated else ""
    return f"{prefix}{field}:{quote_value(value)}"


def to_canonical_query(ast: ASTNode) -> str:
    """Render an AST as canonical query text.

    Space is AND, comma is OR, parentheses are kept exactly where the AST
    has a Group node.
    """
    if isinstance(ast, Condition):
        return render_condition(ast.field, ast.value, ast.negated)
    if isinstance(ast, And):
        return f"{to_canonical_query(ast.left)} {to_canonical_query(ast.right)}"
    if isinstance(ast, Or):
        return f"{to_canonical_query(ast.left)},{to_canonical_query(ast.right)}"
    if isinstance(ast, Group):
        return f"({to_canonical_query(ast.inner)})"
    raise TypeError(f"Not an AST node: {ast!r}")


def chips_to_query(chips: Iterable[FilterChip]) -> str:
    """Render a chip list as a conjunction.

    The visual builder only authors AND-ed conditions, so a query that used
    OR or grouping does not come back unchanged from
    ``extract_conditions`` followed by this function.
    """
    return " ".join(render_condition(c.field, c.value, c.negated) for c in chips)
