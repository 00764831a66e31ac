"""Flatten an AST into the chip list used by the visual query builder."""

from __future__ import annotations

import itertools

from issueflow.search.ast_nodes import And, ASTNode, Condition, FilterChip, Group, Or

_chip_ids = itertools.count(1)


def new_chip_id() -> str:
    """Return a fresh process-unique chip identifier."""
    return f"chip-{next(_chip_ids)}"


def chip_label(field: str, value: str, negated: bool = False) -> str:
    """Human-readable rendering of a condition, e.g. ``NOT label:bug``."""
    if negated:
        return f"NOT {field}:{value}"
    return f"{field}:{value}"


def make_chip(field: str, value: str, negated: bool = False) -> FilterChip:
    """Build a chip with a fresh id and its display label."""
    return FilterChip(
        id=new_chip_id(),
        field=field,
        value=value,
        negated=negated,
        label=chip_label(field, value, negated),
    )


def extract_conditions(ast: ASTNode) -> list[FilterChip]:
    """Collect every condition leaf in left-to-right order.

    Operators and grouping are not represented in the result; OR-ed and
    AND-ed conditions look the same. Each call assigns new ids.
    """
    chips: list[FilterChip] = []
    stack: list[ASTNode] = [ast]
    while stack:
        node = stack.pop()
        if isinstance(node, Condition):
            chips.append(make_chip(node.field, node.value, node.negated))
        elif isinstance(node, (And, Or)):
            stack.append(node.right)
            stack.append(node.left)
        elif isinstance(node, Group):
            stack.append(node.inner)
        else:
            raise TypeError(f"Not an AST node: {node!r}")
    return chips
