"""Token and AST data classes for parsed filter queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenKind(Enum):
    """Lexical categories produced by the tokenizer."""

    FILTER = "FILTER"
    AND = "AND"
    OR = "OR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """One lexical unit.

    ``text`` is the raw source slice (``" "`` for an implicit AND). For
    FILTER tokens ``field``, ``value`` and ``negated`` carry the decoded
    condition; ``value`` has quotes and escapes already removed.
    """

    kind: TokenKind
    text: str
    start: int
    end: int
    field: str | None = None
    value: str | None = None
    negated: bool = False

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)


# ---------------------------------------------------------------------------
# AST variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Condition:
    """A leaf ``field:value`` test, optionally negated (``-field:value``)."""

    field: str
    value: str
    negated: bool = False


@dataclass(frozen=True)
class And:
    """Both sides must match. Chains are left-associative."""

    left: ASTNode
    right: ASTNode


@dataclass(frozen=True)
class Or:
    """Either side may match. Chains are left-associative."""

    left: ASTNode
    right: ASTNode


@dataclass(frozen=True)
class Group:
    """Explicit parentheses around *inner*.

    Semantically transparent; kept so the canonical query reproduces the
    user's grouping.
    """

    inner: ASTNode


ASTNode = Condition | And | Or | Group


# ---------------------------------------------------------------------------
# Flattened view
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FilterChip:
    """One atomic condition as shown and edited in a chip list.

    Chips are derived from an AST (or rendered back into a query); ``id`` is
    unique within the process but carries no positional meaning.
    """

    id: str
    field: str
    value: str
    negated: bool
    label: str


@dataclass
class ParseResult:
    """Outcome of parsing a filter query.

    On failure ``ast`` is None, ``conditions`` is empty and ``error`` /
    ``error_offset`` describe where recognition stopped.
    """

    success: bool
    ast: ASTNode | None = None
    conditions: list[FilterChip] = field(default_factory=list)
    error: str | None = None
    error_offset: int | None = None
