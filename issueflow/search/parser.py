"""Parse filter query tokens into an AST.

Grammar, lowest precedence first::

    query    := or_expr*
    or_expr  := and_expr (OR and_expr)*
    and_expr := atom (AND atom)*
    atom     := FILTER | "(" or_expr* ")"

Both operators are left-associative. Negation lives on the FILTER token.

Parsing is lenient. Operators with nothing on their left, repeated
operators, stray ``)`` and empty groups are skipped, and the expressions
found around them are ANDed together.
"""

from __future__ import annotations

import logging

from issueflow.search.ast_nodes import (
    And,
    ASTNode,
    Condition,
    Group,
    Or,
    ParseResult,
    Token,
    TokenKind,
)
from issueflow.search.conditions import extract_conditions
from issueflow.search.lexer import tokenize

logger = logging.getLogger(__name__)

INVALID_QUERY_MESSAGE = "Invalid filter query"

_OPERATORS = (TokenKind.AND, TokenKind.OR)


def _join(pieces: list[ASTNode]) -> ASTNode | None:
    """AND recovered expressions together, left to right.

    Pieces are wrapped in a Group where the canonical text would otherwise
    regroup them: an OR on the left, any operator on the right.
    """
    if not pieces:
        return None
    first, *rest = pieces
    result = Group(first) if isinstance(first, Or) else first
    for piece in rest:
        result = And(result, Group(piece) if isinstance(piece, (And, Or)) else piece)
    return result


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        end = self.tokens[-1].end if self.tokens else 0
        return Token(TokenKind.EOF, "", end, end)

    def advance(self) -> Token:
        token = self.peek()
        self.pos += 1
        return token

    def skip_operators(self) -> None:
        while self.peek().kind in _OPERATORS:
            token = self.advance()
            logger.debug("Skipping stray operator %r at offset %d", token.text, token.start)

    def parse_sequence(self, in_group: bool = False) -> ASTNode | None:
        """Parse expressions until EOF, or the closing ``)`` of a group.

        Stray operators are skipped between expressions; at the top level a
        stray ``)`` is skipped as well. Recovered expressions are ANDed.
        """
        pieces: list[ASTNode] = []
        while True:
            self.skip_operators()
            token = self.peek()
            if token.kind is TokenKind.EOF:
                break
            if token.kind is TokenKind.RPAREN:
                if in_group:
                    break
                self.advance()
                logger.debug("Skipping unmatched ')' at offset %d", token.start)
                continue

            start = self.pos
            node = self.parse_or()
            if node is not None:
                pieces.append(node)
            elif self.pos == start:
                # Nothing consumed; drop the token so the loop makes progress.
                self.advance()
        return _join(pieces)

    def parse_or(self) -> ASTNode | None:
        left = self.parse_and()
        if left is None:
            return None
        while self.peek().kind is TokenKind.OR:
            self.advance()
            self.skip_operators()
            right = self.parse_and()
            if right is None:
                break
            left = Or(left, right)
        return left

    def parse_and(self) -> ASTNode | None:
        left = self.parse_atom()
        if left is None:
            return None
        while self.peek().kind is TokenKind.AND:
            self.advance()
            self.skip_operators()
            right = self.parse_atom()
            if right is None:
                break
            left = And(left, right)
        return left

    def parse_atom(self) -> ASTNode | None:
        token = self.peek()

        if token.kind is TokenKind.FILTER:
            self.advance()
            return Condition(token.field or "", token.value or "", token.negated)

        if token.kind is TokenKind.LPAREN:
            self.advance()
            inner = self.parse_sequence(in_group=True)
            if self.peek().kind is TokenKind.RPAREN:
                self.advance()
            else:
                # Missing ")" is treated as if it were present.
                logger.debug("Unclosed group opened at offset %d", token.start)
            if inner is not None:
                return Group(inner)
            logger.debug("Skipping empty group at offset %d", token.start)

        return None


def parse(tokens: list[Token]) -> ASTNode | None:
    """Build an AST from a token stream.

    Returns None only when the tokens contain no usable condition, which
    means "no filter" rather than an error. Tokens that fit nowhere in the
    grammar are skipped and parsing resumes after them.
    """
    return _Parser(tokens).parse_sequence()


def _error_offset(text: str, tokens: list[Token]) -> int:
    """Offset where recognition stopped: the first token, or the first
    non-blank character when nothing was recognised at all."""
    first = tokens[0]
    if first.kind is not TokenKind.EOF:
        return first.start
    return len(text) - len(text.lstrip())


def parse_filter_query(text: str) -> ParseResult:
    """Tokenize, parse and flatten a filter query in one call.

    Blank input succeeds with no conditions. Input without any usable
    condition fails with ``error`` set; this function never raises.

    Args:
        text: The raw query.

    Returns:
        ParseResult carrying the AST and its flattened conditions.
    """
    if not text or not text.strip():
        return ParseResult(success=True)

    tokens = tokenize(text)
    ast = parse(tokens)
    if ast is None:
        return ParseResult(
            success=False,
            error=INVALID_QUERY_MESSAGE,
            error_offset=_error_offset(text, tokens),
        )

    return ParseResult(success=True, ast=ast, conditions=extract_conditions(ast))


def validate_filter_query(text: str) -> tuple[bool, str | None]:
    """Return ``(is_valid, error_message)`` for a query string."""
    result = parse_filter_query(text)
    return result.success, result.error
