"""Tokenize filter queries.

Syntax:
    - ``field:value`` is a condition; ``field`` must be a known filter field
    - whitespace between conditions is an implicit AND, ``AND`` is explicit
    - ``,`` and the keyword ``OR`` are OR
    - a leading ``-`` negates a condition (``-label:bug``)
    - ``(`` and ``)`` group
    - values may be quoted with ``"`` or ``'``; ``\\`` escapes inside quotes

The tokenizer is lenient: unknown fields, stray characters and bare words
are dropped rather than reported. Dropped input is logged at DEBUG.
"""

from __future__ import annotations

import logging

from issueflow.search.ast_nodes import Token, TokenKind
from issueflow.search.fields import is_filter_field

logger = logging.getLogger(__name__)

_QUOTES = frozenset("\"'")
# Characters that end a bare word.
_WORD_BREAKS = frozenset(",()\"'")
_KEYWORDS = {"AND": TokenKind.AND, "OR": TokenKind.OR}


def _starts_with_letter(text: str, pos: int) -> bool:
    return pos < len(text) and text[pos].isascii() and text[pos].isalpha()


class _Lexer:
    """Single-use scanner over one query string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.tokens: list[Token] = []
        # Whitespace span waiting to become an implicit AND once the next
        # recognised operand (a condition or "(") shows up.
        self._pending_and: tuple[int, int] | None = None

    def run(self) -> list[Token]:
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            start = self.pos
            if char.isspace():
                self._whitespace()
            elif char == "(":
                self.pos += 1
                self._emit(Token(TokenKind.LPAREN, "(", start, self.pos))
            elif char == ")":
                self.pos += 1
                self._emit(Token(TokenKind.RPAREN, ")", start, self.pos))
            elif char == ",":
                self.pos += 1
                self._emit(Token(TokenKind.OR, ",", start, self.pos))
            elif char in _QUOTES:
                literal = self._read_quoted()
                logger.debug("Dropping bare quoted text %r at offset %d", literal, start)
            else:
                self._word(start)

        self.tokens.append(Token(TokenKind.EOF, "", self.pos, self.pos))
        return self.tokens

    # -- emitters -----------------------------------------------------------

    def _emit(self, token: Token) -> None:
        pending = self._pending_and
        self._pending_and = None
        if pending is not None and token.kind in (TokenKind.FILTER, TokenKind.LPAREN):
            start, end = pending
            self.tokens.append(Token(TokenKind.AND, self.text[start:end], start, end))
        self.tokens.append(token)

    def _whitespace(self) -> None:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1
        if not self.tokens:
            return
        if self.tokens[-1].kind in (TokenKind.FILTER, TokenKind.RPAREN):
            self._pending_and = (start, self.pos)

    # -- readers ------------------------------------------------------------

    def _read_word(self) -> str:
        text = self.text
        start = self.pos
        while (
            self.pos < len(text)
            and not text[self.pos].isspace()
            and text[self.pos] not in _WORD_BREAKS
        ):
            self.pos += 1
        return text[start : self.pos]

    def _read_quoted(self) -> str:
        """Read a quoted literal starting at the opening quote.

        An unterminated literal runs to the end of the input.
        """
        text = self.text
        quote = text[self.pos]
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(text) and text[self.pos] != quote:
            if text[self.pos] == "\\" and self.pos + 1 < len(text):
                self.pos += 1
            chars.append(text[self.pos])
            self.pos += 1
        if self.pos < len(text):
            self.pos += 1  # closing quote
        return "".join(chars)

    def _word(self, start: int) -> None:
        text = self.text
        negated = text[start] == "-" and _starts_with_letter(text, start + 1)
        if negated:
            self.pos += 1

        word = self._read_word()

        if not negated and word.upper() in _KEYWORDS:
            self._emit(Token(_KEYWORDS[word.upper()], word, start, self.pos))
            return

        name, sep, value = word.partition(":")
        if not sep:
            logger.debug("Dropping bare word %r at offset %d", text[start : self.pos], start)
            return

        if not value and self.pos < len(text) and text[self.pos] in _QUOTES:
            value = self._read_quoted()

        if not is_filter_field(name):
            logger.debug("Dropping unknown field %r at offset %d", name, start)
            return

        self._emit(
            Token(
                TokenKind.FILTER,
                text[start : self.pos],
                start,
                self.pos,
                field=name,
                value=value,
                negated=negated,
            )
        )


def tokenize(text: str) -> list[Token]:
    """Convert a raw query string into a token stream.

    Never raises. The result always ends with a single EOF token whose
    offset is the length of the input.

    Args:
        text: The query as typed by the user.

    Returns:
        Tokens in source order.
    """
    return _Lexer(text).run()
