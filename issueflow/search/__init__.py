"""Filter query language: tokenizer, parser, serializer and evaluation."""

from issueflow.search.ast_nodes import (
    And,
    ASTNode,
    Condition,
    FilterChip,
    Group,
    Or,
    ParseResult,
    Token,
    TokenKind,
)
from issueflow.search.completion import complete_filter
from issueflow.search.conditions import extract_conditions, make_chip
from issueflow.search.lexer import tokenize
from issueflow.search.parser import parse, parse_filter_query, validate_filter_query
from issueflow.search.query import filter_issues, matches
from issueflow.search.serializer import chips_to_query, to_canonical_query

__all__ = [
    "And",
    "ASTNode",
    "Condition",
    "FilterChip",
    "Group",
    "Or",
    "ParseResult",
    "Token",
    "TokenKind",
    "chips_to_query",
    "complete_filter",
    "extract_conditions",
    "filter_issues",
    "make_chip",
    "matches",
    "parse",
    "parse_filter_query",
    "to_canonical_query",
    "tokenize",
    "validate_filter_query",
]
