"""Token model for the query language.

Numeric literals are carried as raw text; conversion happens in the parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenType(Enum):
    """Lexical categories."""

    ILLEGAL = auto()
    EOF = auto()

    # Literal carriers
    IDENT = auto()  # foo, bar.baz, $meta
    INT = auto()  # 123456
    FLOAT = auto()  # 123.456
    STR = auto()  # "hello"
    TRUE = auto()
    FALSE = auto()

    # Query
    AND = auto()
    OR = auto()
    PLUS = auto()
    MINUS = auto()
    SORT = auto()
    SELECT = auto()
    VALUES = auto()
    AGGREGATE = auto()
    DISTINCT = auto()
    IN = auto()
    OUT = auto()
    CONTAINS = auto()
    EXCLUDES = auto()
    LIMIT = auto()

    # Comparators
    EQ = auto()
    NOT_EQ = auto()
    LE = auto()
    GE = auto()
    LT = auto()
    GT = auto()

    # Punctuation
    COMMA = auto()
    LPAREN = auto()
    RPAREN = auto()


KEYWORDS: dict[str, TokenType] = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "eq": TokenType.EQ,
    "ne": TokenType.NOT_EQ,
    "le": TokenType.LE,
    "ge": TokenType.GE,
    "lt": TokenType.LT,
    "gt": TokenType.GT,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "sort": TokenType.SORT,
    "select": TokenType.SELECT,
    "values": TokenType.VALUES,
    "aggregate": TokenType.AGGREGATE,
    "distinct": TokenType.DISTINCT,
    "in": TokenType.IN,
    "out": TokenType.OUT,
    "contains": TokenType.CONTAINS,
    "excludes": TokenType.EXCLUDES,
    "limit": TokenType.LIMIT,
}

# Lexed keywords without a grammar rule yet
RESERVED_KEYWORDS = frozenset(
    [
        TokenType.SORT,
        TokenType.SELECT,
        TokenType.VALUES,
        TokenType.AGGREGATE,
        TokenType.DISTINCT,
        TokenType.IN,
        TokenType.OUT,
        TokenType.CONTAINS,
        TokenType.EXCLUDES,
        TokenType.LIMIT,
    ]
)

COMPARATORS = frozenset(
    [
        TokenType.EQ,
        TokenType.NOT_EQ,
        TokenType.LE,
        TokenType.GE,
        TokenType.LT,
        TokenType.GT,
    ]
)

_SURFACE: dict[TokenType, str] = {
    **{token_type: keyword for keyword, token_type in KEYWORDS.items()},
    TokenType.ILLEGAL: "ILLEGAL",
    TokenType.EOF: "EOF",
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.COMMA: ",",
    TokenType.LPAREN: "(",
    TokenType.RPAREN: ")",
}


@dataclass(frozen=True)
class Token:
    """A token from the query string.

    ``literal`` is only set for identifiers, numbers, strings and illegal
    characters. ``pos`` is the UTF-8 byte offset of the token in the input and
    is ignored by equality.
    """

    type: TokenType
    literal: str = ""
    pos: int = field(default=0, compare=False)

    def __str__(self) -> str:
        if self.type == TokenType.STR:
            return f'"{self.literal}"'
        if self.type in (TokenType.IDENT, TokenType.INT, TokenType.FLOAT):
            return self.literal
        return _SURFACE[self.type]

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.ILLEGAL:
            return f"illegal character {self.literal!r}"
        return f"'{self}'"


def lookup_ident(ident: str, pos: int = 0) -> Token:
    """Return the keyword token for ``ident``, or an IDENT token."""
    token_type = KEYWORDS.get(ident)
    if token_type is None:
        return Token(TokenType.IDENT, ident, pos)
    return Token(token_type, pos=pos)
