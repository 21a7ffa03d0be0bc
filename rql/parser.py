"""
Recursive descent parser for query strings.

Grammar::

    query       := and_expr | or_expr | filter_expr
    and_expr    := "and" "(" query_list ")"
    or_expr     := "or" "(" query_list ")"
    query_list  := ( query ( "," query )* )?
    filter_expr := cmp_op "(" identifier "," value ")"
    cmp_op      := "eq" | "ne" | "le" | "ge" | "lt" | "gt"
    value       := identifier | integer | float | string | boolean

Example:
    >>> str(parse('and(eq(foo,"test"),gt(bar.baz,100))'))
    'and(eq(foo,"test"),gt(bar.baz,100))'

The first error aborts the parse.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from .exceptions import (
    ExpectedBooleanTokenError,
    ExpectedCommaError,
    ExpectedFilterTokenError,
    ExpectedFloatTokenError,
    ExpectedIdentifierTokenError,
    ExpectedIntegerTokenError,
    ExpectedLparenError,
    ExpectedRparenError,
    ExpectedStringTokenError,
    ExpectedTokenError,
    ExpectedValueTokenError,
    NotImplementedFeatureError,
    ParseFloatError,
    ParseIntError,
    ParserError,
)
from .lexer import Lexer
from .query import (
    I64_MAX,
    I64_MIN,
    And,
    Boolean,
    Filter,
    FloatLiteral,
    Identifier,
    Infix,
    IntegerLiteral,
    Or,
    Query,
    StringLiteral,
    Value,
)
from .tokens import KEYWORDS, RESERVED_KEYWORDS, Token, TokenType

logger = logging.getLogger(__name__)

_COMPARATORS = {
    TokenType.EQ: Infix.EQ,
    TokenType.NOT_EQ: Infix.NOT_EQ,
    TokenType.LE: Infix.LE,
    TokenType.GE: Infix.GE,
    TokenType.LT: Infix.LT,
    TokenType.GT: Infix.GT,
}

_RESERVED_NAMES = {
    token_type: keyword
    for keyword, token_type in KEYWORDS.items()
    if token_type in RESERVED_KEYWORDS
}

ValueParseFn = Callable[["Parser"], Value]


class Parser:
    """Builds a Query from a token stream with two tokens of lookahead."""

    def __init__(self, lexer: Lexer | str):
        if isinstance(lexer, str):
            lexer = Lexer(lexer)
        self.lexer = lexer
        # Reserved for batch error reporting; parsing is fail-fast
        self.errors: list[ParserError] = []
        self.cur_token = Token(TokenType.ILLEGAL)
        self.peek_token = Token(TokenType.ILLEGAL)
        self._next_token()
        self._next_token()

    @property
    def input(self) -> str:
        return self.lexer.input

    def _next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _expect_peek(self, token_type: TokenType, error: type[ExpectedTokenError]) -> None:
        """Advance onto the peek token if it has the given type, else raise."""
        if self.peek_token.type != token_type:
            raise error(self.peek_token)
        self._next_token()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def parse_query(self) -> Query:
        """Parse one query starting at the current token."""
        token_type = self.cur_token.type
        if token_type == TokenType.AND:
            return And(self._parse_query_list())
        if token_type == TokenType.OR:
            return Or(self._parse_query_list())
        if token_type == TokenType.SORT:
            return self.parse_sort()
        if token_type in RESERVED_KEYWORDS:
            raise NotImplementedFeatureError(_RESERVED_NAMES[token_type])
        return self.parse_filter()

    def _parse_query_list(self) -> list[Query]:
        """Parse ``( query_list )`` after an ``and``/``or`` keyword."""
        self._expect_peek(TokenType.LPAREN, ExpectedLparenError)
        self._next_token()

        queries: list[Query] = []
        while self.cur_token.type != TokenType.RPAREN:
            queries.append(self.parse_query())
            if self.cur_token.type == TokenType.COMMA:
                self._next_token()
            logger.debug(f"cur {self.cur_token}, peek {self.peek_token}")

        self._next_token()  # consume )
        return queries

    def parse_filter(self) -> Filter:
        """Parse ``cmp_op(identifier, value)``."""
        infix = _COMPARATORS.get(self.cur_token.type)
        if infix is None:
            raise ExpectedFilterTokenError(self.cur_token)
        self._expect_peek(TokenType.LPAREN, ExpectedLparenError)

        self._next_token()
        identifier = self._parse_identifier()
        self._expect_peek(TokenType.COMMA, ExpectedCommaError)

        self._next_token()
        parse_fn = self._value_parse_fn()
        if parse_fn is None:
            raise ExpectedValueTokenError(self.cur_token)
        value = parse_fn(self)
        self._expect_peek(TokenType.RPAREN, ExpectedRparenError)

        self._next_token()  # consume )
        return Filter(infix, identifier, value)

    def parse_sort(self) -> Query:
        # TODO: grammar for sort(+field) / sort(-field) producing Query.Sort
        raise NotImplementedFeatureError("sort")

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def _value_parse_fn(self) -> ValueParseFn | None:
        """Pick the literal parser for the current token, if any."""
        return _VALUE_PARSERS.get(self.cur_token.type)

    def _parse_identifier(self) -> Identifier:
        if self.cur_token.type != TokenType.IDENT:
            raise ExpectedIdentifierTokenError(self.cur_token)
        return Identifier(self.cur_token.literal)

    def _parse_integer_literal(self) -> IntegerLiteral:
        if self.cur_token.type != TokenType.INT:
            raise ExpectedIntegerTokenError(self.cur_token)
        text = self.cur_token.literal
        try:
            number = int(text)
        except ValueError:
            raise ParseIntError(text) from None
        if not I64_MIN <= number <= I64_MAX:
            raise ParseIntError(text)
        return IntegerLiteral(number)

    def _parse_float_literal(self) -> FloatLiteral:
        if self.cur_token.type != TokenType.FLOAT:
            raise ExpectedFloatTokenError(self.cur_token)
        text = self.cur_token.literal
        try:
            number = float(text)
        except ValueError:
            raise ParseFloatError(text) from None
        if not math.isfinite(number):
            raise ParseFloatError(text)
        return FloatLiteral(number)

    def _parse_string_literal(self) -> StringLiteral:
        if self.cur_token.type != TokenType.STR:
            raise ExpectedStringTokenError(self.cur_token)
        return StringLiteral(self.cur_token.literal)

    def _parse_boolean(self) -> Boolean:
        if self.cur_token.type == TokenType.TRUE:
            return Boolean(True)
        if self.cur_token.type == TokenType.FALSE:
            return Boolean(False)
        raise ExpectedBooleanTokenError(self.cur_token)


_VALUE_PARSERS: dict[TokenType, ValueParseFn] = {
    TokenType.IDENT: Parser._parse_identifier,
    TokenType.INT: Parser._parse_integer_literal,
    TokenType.FLOAT: Parser._parse_float_literal,
    TokenType.STR: Parser._parse_string_literal,
    TokenType.TRUE: Parser._parse_boolean,
    TokenType.FALSE: Parser._parse_boolean,
}


def parse(query_string: str) -> Query:
    """
    Parse a query string into a Query AST.

    Args:
        query_string: The query to parse, e.g. ``eq(foo.bar,"a")``

    Returns:
        The root Query node

    Raises:
        ParserError: On the first syntax or numeric conversion error

    Examples:
        >>> parse('eq(foo.bar,"a")').right
        StringLiteral(value='a')

        >>> parse("and()")
        And(queries=())
    """
    return Parser(query_string).parse_query()
