"""
rql: a small filter language for resource queries.

Example:
    import rql

    query = rql.parse('and(eq(foo,"test"),gt(bar.baz,100))')
    for child in query.queries:
        print(child.left, child.infix, child.right)

    # Compare one literal against a value taken from a document
    child.compare(document["bar"]["baz"])
"""

from __future__ import annotations

from .exceptions import (
    ExpectedBooleanTokenError,
    ExpectedCommaError,
    ExpectedFilterTokenError,
    ExpectedFloatTokenError,
    ExpectedIdentifierTokenError,
    ExpectedIntegerTokenError,
    ExpectedLparenError,
    ExpectedQueryTokenError,
    ExpectedRparenError,
    ExpectedSomethingTokenError,
    ExpectedStringTokenError,
    ExpectedTokenError,
    ExpectedValueTokenError,
    NotImplementedFeatureError,
    NumericLiteralError,
    ParseFloatError,
    ParseIntError,
    ParserError,
    RQLError,
)
from .lexer import Lexer, tokenize
from .parser import Parser, parse
from .query import (
    And,
    Boolean,
    Filter,
    FloatLiteral,
    Identifier,
    Infix,
    IntegerLiteral,
    NoneQuery,
    Or,
    Prefix,
    Query,
    Sort,
    StringLiteral,
    Value,
)
from .tokens import Token, TokenType, lookup_ident

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Parsing
    "Lexer",
    "Parser",
    "parse",
    "tokenize",
    # Tokens
    "Token",
    "TokenType",
    "lookup_ident",
    # AST
    "And",
    "Boolean",
    "Filter",
    "FloatLiteral",
    "Identifier",
    "Infix",
    "IntegerLiteral",
    "NoneQuery",
    "Or",
    "Prefix",
    "Query",
    "Sort",
    "StringLiteral",
    "Value",
    # Errors
    "ExpectedBooleanTokenError",
    "ExpectedCommaError",
    "ExpectedFilterTokenError",
    "ExpectedFloatTokenError",
    "ExpectedIdentifierTokenError",
    "ExpectedIntegerTokenError",
    "ExpectedLparenError",
    "ExpectedQueryTokenError",
    "ExpectedRparenError",
    "ExpectedSomethingTokenError",
    "ExpectedStringTokenError",
    "ExpectedTokenError",
    "ExpectedValueTokenError",
    "NotImplementedFeatureError",
    "NumericLiteralError",
    "ParseFloatError",
    "ParseIntError",
    "ParserError",
    "RQLError",
]
