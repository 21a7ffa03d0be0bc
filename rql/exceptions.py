"""Exceptions raised while parsing query strings.

The lexer never raises; malformed input surfaces here once a parser
production rejects the token it was given.
"""

from __future__ import annotations

from typing import ClassVar

from .tokens import Token


class RQLError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ParserError(RQLError):
    """A query string could not be parsed."""


# =============================================================================
# Unexpected tokens
# =============================================================================


class ExpectedTokenError(ParserError):
    """The parser found ``token`` where something else was required."""

    expected: ClassVar[str] = "token"

    def __init__(self, token: Token) -> None:
        self.token = token
        super().__init__(
            f"Expected {self.expected} at position {token.pos}, got {token.describe()}"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.token!r})"


class ExpectedQueryTokenError(ExpectedTokenError):
    expected = "query"


class ExpectedFilterTokenError(ExpectedTokenError):
    expected = "comparator (eq, ne, le, ge, lt, gt)"


class ExpectedValueTokenError(ExpectedTokenError):
    expected = "value (identifier, number, string or boolean)"


class ExpectedSomethingTokenError(ExpectedTokenError):
    expected = "more input"


class ExpectedIdentifierTokenError(ExpectedTokenError):
    expected = "identifier"


class ExpectedBooleanTokenError(ExpectedTokenError):
    expected = "boolean"


class ExpectedIntegerTokenError(ExpectedTokenError):
    expected = "integer"


class ExpectedFloatTokenError(ExpectedTokenError):
    expected = "float"


class ExpectedStringTokenError(ExpectedTokenError):
    expected = "string"


class ExpectedLparenError(ExpectedTokenError):
    expected = "'('"


class ExpectedRparenError(ExpectedTokenError):
    expected = "')'"


class ExpectedCommaError(ExpectedTokenError):
    expected = "','"


# =============================================================================
# Numeric conversion
# =============================================================================


class NumericLiteralError(ParserError):
    """A numeric literal lexed fine but does not convert to a number."""

    kind: ClassVar[str] = "number"

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid {self.kind} literal: {text}")


class ParseIntError(NumericLiteralError):
    kind = "integer"


class ParseFloatError(NumericLiteralError):
    kind = "float"


class NotImplementedFeatureError(ParserError):
    """The query uses a reserved keyword that has no grammar rule yet."""

    def __init__(self, feature: str) -> None:
        self.feature = feature
        super().__init__(f"'{feature}' is not supported yet")
