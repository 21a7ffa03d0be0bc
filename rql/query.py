"""
Query AST and single-value comparison primitives.

A parsed query is a tree of frozen dataclasses::

    And((Filter(Infix.EQ, Identifier("foo"), StringLiteral("test")),
         Filter(Infix.GT, Identifier("bar.baz"), IntegerLiteral(100))))

``str()`` of any node renders the surface grammar, ``repr()`` the structure,
and ``to_dict()`` a JSON-ready form.

Comparisons work on one literal and one candidate scalar supplied by the
caller (typically a field of a JSON document)::

    IntegerLiteral(100).gt(150)     # 150 > 100 -> True
    StringLiteral("a").ne(1)        # different kinds -> False

Walking a whole tree against a document is left to the caller.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


# =============================================================================
# Candidate coercion
# =============================================================================
#
# Each helper returns the candidate in the literal's kind, or None when the
# two are incomparable. bool is a subclass of int, so it is excluded from the
# numeric kinds explicitly.


def _as_str(candidate: Any) -> str | None:
    return candidate if isinstance(candidate, str) else None


def _as_int(candidate: Any) -> int | None:
    if isinstance(candidate, bool) or not isinstance(candidate, int):
        return None
    if not I64_MIN <= candidate <= I64_MAX:
        return None
    return candidate


def _as_float(candidate: Any) -> float | None:
    # Integers are readable as floats, as with JSON number access
    if isinstance(candidate, bool) or not isinstance(candidate, (int, float)):
        return None
    try:
        return float(candidate)
    except OverflowError:
        return None


def _as_bool(candidate: Any) -> bool | None:
    return candidate if isinstance(candidate, bool) else None


# =============================================================================
# Values
# =============================================================================


class Value(ABC):
    """The literal side of a comparison.

    ``eq``/``ne`` are defined for every kind; a candidate of a different kind
    makes both return False. Ordering comparisons read as
    ``candidate <op> literal`` and are only defined for numeric literals.
    None of them raise.
    """

    @property
    @abstractmethod
    def operand(self) -> Any:
        """The Python value compared against candidates."""
        ...

    @abstractmethod
    def _coerce(self, candidate: Any) -> Any:
        """Return ``candidate`` in this literal's kind, or None."""
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    def eq(self, candidate: Any) -> bool:
        other = self._coerce(candidate)
        if other is None:
            return False
        return bool(other == self.operand)

    def ne(self, candidate: Any) -> bool:
        other = self._coerce(candidate)
        if other is None:
            return False
        return bool(other != self.operand)

    def lt(self, candidate: Any) -> bool:
        return False

    def le(self, candidate: Any) -> bool:
        return False

    def gt(self, candidate: Any) -> bool:
        return False

    def ge(self, candidate: Any) -> bool:
        return False


@dataclass(frozen=True)
class Identifier(Value):
    """A field path such as ``foo.bar`` or ``$meta``.

    As a right operand it compares as a plain string.
    """

    path: str

    @property
    def operand(self) -> str:
        return self.path

    def _coerce(self, candidate: Any) -> str | None:
        return _as_str(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "identifier", "value": self.path}

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class StringLiteral(Value):
    value: str

    @property
    def operand(self) -> str:
        return self.value

    def _coerce(self, candidate: Any) -> str | None:
        return _as_str(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "string", "value": self.value}

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class Boolean(Value):
    value: bool

    @property
    def operand(self) -> bool:
        return self.value

    def _coerce(self, candidate: Any) -> bool | None:
        return _as_bool(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "boolean", "value": self.value}

    def __str__(self) -> str:
        return "true" if self.value else "false"


class _NumericLiteral(Value):
    """Shared ordering for integer and float literals."""

    def lt(self, candidate: Any) -> bool:
        other = self._coerce(candidate)
        return other is not None and bool(other < self.operand)

    def le(self, candidate: Any) -> bool:
        other = self._coerce(candidate)
        return other is not None and bool(other <= self.operand)

    def gt(self, candidate: Any) -> bool:
        other = self._coerce(candidate)
        return other is not None and bool(other > self.operand)

    def ge(self, candidate: Any) -> bool:
        other = self._coerce(candidate)
        return other is not None and bool(other >= self.operand)


@dataclass(frozen=True)
class IntegerLiteral(_NumericLiteral):
    value: int

    @property
    def operand(self) -> int:
        return self.value

    def _coerce(self, candidate: Any) -> int | None:
        return _as_int(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "integer", "value": self.value}

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FloatLiteral(_NumericLiteral):
    value: float

    @property
    def operand(self) -> float:
        return self.value

    def _coerce(self, candidate: Any) -> float | None:
        return _as_float(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "float", "value": self.value}

    def __str__(self) -> str:
        # Positional digits.digits; the lexer reads no exponent or inf/nan
        if not math.isfinite(self.value):
            return repr(self.value)
        text = format(Decimal(repr(self.value)), "f")
        return text if "." in text else f"{text}.0"


# =============================================================================
# Operators
# =============================================================================


class Infix(Enum):
    """Comparators. The enum value is the keyword used in query strings."""

    EQ = "eq"
    NOT_EQ = "ne"
    LE = "le"
    GE = "ge"
    LT = "lt"
    GT = "gt"

    @property
    def keyword(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return _INFIX_SYMBOLS[self]

    def evaluate(self, literal: Value, candidate: Any) -> bool:
        """Apply this comparator as ``candidate <op> literal``."""
        # Value methods are named after the keywords
        compare = getattr(literal, self.keyword)
        return bool(compare(candidate))

    def __str__(self) -> str:
        return self.symbol


_INFIX_SYMBOLS = {
    Infix.EQ: "=",
    Infix.NOT_EQ: "!=",
    Infix.LE: "<=",
    Infix.GE: ">=",
    Infix.LT: "<",
    Infix.GT: ">",
}


class Prefix(Enum):
    """Sort direction markers (no grammar rule produces them yet)."""

    PLUS = "+"
    MINUS = "-"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Queries
# =============================================================================


class Query(ABC):
    """Base class for query nodes."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    def is_none(self) -> bool:
        return False


@dataclass(frozen=True)
class And(Query):
    """All child queries, in source order. May be empty."""

    queries: Sequence[Query] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "queries", tuple(self.queries))

    def to_dict(self) -> dict[str, Any]:
        return {"and": [q.to_dict() for q in self.queries]}

    def __str__(self) -> str:
        return f"and({','.join(str(q) for q in self.queries)})"


@dataclass(frozen=True)
class Or(Query):
    """Any child query, in source order. May be empty."""

    queries: Sequence[Query] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "queries", tuple(self.queries))

    def to_dict(self) -> dict[str, Any]:
        return {"or": [q.to_dict() for q in self.queries]}

    def __str__(self) -> str:
        return f"or({','.join(str(q) for q in self.queries)})"


@dataclass(frozen=True)
class Filter(Query):
    """``infix(left, right)``: compare the field named by ``left`` to ``right``."""

    infix: Infix
    left: Identifier
    right: Value

    def compare(self, candidate: Any) -> bool:
        """Evaluate this filter for the value the caller fetched for ``left``."""
        return self.infix.evaluate(self.right, candidate)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filter": {
                "op": self.infix.keyword,
                "field": self.left.path,
                "value": self.right.to_dict(),
            }
        }

    def __str__(self) -> str:
        return f"{self.infix.keyword}({self.left},{self.right})"


@dataclass(frozen=True)
class Sort(Query):
    prefix: Prefix
    value: Value

    def to_dict(self) -> dict[str, Any]:
        return {"sort": {"direction": self.prefix.value, "value": self.value.to_dict()}}

    def __str__(self) -> str:
        return f"sort({self.prefix}{self.value})"


@dataclass(frozen=True)
class NoneQuery(Query):
    """Empty placeholder. Never produced by the parser."""

    def is_none(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {}

    def __str__(self) -> str:
        return ""
