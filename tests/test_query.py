"""Tests for AST comparison semantics and rendering."""

from __future__ import annotations

from typing import Any

import pytest

from rql.parser import parse
from rql.query import (
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
    Sort,
    StringLiteral,
    Value,
)

# =============================================================================
# Ordering comparisons: candidate <op> literal
# =============================================================================


class TestIntegerOrdering:
    """Ordering on integer literals reads as ``candidate op literal``."""

    @pytest.mark.parametrize("candidate", [-(2**63), -1, 0, 99, 100, 101, 2**63 - 1])
    def test_all_operators(self, candidate: int) -> None:
        literal = IntegerLiteral(100)
        assert literal.gt(candidate) is (candidate > 100)
        assert literal.lt(candidate) is (candidate < 100)
        assert literal.ge(candidate) is (candidate >= 100)
        assert literal.le(candidate) is (candidate <= 100)

    def test_boundary(self) -> None:
        literal = IntegerLiteral(100)
        assert literal.ge(100)
        assert literal.le(100)
        assert not literal.gt(100)
        assert not literal.lt(100)

    def test_negative_literal(self) -> None:
        literal = IntegerLiteral(-5)
        assert literal.gt(-4)
        assert literal.lt(-6)

    def test_float_candidate_is_incomparable(self) -> None:
        literal = IntegerLiteral(100)
        assert not literal.gt(150.5)
        assert not literal.lt(1.0)
        assert not literal.eq(100.0)
        assert not literal.ne(100.0)

    def test_out_of_range_candidate_is_incomparable(self) -> None:
        literal = IntegerLiteral(0)
        assert not literal.gt(2**63)
        assert not literal.lt(-(2**63) - 1)


class TestFloatOrdering:
    def test_all_operators(self) -> None:
        literal = FloatLiteral(60.0)
        assert literal.lt(59.9)
        assert literal.le(60.0)
        assert literal.gt(60.1)
        assert literal.ge(60.0)
        assert not literal.gt(60.0)
        assert not literal.lt(60.0)

    def test_integer_candidates_compare_as_floats(self) -> None:
        literal = FloatLiteral(60.5)
        assert literal.gt(61)
        assert literal.lt(60)
        assert FloatLiteral(2.0).eq(2)

    def test_nan_candidate(self) -> None:
        literal = FloatLiteral(1.0)
        nan = float("nan")
        assert not literal.eq(nan)
        assert literal.ne(nan)
        assert not literal.lt(nan)
        assert not literal.gt(nan)


@pytest.mark.parametrize(
    "literal",
    [StringLiteral("b"), Identifier("b"), Boolean(True)],
)
@pytest.mark.parametrize("candidate", ["a", "b", "c", True, False, 1, 1.5])
def test_ordering_undefined_for_non_numeric(literal: Value, candidate: Any) -> None:
    """lt/le/gt/ge are always False for string, identifier and boolean literals."""
    assert not literal.lt(candidate)
    assert not literal.le(candidate)
    assert not literal.gt(candidate)
    assert not literal.ge(candidate)


# =============================================================================
# Equality
# =============================================================================


@pytest.mark.parametrize(
    ("literal", "same", "different"),
    [
        (StringLiteral("test"), "test", "other"),
        (Identifier("test"), "test", "other"),
        (IntegerLiteral(7), 7, 8),
        (FloatLiteral(7.5), 7.5, 7.25),
        (Boolean(True), True, False),
        (Boolean(False), False, True),
    ],
)
def test_eq_and_ne_same_kind(literal: Value, same: Any, different: Any) -> None:
    assert literal.eq(same)
    assert not literal.ne(same)
    assert not literal.eq(different)
    assert literal.ne(different)


@pytest.mark.parametrize(
    ("literal", "candidate"),
    [
        (StringLiteral("1"), 1),
        (StringLiteral("true"), True),
        (StringLiteral("a"), None),
        (Identifier("x"), 1.0),
        (Identifier("x"), False),
        (Boolean(True), 1),
        (Boolean(False), 0),
        (Boolean(True), "true"),
        (IntegerLiteral(1), True),
        (IntegerLiteral(1), "1"),
        (FloatLiteral(1.0), True),
        (FloatLiteral(1.0), "1.0"),
        (IntegerLiteral(1), [1]),
        (StringLiteral("a"), {"a": 1}),
    ],
)
def test_kind_mismatch_is_incomparable(literal: Value, candidate: Any) -> None:
    """A candidate of another kind makes both eq and ne False."""
    assert literal.eq(candidate) is False
    assert literal.ne(candidate) is False


# =============================================================================
# Infix and Filter evaluation
# =============================================================================


def test_infix_keyword_and_symbol_are_separate() -> None:
    assert [i.keyword for i in Infix] == ["eq", "ne", "le", "ge", "lt", "gt"]
    assert [str(i) for i in Infix] == ["=", "!=", "<=", ">=", "<", ">"]


@pytest.mark.parametrize(
    ("infix", "candidate", "expected"),
    [
        (Infix.EQ, 10, True),
        (Infix.NOT_EQ, 10, False),
        (Infix.LT, 9, True),
        (Infix.LE, 10, True),
        (Infix.GT, 11, True),
        (Infix.GE, 9, False),
        (Infix.EQ, "10", False),
        (Infix.NOT_EQ, "10", False),
    ],
)
def test_infix_evaluate(infix: Infix, candidate: Any, expected: bool) -> None:
    assert infix.evaluate(IntegerLiteral(10), candidate) is expected


def test_filter_compare() -> None:
    """Filter.compare() applies the node's comparator to one candidate."""
    query = parse("and(gt(bar.baz,100),eq(foo,\"test\"))")
    assert isinstance(query, And)
    gt_filter, eq_filter = query.queries
    assert isinstance(gt_filter, Filter)
    assert isinstance(eq_filter, Filter)
    assert gt_filter.compare(150)
    assert not gt_filter.compare(100)
    assert eq_filter.compare("test")
    assert not eq_filter.compare(1)


# =============================================================================
# Nodes and rendering
# =============================================================================


def test_nodes_are_immutable() -> None:
    query = And([Filter(Infix.EQ, Identifier("a"), IntegerLiteral(1))])
    assert isinstance(query.queries, tuple)
    with pytest.raises(AttributeError):
        query.queries = ()  # type: ignore[misc]


def test_list_and_tuple_children_are_equal() -> None:
    child = Filter(Infix.EQ, Identifier("a"), IntegerLiteral(1))
    assert And([child]) == And((child,))
    assert And([child]) != Or([child])


def test_none_query() -> None:
    assert NoneQuery().is_none()
    assert not And([]).is_none()
    assert NoneQuery() == NoneQuery()


def test_sort_node_is_constructible() -> None:
    sort = Sort(Prefix.MINUS, Identifier("price"))
    assert str(sort) == "sort(-price)"
    assert sort.to_dict() == {
        "sort": {"direction": "-", "value": {"type": "identifier", "value": "price"}}
    }


def test_value_str() -> None:
    assert str(StringLiteral("a b")) == '"a b"'
    assert str(Identifier("foo.bar")) == "foo.bar"
    assert str(IntegerLiteral(-3)) == "-3"
    assert str(FloatLiteral(60.0)) == "60.0"
    assert str(Boolean(False)) == "false"


@pytest.mark.parametrize(
    ("value", "text"),
    [
        (1e-05, "0.00001"),
        (1e16, "10000000000000000.0"),
        (2.5e-07, "0.00000025"),
        (123456.789, "123456.789"),
    ],
)
def test_float_str_is_positional(value: float, text: str) -> None:
    """Floats never render with an exponent, which the lexer cannot read."""
    assert str(FloatLiteral(value)) == text
    assert parse(f"eq(x,{text})") == Filter(Infix.EQ, Identifier("x"), FloatLiteral(value))


def test_large_float_round_trips() -> None:
    query = Filter(Infix.LT, Identifier("x"), FloatLiteral(1.5e300))
    assert "e" not in str(query.right)
    assert parse(str(query)) == query


@pytest.mark.parametrize(
    "text",
    [
        'eq(foo.bar,"a")',
        "and(eq(speed.max,100),lt(speed.min,60.0))",
        'and(or(eq(speed.max,100),lt(speed.min,60.0)),eq(name,"test"))',
        "or(ne(flag,true),ge(n,0.5),le($meta,other))",
        "gt(a,0.00001)",
        "gt(a,10000000000000000.0)",
        "and()",
    ],
)
def test_str_renders_surface_grammar(text: str) -> None:
    """str() of a parsed query reproduces canonical input and re-parses equal."""
    query = parse(text)
    assert str(query) == text
    assert parse(str(query)) == query


def test_repr_is_structural() -> None:
    query = parse("eq(a,1)")
    assert repr(query) == (
        "Filter(infix=<Infix.EQ: 'eq'>, left=Identifier(path='a'), right=IntegerLiteral(value=1))"
    )


def test_to_dict() -> None:
    query = parse('or(eq(a,"x"),gt(b,2.5))')
    assert query.to_dict() == {
        "or": [
            {"filter": {"op": "eq", "field": "a", "value": {"type": "string", "value": "x"}}},
            {"filter": {"op": "gt", "field": "b", "value": {"type": "float", "value": 2.5}}},
        ]
    }
