"""Scalar and aggregate SQL functions.

Function names are the portable ones (``LCASE``, ``LEN``, ``MID``...); each
dialect renames them through its substitutions when the engine spells them
differently (``LCASE`` is ``LOWER`` on PostgreSQL).
"""

from typing import Any

from .expressions import AggregateExpression, FunctionExpression


def function(symbol: str, *arguments: Any) -> FunctionExpression:
    """Any scalar function by name (e.g. ``function("ABS", todos.delta)``)."""
    return FunctionExpression(symbol=symbol, arguments=arguments)


def ucase(value: Any) -> FunctionExpression:
    return FunctionExpression(symbol="UCASE", arguments=(value,))


def lcase(value: Any) -> FunctionExpression:
    return FunctionExpression(symbol="LCASE", arguments=(value,))


def len_(value: Any) -> FunctionExpression:
    """Length of a string value."""
    return FunctionExpression(symbol="LEN", arguments=(value,))


def round_(value: Any, decimals: int = 0) -> FunctionExpression:
    return FunctionExpression(symbol="ROUND", arguments=(value, decimals))


def mid(value: Any, start: int, length: Any = None) -> FunctionExpression:
    """Substring of ``value`` from ``start`` (1-based), optionally ``length`` characters long."""
    arguments = (value, start) if length is None else (value, start, length)
    return FunctionExpression(symbol="MID", arguments=arguments)


def now() -> FunctionExpression:
    """Current date and time, evaluated by the database."""
    return FunctionExpression(symbol="NOW")


def coalesce(*values: Any) -> FunctionExpression:
    if not values:
        raise ValueError("coalesce requires at least one argument")
    return FunctionExpression(symbol="COALESCE", arguments=values)


def concat(first: Any, *others: Any):
    """String concatenation; rendered ``a || b`` (or ``CONCAT(a, b)`` on MySQL) at compile time."""
    from .expressions import as_expression
    return as_expression(first).concat(*others)


# --- aggregates ---

def count(value: Any = None) -> AggregateExpression:
    """``COUNT(value)``, or ``COUNT(*)`` without argument."""
    return AggregateExpression(symbol="COUNT", arguments=() if value is None else (value,))


def count_distinct(value: Any) -> AggregateExpression:
    return AggregateExpression(symbol="COUNT", arguments=(value,), distinct=True)


def sum_(value: Any) -> AggregateExpression:
    return AggregateExpression(symbol="SUM", arguments=(value,))


def avg(value: Any) -> AggregateExpression:
    return AggregateExpression(symbol="AVG", arguments=(value,))


def min_(value: Any) -> AggregateExpression:
    return AggregateExpression(symbol="MIN", arguments=(value,))


def max_(value: Any) -> AggregateExpression:
    return AggregateExpression(symbol="MAX", arguments=(value,))


def first(value: Any) -> AggregateExpression:
    return AggregateExpression(symbol="FIRST", arguments=(value,))


def last(value: Any) -> AggregateExpression:
    return AggregateExpression(symbol="LAST", arguments=(value,))


__all__ = [
    "avg",
    "coalesce",
    "concat",
    "count",
    "count_distinct",
    "first",
    "function",
    "last",
    "lcase",
    "len_",
    "max_",
    "mid",
    "min_",
    "now",
    "round_",
    "sum_",
    "ucase",
]
