"""Function-style predicate constructors.

Everything here is also reachable through operators on expressions
(``todos.done == True``, ``a & b``, ``~a``); these helpers exist for cases
where the left operand is not an expression, or where building predicates
programmatically reads better::

    and_(eq(todos.done, False), like(todos.title, "Buy %"))
"""

from typing import Any

from .expressions import (
    Expression,
    and_,
    as_expression,
    compare,
    exists,
    not_,
    or_,
)


def eq(left: Any, right: Any) -> Expression:
    return compare("=", left, right)


def ne(left: Any, right: Any) -> Expression:
    return compare("<>", left, right)


def lt(left: Any, right: Any) -> Expression:
    return compare("<", left, right)


def le(left: Any, right: Any) -> Expression:
    return compare("<=", left, right)


def gt(left: Any, right: Any) -> Expression:
    return compare(">", left, right)


def ge(left: Any, right: Any) -> Expression:
    return compare(">=", left, right)


def like(left: Any, pattern: Any, escape: Any = None) -> Expression:
    """``left LIKE pattern``; the pattern is used as given (no wildcards are added)."""
    return as_expression(left).like(pattern, escape=escape)


def not_like(left: Any, pattern: Any, escape: Any = None) -> Expression:
    return as_expression(left).not_like(pattern, escape=escape)


def in_(left: Any, values: Any) -> Expression:
    """``left IN (values)``; ``values`` is a sequence or a SELECT statement."""
    return as_expression(left).in_(values)


def not_in(left: Any, values: Any) -> Expression:
    return as_expression(left).not_in(values)


def between(value: Any, low: Any, high: Any) -> Expression:
    return as_expression(value).between(low, high)


def is_null(value: Any) -> Expression:
    return as_expression(value).is_null()


def is_not_null(value: Any) -> Expression:
    return as_expression(value).is_not_null()


__all__ = [
    "and_",
    "between",
    "compare",
    "eq",
    "exists",
    "ge",
    "gt",
    "in_",
    "is_not_null",
    "is_null",
    "le",
    "like",
    "lt",
    "ne",
    "not_",
    "not_in",
    "not_like",
    "or_",
]
