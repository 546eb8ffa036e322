"""Utilities for walking expression trees."""

from typing import Any, Iterator

from ._bases import ArgumentedExpression, Expression
from .order import OrderExpression
from .parenthesized import ParenthesizedExpression


def walk_expressions(expr: Any) -> Iterator[Expression]:
    """Yield ``expr`` and every nested expression, depth first.

    Subqueries are yielded but not entered: they are compiled in their own scope.
    """
    if not isinstance(expr, Expression):
        return
    yield expr
    if isinstance(expr, ArgumentedExpression):
        for argument in expr.arguments:
            yield from walk_expressions(argument)
    elif isinstance(expr, OrderExpression):
        yield from walk_expressions(expr.expression)
    elif isinstance(expr, ParenthesizedExpression):
        yield from walk_expressions(expr.inner)


def collect_columns(*exprs: Any) -> list:
    """Collect the distinct columns referenced by the given expressions, in order of appearance."""
    from ..column import Column
    result: list[Column] = []
    for expr in exprs:
        for node in walk_expressions(expr):
            # identity: Expression.__eq__ builds SQL instead of comparing
            if isinstance(node, Column) and not any(node is seen for seen in result):
                result.append(node)
    return result


def collect_tables(*exprs: Any) -> list:
    """Collect the distinct tables owning the columns referenced by the given expressions."""
    result = []
    for column in collect_columns(*exprs):
        table = column.table
        if table is not None and not any(table is seen for seen in result):
            result.append(table)
    return result
