"""Subquery expression: a SELECT statement used as a value or a set."""

from typing import Any

from ._bases import Expression


class SubqueryExpression(Expression):
    """A SELECT nested in another statement (``x IN (SELECT ...)``, ``EXISTS (SELECT ...)``).

    The nested statement shares the enclosing compile's parameters, so
    placeholders stay numbered in order across the whole statement.
    """

    query: Any  # Select; avoids circular import.

    def build(self, context) -> str:
        return "(" + self.query.build(context) + ")"


def exists(query: Any):
    """Build ``EXISTS (subquery)``."""
    from .unary_operator import UnaryOperatorExpression
    return UnaryOperatorExpression(symbol="EXISTS", arguments=(SubqueryExpression(query=query),))
