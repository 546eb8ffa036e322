"""Boolean combinators: AND, OR and NOT."""

from typing import Any, ClassVar, Optional

from ..data_kind import DataKind
from ._bases import ArgumentedExpression, Expression, Precedence, as_expression


class BooleanExpression(ArgumentedExpression):
    """N-ary AND / OR over predicates (``a AND b AND c``)."""

    @property
    def precedence(self) -> Precedence:
        return Precedence.AND if self.symbol == "AND" else Precedence.OR

    @property
    def data_kind(self) -> Optional[DataKind]:
        return DataKind.BOOLEAN

    def build(self, context) -> str:
        if self.symbol not in ("AND", "OR"):
            raise ValueError(f"BooleanExpression symbol must be AND or OR, not {self.symbol!r}")
        if not self.arguments:
            raise ValueError("BooleanExpression must have at least one argument")
        parts = [
            self._operand_sql(argument, context, side="left" if index == 0 else "right")
            for index, argument in enumerate(self.arguments)
        ]
        return (" " + self.symbol + " ").join(parts)


class NotExpression(ArgumentedExpression):
    """Logical negation (``NOT x``)."""

    PRECEDENCE: ClassVar[Precedence] = Precedence.NOT

    symbol: str = "NOT"

    @property
    def data_kind(self) -> Optional[DataKind]:
        return DataKind.BOOLEAN

    def build(self, context) -> str:
        if len(self.arguments) != 1:
            raise ValueError("NotExpression must have exactly one argument")
        return "NOT " + self._operand_sql(self.arguments[0], context, side="right")


def _combine(symbol: str, predicates: tuple[Any, ...]) -> Expression:
    if not predicates:
        raise ValueError(f"{symbol} requires at least one predicate")
    arguments: list[Expression] = []
    for predicate in map(as_expression, predicates):
        # flatten (a AND b) AND c into a AND b AND c
        if isinstance(predicate, BooleanExpression) and predicate.symbol == symbol and not predicate.alias:
            arguments.extend(predicate.arguments)
        else:
            arguments.append(predicate)
    if len(arguments) == 1:
        return arguments[0]
    return BooleanExpression(symbol=symbol, arguments=tuple(arguments))


def and_(*predicates: Any) -> Expression:
    """Combine predicates with AND; a single predicate is returned unchanged."""
    return _combine("AND", predicates)


def or_(*predicates: Any) -> Expression:
    """Combine predicates with OR; a single predicate is returned unchanged."""
    return _combine("OR", predicates)


def not_(predicate: Any) -> NotExpression:
    """Negate a predicate."""
    return NotExpression(arguments=(predicate,))
