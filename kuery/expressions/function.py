"""SQL function call expressions (scalar and aggregate)."""

from typing import Any, ClassVar

from ._bases import ArgumentedExpression


class FunctionExpression(ArgumentedExpression):
    """SQL function call: ``symbol(args...)`` (e.g. ``LOWER(name)``, ``NOW()``).

    The symbol goes through the dialect's substitutions, so ``LCASE`` may be
    rendered as ``LOWER`` on engines that lack it.
    """

    def build(self, context) -> str:
        if not self.symbol:
            raise ValueError("FunctionExpression must have a symbol")
        arguments = [argument.build_reference(context) for argument in self.arguments]
        return context.dialect.function_sql(self.symbol, arguments)


class AggregateExpression(ArgumentedExpression):
    """Aggregate function call (``COUNT(*)``, ``SUM(x)``, ``COUNT(DISTINCT x)``).

    An aggregate without arguments renders ``*``.
    """

    IS_AGGREGATE: ClassVar[bool] = True

    distinct: bool = False

    def build(self, context) -> str:
        if not self.symbol:
            raise ValueError("AggregateExpression must have a symbol")
        if not self.arguments:
            return context.dialect.function_sql(self.symbol, ["*"])
        arguments = [argument.build_reference(context) for argument in self.arguments]
        if self.distinct:
            arguments[0] = "DISTINCT " + arguments[0]
        return context.dialect.function_sql(self.symbol, arguments)


def is_aggregate(expression: Any) -> bool:
    """True if ``expression`` is an aggregate call or contains one."""
    from .walk import walk_expressions
    return any(
        getattr(node, "IS_AGGREGATE", False)
        for node in walk_expressions(expression)
    )
