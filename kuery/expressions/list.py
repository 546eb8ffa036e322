"""Value list expression, the right-hand side of IN."""

from ..errors import QuerySyntaxError
from ._bases import ArgumentedExpression


class ListExpression(ArgumentedExpression):
    """Comma-separated values in parentheses (``(?, ?, ?)``)."""

    def build(self, context) -> str:
        if not self.arguments:
            raise QuerySyntaxError("Value list must contain at least one value", node=self)
        return "(" + ", ".join(argument.build_reference(context) for argument in self.arguments) + ")"
