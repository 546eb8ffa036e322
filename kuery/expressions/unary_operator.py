"""Unary operator expression."""

from ._bases import ArgumentedExpression, Precedence


class UnaryOperatorExpression(ArgumentedExpression):
    """Single-argument operator, prefix or postfix (e.g. ``- x``, ``x IS NULL``)."""

    postfix: bool = False
    """If True, render as ``argument symbol``; else ``symbol argument``."""

    @property
    def precedence(self) -> Precedence:
        return Precedence.COMPARISON if self.postfix else Precedence.UNARY

    def build(self, context) -> str:
        if len(self.arguments) != 1:
            raise ValueError("UnaryOperatorExpression must have exactly one argument")
        if self.postfix:
            argument = self._operand_sql(self.arguments[0], context, side="left")
            return f"{argument} {self.symbol}"
        argument = self._operand_sql(self.arguments[0], context, side="right")
        return f"{self.symbol} {argument}"
