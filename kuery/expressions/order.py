"""ORDER BY expression."""

from ._bases import Expression


class OrderExpression(Expression):
    """ORDER BY term: one expression, ascending or descending."""

    expression: Expression
    descending: bool = False

    def build(self, context) -> str:
        """Expression with ``DESC`` or ``ASC`` suffix."""
        return f"{self.expression.build_reference(context)} {'DESC' if self.descending else 'ASC'}"

    def build_index(self, context) -> str:
        """Unqualified form for index definitions (``name DESC``)."""
        build_index = getattr(self.expression, "build_index", self.expression.build_reference)
        return f"{build_index(context)} {'DESC' if self.descending else 'ASC'}"
