"""BETWEEN expression."""

from typing import ClassVar, Optional

from ..data_kind import DataKind
from ._bases import ArgumentedExpression, Precedence


class BetweenExpression(ArgumentedExpression):
    """Inclusive range test: ``expr [NOT] BETWEEN low AND high``."""

    PRECEDENCE: ClassVar[Precedence] = Precedence.COMPARISON

    negated: bool = False

    @property
    def data_kind(self) -> Optional[DataKind]:
        return DataKind.BOOLEAN

    def build(self, context) -> str:
        if len(self.arguments) != 3:
            raise ValueError("BetweenExpression must have three arguments")
        operand, low, high = (self._operand_sql(a, context, side="left") for a in self.arguments)
        keyword = "NOT BETWEEN" if self.negated else "BETWEEN"
        return f"{operand} {keyword} {low} AND {high}"
