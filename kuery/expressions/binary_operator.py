"""Binary operator expression and the generic comparison constructor."""

from typing import Any, Optional

from ..data_kind import DataKind
from ._bases import ArgumentedExpression, Expression, Precedence, as_expression

_PRECEDENCES: dict[str, Precedence] = {
    "=": Precedence.COMPARISON,
    "<>": Precedence.COMPARISON,
    "!=": Precedence.COMPARISON,
    "<": Precedence.COMPARISON,
    "<=": Precedence.COMPARISON,
    ">": Precedence.COMPARISON,
    ">=": Precedence.COMPARISON,
    "IS": Precedence.COMPARISON,
    "IS NOT": Precedence.COMPARISON,
    "IN": Precedence.COMPARISON,
    "NOT IN": Precedence.COMPARISON,
    "||": Precedence.CONCAT,
    "+": Precedence.ADDITIVE,
    "-": Precedence.ADDITIVE,
    "*": Precedence.MULTIPLICATIVE,
    "/": Precedence.MULTIPLICATIVE,
    "%": Precedence.MULTIPLICATIVE,
}

COMPARISON_SYMBOLS = frozenset(
    symbol for symbol, precedence in _PRECEDENCES.items()
    if precedence == Precedence.COMPARISON
)


class BinaryOperatorExpression(ArgumentedExpression):
    """Two-argument infix operator (e.g. ``a = b``, ``a + b``, ``a || b``).

    Operands are parenthesized only when their own precedence requires it,
    so ``(a + b) * c`` keeps its parentheses while ``a * b + c`` needs none.
    """

    @property
    def left(self) -> Expression:
        return self.arguments[0]

    @property
    def right(self) -> Expression:
        return self.arguments[1]

    @property
    def precedence(self) -> Precedence:
        return _PRECEDENCES.get(self.symbol, Precedence.COMPARISON)

    @property
    def operand_kinds(self) -> tuple[Optional[DataKind], Optional[DataKind]]:
        """Declared kinds of both operands (compatibility is left to the database)."""
        return self.left.data_kind, self.right.data_kind

    @property
    def data_kind(self) -> Optional[DataKind]:
        if self.symbol in COMPARISON_SYMBOLS:
            return DataKind.BOOLEAN
        if self.symbol == "||":
            return DataKind.TEXT
        return self.left.data_kind or self.right.data_kind

    def build(self, context) -> str:
        if not self.symbol:
            raise ValueError("BinaryOperatorExpression must have a symbol")
        if len(self.arguments) != 2:
            raise ValueError("BinaryOperatorExpression must have exactly two arguments")
        if self.symbol == "||":
            # engines without the || operator spell concatenation as a function
            concatenation = context.dialect.f.concat(*self.arguments)
            if not isinstance(concatenation, BinaryOperatorExpression):
                return concatenation.build(context)
        left = self._operand_sql(self.left, context, side="left")
        right = self._operand_sql(self.right, context, side="right")
        return f"{left} {self.symbol} {right}"


def compare(symbol: str, left: Any, right: Any) -> Expression:
    """Build ``left <symbol> right`` from any pairing of columns, expressions and literals.

    Equality with ``None`` becomes ``IS NULL`` (and inequality ``IS NOT NULL``),
    since ``= NULL`` is never true in SQL.
    """
    if symbol not in COMPARISON_SYMBOLS:
        raise ValueError(f"Unknown comparison operator: {symbol!r}")
    if right is None and symbol in ("=", "<>", "!="):
        left = as_expression(left)
        return left.is_null() if symbol == "=" else left.is_not_null()
    return BinaryOperatorExpression(symbol=symbol, arguments=(left, right))
