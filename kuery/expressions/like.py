"""LIKE expression."""

from typing import ClassVar, Optional

from ..data_kind import DataKind
from ._bases import ArgumentedExpression, Precedence
from .function import FunctionExpression
from .literal import LiteralExpression


class LikeExpression(ArgumentedExpression):
    """LIKE expression (e.g. ``name LIKE '%John%'``).

    ``arguments`` is ``(haystack, needle)``. String needles are turned into a
    single bound pattern; expression needles are wrapped with the dialect's
    concat so ``.build`` and the bound values stay in sync.
    """

    PRECEDENCE: ClassVar[Precedence] = Precedence.COMPARISON

    case_insensitive: bool = False
    fuzzy_start: bool = True
    fuzzy_end: bool = True
    escape_needle: bool = True
    """When True (default), string needles are escaped for LIKE (%, _, \\) via dialect.f.escape_for_like."""
    escape: Optional[str] = None
    """Explicit ESCAPE character for the pattern."""
    negated: bool = False

    @property
    def data_kind(self) -> Optional[DataKind]:
        return DataKind.BOOLEAN

    def build(self, context) -> str:
        if len(self.arguments) != 2:
            raise ValueError("LikeExpression must have two arguments")
        dialect = context.dialect
        haystack, needle = self.arguments
        escape_clause = f" ESCAPE {context.pack_type(self.escape)}" if self.escape else ""
        if isinstance(needle, LiteralExpression) and isinstance(needle.value, str):
            pattern = needle.value
            if self.escape_needle:
                pattern = dialect.f.escape_for_like(pattern)
                escape_clause = escape_clause or dialect.LIKE_ESCAPE_CLAUSE
            if self.case_insensitive:
                pattern = pattern.lower()
            if self.fuzzy_start:
                pattern = "%" + pattern
            if self.fuzzy_end:
                pattern = pattern + "%"
            needle = LiteralExpression(value=pattern)
        else:
            if self.case_insensitive:
                needle = FunctionExpression(symbol="LOWER", arguments=(needle,))
            if self.fuzzy_start:
                needle = dialect.f.concat("%", needle)
            if self.fuzzy_end:
                needle = dialect.f.concat(needle, "%")
        if self.case_insensitive:
            haystack = FunctionExpression(symbol="LOWER", arguments=(haystack,))
        keyword = "NOT LIKE" if self.negated else "LIKE"
        left = self._operand_sql(haystack, context, side="left")
        right = self._operand_sql(needle, context, side="right")
        return f"{left} {keyword} {right}{escape_clause}"
