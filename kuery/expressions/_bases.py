"""Base expression types for SQL expression trees."""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field as PydanticField, field_validator

from ..data_kind import DataKind

if TYPE_CHECKING:
    from ..context import BuildContext


class Precedence(enum.IntEnum):
    """Binding strength of each node kind, lowest first."""

    OR = 1
    AND = 2
    NOT = 3
    COMPARISON = 4
    CONCAT = 5
    ADDITIVE = 6
    MULTIPLICATIVE = 7
    UNARY = 8
    ATOM = 9


ASSOCIATIVE_SYMBOLS = frozenset({"AND", "OR", "+", "*", "||"})

# Engines disagree on where || sits relative to arithmetic, so mixing them is always parenthesized.
_ARITHMETIC_LEVELS = frozenset({Precedence.CONCAT, Precedence.ADDITIVE, Precedence.MULTIPLICATIVE})


def as_expression(value: Any) -> Expression:
    """Wrap a Python value in the matching expression node.

    Expressions are returned unchanged, SELECT statements become subqueries,
    lists/tuples/sets become value lists and anything else becomes a literal.
    """
    from ..query import Select
    from .list import ListExpression
    from .literal import LiteralExpression
    from .subquery import SubqueryExpression
    if isinstance(value, Expression):
        return value
    if isinstance(value, Select):
        return SubqueryExpression(query=value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ListExpression(arguments=tuple(value))
    return LiteralExpression(value=value)


class Expression(BaseModel):
    """Base type for all SQL expression nodes.

    Subclasses implement ``build``, which returns the SQL fragment for the
    node and appends any bound values to the context. Nodes are immutable:
    methods such as ``as_`` or the operator overloads return new nodes.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    PRECEDENCE: ClassVar[Precedence] = Precedence.ATOM

    alias: Optional[str] = None
    """Name given to this expression in a SELECT list (``expr AS alias``)."""

    def __hash__(self) -> int:
        # Identity: __eq__ builds SQL, it does not compare nodes.
        return id(self)

    @property
    def precedence(self) -> Precedence:
        return self.PRECEDENCE

    @property
    def data_kind(self) -> Optional[DataKind]:
        """Declared or inferred kind of the values this expression produces, if known."""
        return None

    @property
    def symbol_or_none(self) -> Optional[str]:
        return getattr(self, "symbol", None)

    def build(self, context: BuildContext) -> str:
        """SQL fragment for this expression; bound values are appended to ``context``."""
        raise NotImplementedError("Subclasses must implement `build`")

    def build_reference(self, context: BuildContext) -> str:
        """SQL fragment used when this expression is an operand (never carries an alias)."""
        return self.build(context)

    def build_selected(self, context: BuildContext) -> str:
        """SQL fragment for a SELECT list: the reference plus ``AS alias`` when aliased."""
        sql = self.build_reference(context)
        if self.alias:
            sql += " AS " + context.pack_name(self.alias)
        return sql

    def needs_parentheses(self, parent: Expression, side: str = "left") -> bool:
        """Whether this node must be parenthesized as the ``side`` operand of ``parent``."""
        mine, theirs = self.precedence, parent.precedence
        if mine < theirs:
            return True
        if mine > theirs:
            return (
                mine in _ARITHMETIC_LEVELS
                and theirs in _ARITHMETIC_LEVELS
                and Precedence.CONCAT in (mine, theirs)
            )
        if theirs == Precedence.COMPARISON:
            return True
        if side == "left":
            return False
        return not (
            self.symbol_or_none == parent.symbol_or_none
            and parent.symbol_or_none in ASSOCIATIVE_SYMBOLS
        )

    def _operand_sql(self, operand: Expression, context: BuildContext, side: str = "left") -> str:
        """Render one operand, parenthesized when its precedence requires it."""
        sql = operand.build_reference(context)
        if operand.needs_parentheses(self, side):
            return "(" + sql + ")"
        return sql

    def as_(self, alias: str):
        """Return a copy of this expression named ``alias`` in SELECT lists."""
        return self.model_copy(update={"alias": alias})

    # --- predicates ---

    def in_(self, other: Any):
        """Build an IN expression (e.g. ``users.id.in_([1, 2, 3])`` or a subquery)."""
        from .binary_operator import BinaryOperatorExpression
        return BinaryOperatorExpression(symbol="IN", arguments=(self, other))

    def not_in(self, other: Any):
        """Build a NOT IN expression."""
        from .binary_operator import BinaryOperatorExpression
        return BinaryOperatorExpression(symbol="NOT IN", arguments=(self, other))

    def is_(self, other: Any):
        """Build an IS expression (e.g. ``flag.is_(True)``)."""
        from .binary_operator import BinaryOperatorExpression
        return BinaryOperatorExpression(symbol="IS", arguments=(self, other))

    def is_not(self, other: Any):
        """Build an IS NOT expression."""
        from .binary_operator import BinaryOperatorExpression
        return BinaryOperatorExpression(symbol="IS NOT", arguments=(self, other))

    def is_null(self):
        """Build an IS NULL expression."""
        from .unary_operator import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="IS NULL", arguments=(self,), postfix=True)

    def is_not_null(self):
        """Build an IS NOT NULL expression."""
        from .unary_operator import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="IS NOT NULL", arguments=(self,), postfix=True)

    def _isnull(self, isnull: bool):
        """Build IS NULL or IS NOT NULL according to the boolean (for where(column__isnull=True))."""
        return self.is_null() if isnull else self.is_not_null()

    def _iexact(self, value: Any):
        """Case-insensitive exact match: LOWER(expr) = value.lower() for strings."""
        if isinstance(value, str):
            return self.lower() == value.lower()
        return self == value

    def between(self, low: Any, high: Any = None):
        """Inclusive range ``expr BETWEEN low AND high``; also accepts a (low, high) pair."""
        from .between import BetweenExpression
        if high is None:
            if not isinstance(low, (tuple, list)) or len(low) != 2:
                raise ValueError("between requires two bounds or a (low, high) pair")
            low, high = low
        return BetweenExpression(arguments=(self, low, high))

    def not_between(self, low: Any, high: Any):
        from .between import BetweenExpression
        return BetweenExpression(arguments=(self, low, high), negated=True)

    def __invert__(self):
        """Build a NOT expression (``~expr``)."""
        from .boolean import NotExpression
        return NotExpression(arguments=(self,))

    def __and__(self, other: Any):
        from .boolean import and_
        return and_(self, other)

    def __rand__(self, other: Any):
        from .boolean import and_
        return and_(other, self)

    def __or__(self, other: Any):
        from .boolean import or_
        return or_(self, other)

    def __ror__(self, other: Any):
        from .boolean import or_
        return or_(other, self)

    # --- comparisons ---

    def __eq__(self, other: Any):
        from .binary_operator import compare
        return compare("=", self, other)

    def __ne__(self, other: Any):
        from .binary_operator import compare
        return compare("<>", self, other)

    def __lt__(self, other: Any):
        from .binary_operator import compare
        return compare("<", self, other)

    def __le__(self, other: Any):
        from .binary_operator import compare
        return compare("<=", self, other)

    def __gt__(self, other: Any):
        from .binary_operator import compare
        return compare(">", self, other)

    def __ge__(self, other: Any):
        from .binary_operator import compare
        return compare(">=", self, other)

    # --- arithmetic ---

    def _arithmetic(self, symbol: str, left: Any, right: Any):
        from .binary_operator import BinaryOperatorExpression
        return BinaryOperatorExpression(symbol=symbol, arguments=(left, right))

    def __add__(self, other: Any):
        return self._arithmetic("+", self, other)

    def __radd__(self, other: Any):
        return self._arithmetic("+", other, self)

    def __sub__(self, other: Any):
        return self._arithmetic("-", self, other)

    def __rsub__(self, other: Any):
        return self._arithmetic("-", other, self)

    def __mul__(self, other: Any):
        return self._arithmetic("*", self, other)

    def __rmul__(self, other: Any):
        return self._arithmetic("*", other, self)

    def __truediv__(self, other: Any):
        return self._arithmetic("/", self, other)

    def __rtruediv__(self, other: Any):
        return self._arithmetic("/", other, self)

    def __mod__(self, other: Any):
        return self._arithmetic("%", self, other)

    def __neg__(self):
        from .unary_operator import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="-", arguments=(self,))

    def __pos__(self):
        from .unary_operator import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="+", arguments=(self,))

    def __pow__(self, other: Any):
        from .function import FunctionExpression
        return FunctionExpression(symbol="POWER", arguments=(self, other))

    def concat(self, *others: Any):
        """Build a string concatenation ``expr || other ...``."""
        from .binary_operator import BinaryOperatorExpression
        result = self
        for other in others:
            result = BinaryOperatorExpression(symbol="||", arguments=(result, other))
        return result

    # --- pattern matching ---

    def like(self, pattern: Any, escape: Optional[str] = None):
        """Build a LIKE expression (exact pattern, e.g. ``users.name.like('J%')``)."""
        from .like import LikeExpression
        return LikeExpression(arguments=(self, pattern), fuzzy_start=False, fuzzy_end=False,
                              escape_needle=False, escape=escape)

    def not_like(self, pattern: Any, escape: Optional[str] = None):
        from .like import LikeExpression
        return LikeExpression(arguments=(self, pattern), fuzzy_start=False, fuzzy_end=False,
                              escape_needle=False, escape=escape, negated=True)

    def ilike(self, pattern: Any):
        """Build a case-insensitive LIKE expression."""
        from .like import LikeExpression
        return LikeExpression(arguments=(self, pattern), fuzzy_start=False, fuzzy_end=False,
                              case_insensitive=True, escape_needle=False)

    def startswith(self, prefix: Any):
        """Build a LIKE expression for prefix match (e.g. ``users.name.startswith('John')``)."""
        from .like import LikeExpression
        return LikeExpression(arguments=(self, prefix), fuzzy_start=False, fuzzy_end=True)

    def istartswith(self, prefix: Any):
        from .like import LikeExpression
        return LikeExpression(arguments=(self, prefix), fuzzy_start=False, case_insensitive=True)

    def endswith(self, suffix: Any):
        """Build a LIKE expression for suffix match (e.g. ``users.name.endswith('son')``)."""
        from .like import LikeExpression
        return LikeExpression(arguments=(self, suffix), fuzzy_end=False)

    def iendswith(self, suffix: Any):
        from .like import LikeExpression
        return LikeExpression(arguments=(self, suffix), fuzzy_end=False, case_insensitive=True)

    def contains(self, substring: Any):
        """Build a LIKE expression for substring match (e.g. ``users.name.contains('oh')``)."""
        from .like import LikeExpression
        return LikeExpression(arguments=(self, substring))

    def icontains(self, substring: Any):
        from .like import LikeExpression
        return LikeExpression(arguments=(self, substring), case_insensitive=True)

    # --- scalar functions ---

    def lower(self):
        """Build a LOWER function call."""
        from .function import FunctionExpression
        return FunctionExpression(symbol="LOWER", arguments=(self,))

    def upper(self):
        """Build a UPPER function call."""
        from .function import FunctionExpression
        return FunctionExpression(symbol="UPPER", arguments=(self,))

    def trim(self):
        from .function import FunctionExpression
        return FunctionExpression(symbol="TRIM", arguments=(self,))

    def ltrim(self):
        from .function import FunctionExpression
        return FunctionExpression(symbol="LTRIM", arguments=(self,))

    def rtrim(self):
        from .function import FunctionExpression
        return FunctionExpression(symbol="RTRIM", arguments=(self,))

    # --- ordering ---

    @property
    def asc(self):
        """Order by this expression ascending (for use in ``order_by(...)``)."""
        from .order import OrderExpression
        return OrderExpression(expression=self, descending=False)

    @property
    def desc(self):
        """Order by this expression descending (for use in ``order_by(...)``)."""
        from .order import OrderExpression
        return OrderExpression(expression=self, descending=True)


class ArgumentedExpression(Expression):
    """Base for expressions that have a symbol and a tuple of arguments.

    Used by function calls (e.g. ``LOWER(x)``) and operators (e.g. ``=``, ``AND``).
    Plain Python values given as arguments are wrapped with ``as_expression``
    at construction, so every argument is an Expression.
    """

    symbol: str = ""
    arguments: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    @field_validator("arguments", mode="before")
    @classmethod
    def _wrap_arguments(cls, arguments: Any) -> tuple[Expression, ...]:
        return tuple(as_expression(argument) for argument in arguments)
