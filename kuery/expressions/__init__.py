"""SQL expression types for query building.

This package provides the tree of expression nodes used to build SELECT lists,
WHERE/HAVING predicates and ORDER BY clauses. Columns (``kuery.Column``) are
expressions too: combine them with operators (``==``, ``<``, ``+``,
``.in_(...)``) and logic (``&``, ``|``, ``~``). Every node implements
``build(context)``, which returns its SQL fragment and appends bound values
to the context in placeholder order.
"""

from ._bases import ArgumentedExpression, Expression, Precedence, as_expression
from .between import BetweenExpression
from .binary_operator import BinaryOperatorExpression, compare
from .boolean import BooleanExpression, NotExpression, and_, not_, or_
from .function import AggregateExpression, FunctionExpression, is_aggregate
from .like import LikeExpression
from .list import ListExpression
from .literal import LiteralExpression
from .order import OrderExpression
from .parenthesized import ParenthesizedExpression, group
from .raw import RawExpression, raw
from .subquery import SubqueryExpression, exists
from .unary_operator import UnaryOperatorExpression
from .walk import collect_columns, collect_tables, walk_expressions

__all__ = [
    "AggregateExpression",
    "ArgumentedExpression",
    "BetweenExpression",
    "BinaryOperatorExpression",
    "BooleanExpression",
    "Expression",
    "FunctionExpression",
    "LikeExpression",
    "ListExpression",
    "LiteralExpression",
    "NotExpression",
    "OrderExpression",
    "ParenthesizedExpression",
    "Precedence",
    "RawExpression",
    "SubqueryExpression",
    "UnaryOperatorExpression",
    "and_",
    "as_expression",
    "collect_columns",
    "collect_tables",
    "compare",
    "exists",
    "group",
    "is_aggregate",
    "not_",
    "or_",
    "raw",
    "walk_expressions",
]
