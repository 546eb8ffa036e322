"""Column: a typed descriptor of one table column, usable as an expression.

Columns are created unbound and attached to exactly one table by the ``Table``
constructor. The link back to the table is a weak reference: a column never
keeps its table alive.
"""

from __future__ import annotations

import weakref
from typing import Any, Optional, TYPE_CHECKING

from pydantic import PrivateAttr, field_validator

from .data_kind import DataKind
from .errors import QuerySyntaxError
from .expressions import Expression, LiteralExpression, RawExpression

if TYPE_CHECKING:
    from .context import BuildContext
    from .table import Table


def _check_is_balanced(text: str) -> bool:
    """True if parentheses outside of string literals are balanced."""
    depth = 0
    in_string = False
    for char in text:
        if char == "'":
            in_string = not in_string
        elif in_string:
            continue
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0 and not in_string


class Column(Expression):
    """A single column of a table: name, type, constraints, and SQL rendering.

    Example::

        todos = Table(
            "toDoTable",
            Column("toDo_id", DataKind.INTEGER, auto_increment=True, primary_key=True, not_null=True, unique=True),
            Column("toDo_title", str, not_null=True),
            Column("toDo_completed", bool, default=False),
        )
    """

    name: str
    data_type: Optional[DataKind] = None
    """Declared kind; ``None`` for columns that are only referenced, never created."""
    length: Optional[int] = None
    auto_increment: bool = False
    primary_key: bool = False
    not_null: bool = False
    unique: bool = False
    default: Any = None
    check: Optional[str] = None
    collate: Optional[str] = None

    _table_ref: Optional[weakref.ReferenceType] = PrivateAttr(default=None)

    def __init__(self, name: str, data_type: Any = None, **data: Any) -> None:
        super().__init__(name=name, data_type=data_type, **data)

    @field_validator("data_type", mode="before")
    @classmethod
    def _resolve_data_type(cls, value: Any) -> Optional[DataKind]:
        """Accept a DataKind, its value (``"integer"``) or a Python type (``int``)."""
        if value is None or isinstance(value, DataKind):
            return value
        if isinstance(value, str):
            return DataKind(value.lower())
        return DataKind.from_python(value)

    @property
    def table(self) -> Optional[Table]:
        """The owning table, or None if unbound or if the table no longer exists."""
        if self._table_ref is None:
            return None
        return self._table_ref()

    @property
    def data_kind(self) -> Optional[DataKind]:
        return self.data_type

    def _bind(self, table: Table) -> None:
        """Attach this column to ``table``; called once, by the Table constructor."""
        self._table_ref = weakref.ref(table)

    def build_reference(self, context: BuildContext) -> str:
        """Qualified reference (``table.column``), without alias."""
        table = self.table
        table_name = table.name_in_query if table is not None else ""
        if not table_name:
            raise QuerySyntaxError("Table name not set. ", node=self)
        return context.pack_name(table_name) + "." + context.pack_name(self.name)

    def build(self, context: BuildContext) -> str:
        """Qualified reference with its alias, if any (``table.column AS alias``)."""
        return self.build_selected(context)

    def build_index(self, context: BuildContext) -> str:
        """Unqualified name, for index definitions and column lists (``column``)."""
        return context.pack_name(self.name)

    def _default_sql(self, context: BuildContext) -> str:
        default = self.default
        if isinstance(default, LiteralExpression):
            default = default.value
        if not isinstance(default, Expression):
            return context.literal(default, inline=True)
        if isinstance(default, RawExpression):
            return default.build(context)
        # expression defaults (e.g. now()) must be parenthesized on SQLite and MySQL
        return "(" + default.build_reference(context) + ")"

    def create(self, context: BuildContext) -> str:
        """Column definition for CREATE TABLE (e.g. ``toDo_id INTEGER AUTO_INCREMENT PRIMARY KEY``)."""
        if self.data_type is None:
            raise QuerySyntaxError(f"Column type not set for column {self.name}. ", node=self)
        dialect = context.dialect
        sql = context.pack_name(self.name) + " "
        type_name = dialect.type_name(self.data_type)
        if self.length is not None:
            if "(" in type_name:
                raise QuerySyntaxError(
                    f"Length not allowed for column {self.name}: type {type_name} is already sized. ", node=self
                )
            type_name += f"({self.length})"
        if self.auto_increment:
            if dialect.AUTO_INCREMENT_REQUIRES_PRIMARY_KEY and not self.primary_key:
                raise QuerySyntaxError(f"Invalid autoincrement for column {self.name}. ", node=self)
            if dialect.create_auto_increment is not None:
                auto_increment = dialect.create_auto_increment(type_name)
                if not auto_increment:
                    raise QuerySyntaxError(f"Invalid autoincrement for column {self.name}. ", node=self)
                sql += auto_increment
            else:
                sql += type_name + " AUTO_INCREMENT"
        else:
            sql += type_name
        if self.primary_key:
            sql += " PRIMARY KEY"
        if self.not_null:
            sql += " NOT NULL"
        if self.unique:
            sql += " UNIQUE"
        if self.default is not None:
            sql += " DEFAULT " + self._default_sql(context)
        if self.check is not None:
            if not self.check.strip() or not _check_is_balanced(self.check):
                raise QuerySyntaxError(f"Invalid check expression for column {self.name}. ", node=self)
            sql += " CHECK (" + self.check + ")"
        if self.collate is not None:
            sql += " COLLATE " + context.pack_name(self.collate)
        return sql


__all__ = ["Column"]
