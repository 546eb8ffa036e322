"""Table, ForeignKey and Index: the schema objects queries are built from."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

from .column import Column
from .errors import QuerySyntaxError
from .expressions import OrderExpression


def _column_names(value: Any) -> tuple[str, ...]:
    """Normalize a column or a sequence of columns/names to a tuple of names."""
    if isinstance(value, (str, Column)):
        value = (value,)
    return tuple(item.name if isinstance(item, Column) else item for item in value)


class ForeignKey(BaseModel):
    """Table-level ``FOREIGN KEY (...) REFERENCES other (...)`` constraint.

    ``columns`` name columns of the owning table; ``references`` are columns
    of one other table.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    columns: tuple[str, ...]
    references: tuple[Column, ...]
    on_delete: Optional[str] = None
    on_update: Optional[str] = None

    @field_validator("columns", mode="before")
    @classmethod
    def _normalize_columns(cls, value: Any) -> tuple[str, ...]:
        return _column_names(value)

    @field_validator("references", mode="before")
    @classmethod
    def _normalize_references(cls, value: Any) -> tuple[Column, ...]:
        if isinstance(value, Column):
            return (value,)
        return tuple(value)

    def __hash__(self) -> int:
        return id(self)

    def build(self, context, table: Table) -> str:
        if not self.columns or len(self.columns) != len(self.references):
            raise QuerySyntaxError("Invalid definition of foreign key. ", node=self)
        for name in self.columns:
            if name not in table.column_names:
                raise QuerySyntaxError(f"Foreign key column {name} is not a column of {table.name}. ", node=self)
        referenced_tables = [column.table for column in self.references]
        target = referenced_tables[0]
        if target is None or any(other is not target for other in referenced_tables):
            raise QuerySyntaxError("Foreign key references must belong to a single table. ", node=self)
        sql = (
            "FOREIGN KEY ("
            + ", ".join(context.pack_name(name) for name in self.columns)
            + ") REFERENCES "
            + context.pack_name(target.name)
            + " ("
            + ", ".join(column.build_index(context) for column in self.references)
            + ")"
        )
        if self.on_delete:
            sql += " ON DELETE " + self.on_delete
        if self.on_update:
            sql += " ON UPDATE " + self.on_update
        return sql


class Table(BaseModel):
    """A named set of columns.

    Each column passed to the constructor is attached to the new table (a
    column already attached to another table is copied first). Columns are
    reachable by name, as ``table["title"]`` or ``table.title`` (columns
    whose name is also a Table attribute, such as ``name``, only by
    subscript)::

        todos = Table("toDoTable", Column("toDo_id", int, primary_key=True), Column("toDo_title", str))
        select(todos.toDo_title).where(todos.toDo_id == 1)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    columns: tuple[Column, ...] = ()
    alias: Optional[str] = None
    primary_key: tuple[str, ...] = ()
    """Table-level (composite) primary key, as column names."""
    foreign_keys: tuple[ForeignKey, ...] = ()

    _columns_by_name: dict[str, Column] = PrivateAttr(default_factory=dict)

    def __init__(self, name: str, *columns: Column, **data: Any) -> None:
        for column in columns:
            if not isinstance(column, Column):
                raise TypeError(f"Table columns must be Column instances; got {type(column)}")
        columns = tuple(
            column.model_copy() if column.table is not None else column
            for column in columns
        )
        seen: set[str] = set()
        for column in columns:
            if column.name in seen:
                raise ValueError(f"Duplicate column name {column.name!r} in table {name!r}")
            seen.add(column.name)
        super().__init__(name=name, columns=columns, **data)
        for column in self.columns:
            column._bind(self)
            self._columns_by_name[column.name] = column

    @field_validator("primary_key", mode="before")
    @classmethod
    def _normalize_primary_key(cls, value: Any) -> tuple[str, ...]:
        return _column_names(value)

    @field_validator("foreign_keys", mode="before")
    @classmethod
    def _normalize_foreign_keys(cls, value: Any) -> tuple[ForeignKey, ...]:
        if isinstance(value, ForeignKey):
            return (value,)
        return tuple(value)

    # Columns compare by SQL, not by value: tables are equal only to themselves.
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        alias = f" AS {self.alias}" if self.alias else ""
        return f"<Table {self.name}{alias} ({', '.join(self.column_names)})>"

    def __getitem__(self, name: str) -> Column:
        try:
            return self._columns_by_name[name]
        except KeyError:
            raise KeyError(f"Table {self.name!r} has no column {name!r}") from None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattr__(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"Table {self.name!r} has no column {name!r}") from None

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    @property
    def name_in_query(self) -> str:
        """Name used to qualify columns: the alias when set, else the table name."""
        return self.alias or self.name

    def as_(self, alias: str) -> Table:
        """Return a new table named ``alias`` in queries, with its own copies of the columns."""
        return type(self)(
            self.name,
            *self.columns,
            alias=alias,
            primary_key=self.primary_key,
            foreign_keys=self.foreign_keys,
        )

    def build(self, context) -> str:
        """FROM/JOIN form: ``name`` or ``name AS alias``."""
        if not self.name:
            raise QuerySyntaxError("Table name not set. ", node=self)
        sql = context.pack_name(self.name)
        if self.alias:
            sql += " AS " + context.pack_name(self.alias)
        return sql

    def create(self, context, if_not_exists: bool = False) -> str:
        """CREATE TABLE statement: column definitions, then table-level keys."""
        if not self.name:
            raise QuerySyntaxError("Table name not set. ", node=self)
        if not self.columns:
            raise QuerySyntaxError(f"Table {self.name} has no columns. ", node=self)
        definitions = [column.create(context) for column in self.columns]
        if self.primary_key:
            if any(column.primary_key for column in self.columns):
                raise QuerySyntaxError("Conflicting definitions of primary key. ", node=self)
            for name in self.primary_key:
                if name not in self._columns_by_name:
                    raise QuerySyntaxError(f"Primary key column {name} is not a column of {self.name}. ", node=self)
            definitions.append(
                "PRIMARY KEY (" + ", ".join(context.pack_name(name) for name in self.primary_key) + ")"
            )
        for foreign_key in self.foreign_keys:
            definitions.append(foreign_key.build(context, self))
        sql = "CREATE TABLE "
        if if_not_exists:
            sql += "IF NOT EXISTS "
        return sql + context.pack_name(self.name) + " (" + ", ".join(definitions) + ")"

    def drop(self, context, if_exists: bool = False) -> str:
        if not self.name:
            raise QuerySyntaxError("Table name not set. ", node=self)
        return "DROP TABLE " + ("IF EXISTS " if if_exists else "") + context.pack_name(self.name)


class Index(BaseModel):
    """``CREATE [UNIQUE] INDEX name ON table (columns)``.

    Columns may be given ascending (``todos.title``) or with an explicit
    direction (``todos.title.desc``); they must all belong to one table.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    columns: tuple[Any, ...] = ()
    unique: bool = False
    table: Optional[Table] = None

    def __init__(self, name: str, *columns: Any, **data: Any) -> None:
        super().__init__(name=name, columns=columns, **data)

    def __hash__(self) -> int:
        return id(self)

    @staticmethod
    def _column_of(item: Any) -> Column:
        column = item.expression if isinstance(item, OrderExpression) else item
        if not isinstance(column, Column):
            raise QuerySyntaxError("Index columns must be columns or ordered columns. ", node=item)
        return column

    def build(self, context) -> str:
        if not self.name:
            raise QuerySyntaxError("Index name not set. ", node=self)
        if not self.columns:
            raise QuerySyntaxError(f"Index {self.name} has no columns. ", node=self)
        columns = [self._column_of(item) for item in self.columns]
        table = self.table if self.table is not None else columns[0].table
        if table is None:
            raise QuerySyntaxError("Table name not set. ", node=self)
        for column in columns:
            if column.table is not table:
                raise QuerySyntaxError(
                    f"Index column {column.name} does not belong to table {table.name}. ", node=self
                )
        sql = "CREATE UNIQUE INDEX " if self.unique else "CREATE INDEX "
        return (
            sql
            + context.pack_name(self.name)
            + " ON "
            + context.pack_name(table.name)
            + " ("
            + ", ".join(item.build_index(context) for item in self.columns)
            + ")"
        )


__all__ = ["ForeignKey", "Index", "Table"]
