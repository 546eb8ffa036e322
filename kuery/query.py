"""Statement objects: SELECT, INSERT, UPDATE and DELETE.

Statements are immutable. Every builder method returns a new statement, so a
partially built query can be reused as the base of several others::

    todos = Table("toDoTable", Column("toDo_id", int), Column("toDo_title", str), Column("toDo_completed", bool))

    pending = select(todos.toDo_title).where(toDo_completed=False)
    pending.order_by(todos.toDo_title).limit(10).compile(PostgresDialect())
    # SELECT "toDoTable"."toDo_title" FROM "toDoTable" WHERE "toDoTable"."toDo_completed" = $1
    #   ORDER BY "toDoTable"."toDo_title" ASC LIMIT 10    ; parameters [False]
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from .column import Column
from .errors import QuerySyntaxError
from .expressions import (
    Expression,
    OrderExpression,
    SubqueryExpression,
    and_,
    as_expression,
    collect_tables,
)
from .query_builder import CompiledQuery, QueryBuilder
from .table import Table

# Django-style lookup -> Expression method for where(**kwargs).
# See: https://docs.djangoproject.com/en/stable/ref/models/querysets/#field-lookups
# Not implemented: regex, iregex (DB-specific; would need dialect hooks).
_WHERE_LOOKUP_MAP: dict[str, str] = {
    "exact": "__eq__",
    "iexact": "_iexact",
    "ne": "__ne__",
    "lt": "__lt__",
    "lte": "__le__",
    "gt": "__gt__",
    "gte": "__ge__",
    "in": "in_",
    "range": "between",
    "isnull": "_isnull",
    "icontains": "icontains",
    "contains": "contains",
    "istartswith": "istartswith",
    "startswith": "startswith",
    "iendswith": "iendswith",
    "endswith": "endswith",
    "like": "like",
    "ilike": "ilike",
}


def _check_count(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise QuerySyntaxError(f"{name} must be a non-negative integer; got {value!r}")
    return value


def _predicates(clause: str, predicates: tuple[Any, ...]) -> list[Expression]:
    # a plain bool here is usually a comparison Python evaluated itself (e.g. on Table.name)
    for predicate in predicates:
        if not isinstance(predicate, Expression):
            raise TypeError(f"{clause} requires expressions; got {predicate!r} of type {type(predicate).__name__}")
    return list(predicates)


def _build_source(source: Any, context) -> str:
    """FROM/JOIN item: a table, or an aliased subquery."""
    if isinstance(source, Expression):
        if not source.alias:
            raise QuerySyntaxError("A subquery used as a table must have an alias. ", node=source)
        return source.build_selected(context)
    return source.build(context)


def _build_returning(fields: tuple, context) -> str:
    if not fields:
        return ""
    if not context.dialect.SUPPORTS_RETURNING:
        raise QuerySyntaxError(f"RETURNING is not supported by dialect {context.dialect.name}. ")
    parts = []
    for field in fields:
        if isinstance(field, Column):
            sql = field.build_index(context)
            if field.alias:
                sql += " AS " + context.pack_name(field.alias)
            parts.append(sql)
        else:
            parts.append(field.build_selected(context))
    return " RETURNING " + ", ".join(parts)


def _column_of(table: Table, column: Any) -> Column:
    """Resolve a column (or column name) that must belong to ``table``."""
    if isinstance(column, str):
        try:
            return table[column]
        except KeyError:
            raise QuerySyntaxError(f"Column {column} does not belong to table {table.name}. ") from None
    if not isinstance(column, Column) or column.table is not table:
        name = getattr(column, "name", column)
        raise QuerySyntaxError(f"Column {name} does not belong to table {table.name}. ", node=column)
    return column


class Statement(BaseModel):
    """Base for compilable statements: copy-on-write updates and compile helpers."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # Statements hold expressions, whose __eq__ builds SQL: compare by identity.
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def clone_query_with(self, **changes: Any):
        """Return a new statement with the same state except for the given overrides."""
        return self.model_copy(update=changes)

    def build(self, context) -> str:
        raise NotImplementedError("Subclasses must implement `build`")

    def compile(self, dialect=None) -> CompiledQuery:
        """Compile for ``dialect`` (the configured default dialect when omitted)."""
        from .configuration import get_dialect
        return QueryBuilder(dialect if dialect is not None else get_dialect()).compile(self)

    @property
    def sql(self) -> str:
        """SQL text for the configured default dialect."""
        return self.compile().sql

    @property
    def parameters(self) -> list[Any]:
        """Bound values for the configured default dialect, in placeholder order."""
        return self.compile().parameters


class _Filterable(Statement):
    """WHERE support shared by SELECT, UPDATE and DELETE."""

    where_clause: Optional[Expression] = None

    def _lookup_table(self) -> Table:
        raise NotImplementedError

    def _where_kwargs_to_expressions(self, kwargs: dict[str, Any]) -> list[Expression]:
        """Convert Django-style where(**kwargs) into a list of expressions (ANDed by caller)."""
        result: list[Expression] = []
        for key, value in kwargs.items():
            name, _, lookup = key.rpartition("__")
            if not name or lookup not in _WHERE_LOOKUP_MAP:
                name, lookup = key, "exact"
            table = self._lookup_table()
            try:
                column = table[name]
            except KeyError:
                raise ValueError(f"where kwargs key {key!r}: table {table.name!r} has no column {name!r}") from None
            result.append(getattr(column, _WHERE_LOOKUP_MAP[lookup])(value))
        return result

    def where(self, *predicates: Any, **kwargs: Any):
        """Add conditions, ANDed with any existing ones.

        Examples:
            where(todos.toDo_id == 12)
            where(toDo_title__icontains="milk", toDo_id__lt=42)
            where(toDo_completed=False)
        """
        conditions = _predicates("where", predicates)
        conditions.extend(self._where_kwargs_to_expressions(kwargs))
        if not conditions:
            raise ValueError("where requires at least one predicate or lookup")
        if self.where_clause is not None:
            conditions.insert(0, self.where_clause)
        return self.clone_query_with(where_clause=and_(*conditions))

    def filter(self, *predicates: Any, **kwargs: Any):
        """Alias for where()."""
        return self.where(*predicates, **kwargs)

    def _build_where(self, context) -> str:
        if self.where_clause is None:
            return ""
        return " WHERE " + self.where_clause.build(context)


class Join(BaseModel):
    """One JOIN clause: kind, joined table, and its ON condition or USING columns."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: str = "INNER"
    table: Any
    on: Optional[Expression] = None
    using: tuple[str, ...] = ()

    def __hash__(self) -> int:
        return id(self)

    def build(self, context) -> str:
        sql = f"{self.kind} JOIN {_build_source(self.table, context)}"
        if self.on is not None and self.using:
            raise QuerySyntaxError("A join cannot have both ON and USING. ", node=self)
        if self.kind in ("CROSS", "NATURAL") and (self.on is not None or self.using):
            raise QuerySyntaxError(f"{self.kind} JOIN takes no condition. ", node=self)
        if self.on is not None:
            sql += " ON " + self.on.build(context)
        elif self.using:
            sql += " USING (" + ", ".join(context.pack_name(name) for name in self.using) + ")"
        return sql


class Select(_Filterable):
    """SELECT statement.

    Clauses are rendered in SQL order whatever the order of the builder
    calls: SELECT, FROM and JOINs, WHERE, GROUP BY, HAVING, UNION members,
    ORDER BY, then LIMIT/OFFSET as the dialect spells them. Without
    ``from_``, the FROM list is the set of tables owning the selected columns.
    """

    select_fields: tuple[Any, ...] = ()
    tables: tuple[Any, ...] = ()
    joins: tuple[Join, ...] = ()
    group_by_fields: tuple[Any, ...] = ()
    having_clause: Optional[Expression] = None
    order_by_fields: tuple[OrderExpression, ...] = ()
    unions: tuple[tuple[str, Any], ...] = ()
    limit_value: Optional[int] = None
    """Optional LIMIT (stored to avoid shadowing the limit() method)."""
    offset_value: Optional[int] = None
    is_distinct: bool = False

    @staticmethod
    def _normalize_fields(fields: tuple[Any, ...]) -> list[Expression]:
        result: list[Expression] = []
        for field in fields:
            if isinstance(field, Table):
                result.extend(field.columns)
            else:
                result.append(as_expression(field))
        return result

    def _joined_sources(self) -> list[Any]:
        return [join.table for join in self.joins]

    def _from_sources(self) -> list[Any]:
        if self.tables:
            return list(self.tables)
        joined = self._joined_sources()
        return [
            table for table in collect_tables(*self.select_fields)
            if not any(table is other for other in joined)
        ]

    def _lookup_table(self) -> Table:
        for source in self._from_sources():
            if isinstance(source, Table):
                return source
        raise ValueError("where(**kwargs) requires a FROM table to resolve column names")

    def select(self, *fields: Any) -> Select:
        """Add fields to the SELECT list; a Table adds all of its columns."""
        return self.clone_query_with(select_fields=self.select_fields + tuple(self._normalize_fields(fields)))

    def from_(self, *tables: Any) -> Select:
        """Set the FROM list explicitly (tables, or aliased subqueries)."""
        for table in tables:
            if not isinstance(table, (Table, SubqueryExpression)):
                raise TypeError(f"from_ requires Table or subquery; got {type(table)}")
        return self.clone_query_with(tables=self.tables + tables)

    def _join(self, kind: str, table: Any, on: Any = None, using: Any = ()) -> Select:
        if not isinstance(table, (Table, SubqueryExpression)):
            raise TypeError(f"join requires Table or subquery; got {type(table)}")
        if isinstance(using, str):
            using = (using,)
        join = Join(
            kind=kind,
            table=table,
            on=None if on is None else as_expression(on),
            using=tuple(column.name if isinstance(column, Column) else column for column in using),
        )
        return self.clone_query_with(joins=self.joins + (join,))

    def join(self, table: Any, on: Any = None, using: Any = ()) -> Select:
        """INNER JOIN ``table`` ON ``on`` (or USING the named columns)."""
        return self._join("INNER", table, on, using)

    def left_join(self, table: Any, on: Any = None, using: Any = ()) -> Select:
        return self._join("LEFT OUTER", table, on, using)

    def right_join(self, table: Any, on: Any = None, using: Any = ()) -> Select:
        return self._join("RIGHT OUTER", table, on, using)

    def full_join(self, table: Any, on: Any = None, using: Any = ()) -> Select:
        return self._join("FULL OUTER", table, on, using)

    def cross_join(self, table: Any) -> Select:
        return self._join("CROSS", table)

    def natural_join(self, table: Any) -> Select:
        return self._join("NATURAL", table)

    def group_by(self, *fields: Any) -> Select:
        return self.clone_query_with(group_by_fields=self.group_by_fields + tuple(map(as_expression, fields)))

    def having(self, *predicates: Any) -> Select:
        """Add HAVING conditions, ANDed with any existing ones.

        Whether each referenced column is grouped or aggregated is checked
        by the database, not here.
        """
        if not predicates:
            raise ValueError("having requires at least one predicate")
        conditions = _predicates("having", predicates)
        if self.having_clause is not None:
            conditions.insert(0, self.having_clause)
        return self.clone_query_with(having_clause=and_(*conditions))

    def order_by(self, *orders: Any) -> Select:
        """Add ORDER BY terms: expressions (ascending) or ``expr.asc`` / ``expr.desc``."""
        order_by_fields = list(self.order_by_fields)
        for order in orders:
            if isinstance(order, OrderExpression):
                order_by_fields.append(order)
            elif isinstance(order, Expression):
                order_by_fields.append(order.asc)
            else:
                raise TypeError(f"order_by requires an expression or OrderExpression; got {type(order)}")
        return self.clone_query_with(order_by_fields=tuple(order_by_fields))

    def limit(self, limit: int) -> Select:
        return self.clone_query_with(limit_value=_check_count("LIMIT", limit))

    def offset(self, offset: int) -> Select:
        return self.clone_query_with(offset_value=_check_count("OFFSET", offset))

    def distinct(self) -> Select:
        return self.clone_query_with(is_distinct=True)

    def _union(self, kind: str, other: Any) -> Select:
        if not isinstance(other, Select):
            raise TypeError(f"{kind.lower()} requires a Select; got {type(other)}")
        return self.clone_query_with(unions=self.unions + ((kind, other),))

    def union(self, other: Select) -> Select:
        return self._union("UNION", other)

    def union_all(self, other: Select) -> Select:
        return self._union("UNION ALL", other)

    def as_subquery(self, alias: Optional[str] = None) -> SubqueryExpression:
        """This statement as an expression: an IN/EXISTS operand, or (aliased) a FROM source."""
        return SubqueryExpression(query=self, alias=alias)

    def build(self, context) -> str:
        sources = self._from_sources()
        if not self.select_fields and not sources:
            raise QuerySyntaxError("Select has no columns and no tables. ", node=self)
        sql = "SELECT "
        if self.is_distinct:
            sql += "DISTINCT "
        if self.select_fields:
            sql += ", ".join(field.build_selected(context) for field in self.select_fields)
        else:
            sql += "*"
        if sources:
            sql += " FROM " + ", ".join(_build_source(source, context) for source in sources)
        for join in self.joins:
            sql += " " + join.build(context)
        sql += self._build_where(context)
        if self.group_by_fields:
            sql += " GROUP BY " + ", ".join(field.build_reference(context) for field in self.group_by_fields)
        if self.having_clause is not None:
            sql += " HAVING " + self.having_clause.build(context)
        for kind, other in self.unions:
            if other.order_by_fields or other.limit_value is not None or other.offset_value is not None:
                raise QuerySyntaxError(f"{kind} member cannot be ordered or paged. ", node=other)
            sql += f" {kind} " + other.build(context)
        if self.order_by_fields:
            sql += " ORDER BY " + ", ".join(order.build(context) for order in self.order_by_fields)
        limit = context.dialect.limit_clause(self.limit_value, self.offset_value, bool(self.order_by_fields))
        if limit:
            sql += " " + limit
        return sql


class Insert(Statement):
    """INSERT INTO one table: rows of values, a SELECT, or nothing (all defaults)."""

    table: Table
    column_list: tuple[Column, ...] = ()
    rows_values: tuple[tuple[Any, ...], ...] = ()
    select_query: Optional[Any] = None
    returning_fields: tuple[Any, ...] = ()

    def columns(self, *columns: Any) -> Insert:
        """Set the target columns (columns of the table, or their names)."""
        return self.clone_query_with(column_list=tuple(_column_of(self.table, column) for column in columns))

    def _named_row(self, named: dict[Any, Any]) -> Insert:
        columns = tuple(_column_of(self.table, column) for column in named)
        if self.column_list and (
            len(columns) != len(self.column_list)
            or any(a is not b for a, b in zip(columns, self.column_list))
        ):
            raise ValueError("values() keys must match the insert's columns")
        return self.clone_query_with(
            column_list=columns,
            rows_values=self.rows_values + (tuple(named.values()),),
        )

    def values(self, *row: Any, **named: Any) -> Insert:
        """Add one row, positionally (``values(1, "milk")``) or by column (``values(toDo_title="milk")``).

        A single dict keyed by columns or names is accepted too.
        """
        if row and named:
            raise ValueError("values() takes positional values or keyword values, not both")
        if len(row) == 1 and isinstance(row[0], dict):
            return self._named_row(row[0])
        if named:
            return self._named_row(named)
        if not row:
            raise ValueError("values() requires at least one value")
        return self.clone_query_with(rows_values=self.rows_values + (tuple(row),))

    def rows(self, *rows: Any) -> Insert:
        """Add several positional rows at once."""
        return self.clone_query_with(rows_values=self.rows_values + tuple(tuple(row) for row in rows))

    def from_select(self, query: Select) -> Insert:
        if not isinstance(query, Select):
            raise TypeError(f"from_select requires a Select; got {type(query)}")
        return self.clone_query_with(select_query=query)

    def returning(self, *fields: Any) -> Insert:
        return self.clone_query_with(returning_fields=self.returning_fields + tuple(map(as_expression, fields)))

    def build(self, context) -> str:
        table = self.table
        if not table.name:
            raise QuerySyntaxError("Table name not set. ", node=table)
        for column in self.column_list:
            _column_of(table, column)
        sql = "INSERT INTO " + context.pack_name(table.name)
        column_names = ""
        if self.column_list:
            column_names = " (" + ", ".join(column.build_index(context) for column in self.column_list) + ")"
        if self.select_query is not None:
            if self.rows_values:
                raise QuerySyntaxError("An insert cannot have both values and a select. ", node=self)
            sql += column_names + " " + self.select_query.build(context)
        elif self.rows_values:
            width = len(self.column_list) or len(table.columns)
            rows = []
            for row in self.rows_values:
                if len(row) != width:
                    raise QuerySyntaxError(f"Row has {len(row)} values but {width} columns are expected. ", node=self)
                rows.append("(" + ", ".join(as_expression(value).build_reference(context) for value in row) + ")")
            sql += column_names + " VALUES " + ", ".join(rows)
        else:
            sql += " " + context.dialect.EMPTY_INSERT
        return sql + _build_returning(self.returning_fields, context)


class Update(_Filterable):
    """UPDATE one table; without a WHERE clause, every row is updated."""

    table: Table
    assignments: tuple[tuple[Column, Any], ...] = ()
    returning_fields: tuple[Any, ...] = ()

    def _lookup_table(self) -> Table:
        return self.table

    def set(self, mapping: Optional[dict[Any, Any]] = None, /, **named: Any) -> Update:
        """Add assignments, keyed by column or column name (``set(toDo_completed=True)``)."""
        values = dict(mapping or {})
        values.update(named)
        assignments = tuple((_column_of(self.table, column), value) for column, value in values.items())
        return self.clone_query_with(assignments=self.assignments + assignments)

    def returning(self, *fields: Any) -> Update:
        return self.clone_query_with(returning_fields=self.returning_fields + tuple(map(as_expression, fields)))

    def build(self, context) -> str:
        if not self.assignments:
            raise QuerySyntaxError("Update has no values to set. ", node=self)
        for column, _ in self.assignments:
            _column_of(self.table, column)
        sql = "UPDATE " + self.table.build(context) + " SET "
        sql += ", ".join(
            context.pack_name(column.name) + " = " + as_expression(value).build_reference(context)
            for column, value in self.assignments
        )
        sql += self._build_where(context)
        return sql + _build_returning(self.returning_fields, context)


class Delete(_Filterable):
    """DELETE FROM one table; without a WHERE clause, every row is deleted."""

    table: Table
    returning_fields: tuple[Any, ...] = ()

    def _lookup_table(self) -> Table:
        return self.table

    def returning(self, *fields: Any) -> Delete:
        return self.clone_query_with(returning_fields=self.returning_fields + tuple(map(as_expression, fields)))

    def build(self, context) -> str:
        sql = "DELETE FROM " + self.table.build(context)
        sql += self._build_where(context)
        return sql + _build_returning(self.returning_fields, context)


def select(*fields: Any) -> Select:
    """Start a SELECT; ``select()`` with no fields selects ``*`` (add tables with ``from_``)."""
    return Select().select(*fields)


def insert(table: Table) -> Insert:
    return Insert(table=table)


def update(table: Table) -> Update:
    return Update(table=table)


def delete(table: Table) -> Delete:
    return Delete(table=table)


__all__ = [
    "Delete",
    "Insert",
    "Join",
    "Select",
    "Statement",
    "Update",
    "delete",
    "insert",
    "select",
    "update",
]
