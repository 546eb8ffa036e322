"""Compilation of statements and schema objects into SQL text and parameters."""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional, TYPE_CHECKING

from .context import BuildContext
from .dialects.base import Dialect

if TYPE_CHECKING:
    from .table import Index, Table

logger = logging.getLogger(__name__)


class CompiledQuery(NamedTuple):
    """SQL text and the values for its placeholders, in placeholder order."""

    sql: str
    parameters: list[Any]

    @property
    def named_parameters(self) -> dict[str, Any]:
        """Parameters keyed as the NAMED placeholder style spells them (``p1``, ``p2``...)."""
        return {f"p{index}": value for index, value in enumerate(self.parameters, start=1)}


class QueryBuilder:
    """Compiles statements for one dialect.

    A builder holds no per-query state: every call creates its own
    ``BuildContext``, so one builder can be shared between threads.

        builder = QueryBuilder(PostgresDialect())
        sql, parameters = builder.compile(select(todos.title).where(todos.done == False))
    """

    def __init__(self, dialect: Optional[Dialect] = None) -> None:
        self.dialect = dialect if dialect is not None else Dialect()

    def __repr__(self) -> str:
        return f"QueryBuilder({self.dialect.name})"

    def _ddl_context(self) -> BuildContext:
        # DDL cannot carry bound parameters
        return BuildContext(dialect=self.dialect.model_copy(update={"bind_literals": False}))

    def compile(self, statement: Any) -> CompiledQuery:
        """Compile a SELECT, INSERT, UPDATE or DELETE statement (or any expression)."""
        context = BuildContext(dialect=self.dialect)
        sql = statement.build(context)
        logger.debug(
            "Compiled %s for %s with %d parameter(s): %s",
            type(statement).__name__, self.dialect.name, len(context.parameters), sql,
        )
        return CompiledQuery(sql, list(context.parameters))

    def compile_create_table(self, table: Table, if_not_exists: bool = False) -> str:
        sql = table.create(self._ddl_context(), if_not_exists=if_not_exists)
        logger.debug("Compiled CREATE TABLE for %s: %s", self.dialect.name, sql)
        return sql

    def compile_drop_table(self, table: Table, if_exists: bool = False) -> str:
        return table.drop(self._ddl_context(), if_exists=if_exists)

    def compile_create_index(self, index: Index) -> str:
        return index.build(self._ddl_context())


def _builder(dialect: Optional[Dialect]) -> QueryBuilder:
    from .configuration import get_dialect
    return QueryBuilder(dialect if dialect is not None else get_dialect())


def compile(statement: Any, dialect: Optional[Dialect] = None) -> CompiledQuery:  # pylint: disable=redefined-builtin
    """Compile ``statement`` for ``dialect`` (the configured default dialect when omitted)."""
    return _builder(dialect).compile(statement)


def compile_create_table(table: Table, dialect: Optional[Dialect] = None, if_not_exists: bool = False) -> str:
    return _builder(dialect).compile_create_table(table, if_not_exists=if_not_exists)


def compile_drop_table(table: Table, dialect: Optional[Dialect] = None, if_exists: bool = False) -> str:
    return _builder(dialect).compile_drop_table(table, if_exists=if_exists)


def compile_create_index(index: Index, dialect: Optional[Dialect] = None) -> str:
    return _builder(dialect).compile_create_index(index)


__all__ = [
    "CompiledQuery",
    "QueryBuilder",
    "compile",
    "compile_create_index",
    "compile_create_table",
    "compile_drop_table",
]
