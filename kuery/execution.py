"""Handing compiled statements to a database driver.

kuery never opens connections. Anything with an ``execute(sql, parameters)``
method (a DB-API cursor, a thin wrapper around an async pool...) can run the
compiled SQL::

    import sqlite3
    cursor = sqlite3.connect(":memory:").cursor()
    execute(select(todos.toDo_title).where(toDo_id=1), cursor, SqliteDialect())
"""

import logging
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from .dialects import Dialect
from .query_builder import compile as compile_statement

logger = logging.getLogger(__name__)


@runtime_checkable
class Executor(Protocol):
    """What kuery needs from a driver: run one statement with its parameters."""

    def execute(self, sql: str, parameters: Sequence[Any]) -> Any:
        ...


def execute(statement: Any, executor: Executor, dialect: Optional[Dialect] = None) -> Any:
    """Compile ``statement`` and pass the SQL and parameters, unchanged, to ``executor``.

    Returns whatever the executor returns. Compilation errors are raised
    before the executor is called.
    """
    if not isinstance(executor, Executor):
        raise TypeError(f"executor must have an execute(sql, parameters) method; got {type(executor)}")
    sql, parameters = compile_statement(statement, dialect)
    logger.debug("Executing %s", sql)
    return executor.execute(sql, parameters)


__all__ = ["Executor", "execute"]
