"""SQLite dialect."""

from typing import Callable, ClassVar, Optional

from pydantic import Field

from ..data_kind import DataKind
from .base import DEFAULT_SUBSTITUTIONS, DEFAULT_TYPE_NAMES, Dialect, escape_for_like, _concat_operator


def _sqlite_auto_increment(type_name: str) -> str:
    """Only ``INTEGER PRIMARY KEY`` columns auto-increment (as the rowid alias)."""
    return type_name if type_name == "INTEGER" else ""


class SqliteDialect(Dialect):
    """Dialect for SQLite (scheme sqlite)."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("sqlite",)

    F: ClassVar[dict[str, Callable]] = {
        "concat": _concat_operator,
        "escape_for_like": escape_for_like,
    }

    AUTO_INCREMENT_REQUIRES_PRIMARY_KEY: ClassVar[bool] = True

    identifier_quote: tuple[str, str] = ('"', '"')
    create_auto_increment: Optional[Callable[[str], str]] = Field(default=_sqlite_auto_increment)
    type_names: dict[DataKind, str] = Field(default_factory=lambda: {
        **DEFAULT_TYPE_NAMES,
        DataKind.DOUBLE: "REAL",
        DataKind.DECIMAL: "NUMERIC",
    })
    substitutions: dict[str, str] = Field(default_factory=lambda: {
        **DEFAULT_SUBSTITUTIONS,
        "TRUE": "1",
        "FALSE": "0",
        "LCASE": "LOWER",
        "UCASE": "UPPER",
        "LEN": "LENGTH",
        "MID": "SUBSTR",
    })

    def function_sql(self, symbol: str, arguments: list[str]) -> str:
        # SQLite has no NOW(); the current timestamp comes from DATETIME
        if symbol == "NOW" and not arguments:
            return "DATETIME('now')"
        return super().function_sql(symbol, arguments)

    def limit_clause(self, limit: Optional[int], offset: Optional[int], has_order: bool) -> str:
        if limit is None and offset is not None:
            return f"LIMIT -1 OFFSET {offset}"
        return super().limit_clause(limit, offset, has_order)
