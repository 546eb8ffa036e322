"""SQL Server dialect."""

from typing import Callable, ClassVar, Optional

from pydantic import Field

from ..data_kind import DataKind
from .base import DEFAULT_SUBSTITUTIONS, DEFAULT_TYPE_NAMES, Dialect, escape_for_like, _concat_function


def _sqlserver_auto_increment(type_name: str) -> str:
    if type_name not in ("SMALLINT", "INT", "INTEGER", "BIGINT"):
        return ""
    return f"{type_name} IDENTITY(1,1)"


class SqlserverDialect(Dialect):
    """Dialect for SQL Server (schemes mssql, sqlserver)."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mssql", "sqlserver")

    F: ClassVar[dict[str, Callable]] = {
        "concat": _concat_function,
        "escape_for_like": escape_for_like,
    }

    SUPPORTS_RETURNING: ClassVar[bool] = False

    identifier_quote: tuple[str, str] = ("[", "]")
    create_auto_increment: Optional[Callable[[str], str]] = Field(default=_sqlserver_auto_increment)
    type_names: dict[DataKind, str] = Field(default_factory=lambda: {
        **DEFAULT_TYPE_NAMES,
        DataKind.INTEGER: "INT",
        DataKind.DOUBLE: "FLOAT",
        DataKind.TEXT: "NVARCHAR(MAX)",
        DataKind.VARCHAR: "NVARCHAR",
        DataKind.BOOLEAN: "BIT",
        DataKind.TIMESTAMP: "DATETIME2",
        DataKind.BLOB: "VARBINARY(MAX)",
    })
    substitutions: dict[str, str] = Field(default_factory=lambda: {
        **DEFAULT_SUBSTITUTIONS,
        "TRUE": "1",
        "FALSE": "0",
        "LCASE": "LOWER",
        "UCASE": "UPPER",
        "MID": "SUBSTRING",
        "NOW": "GETDATE",
    })

    def limit_clause(self, limit: Optional[int], offset: Optional[int], has_order: bool) -> str:
        """SQL Server pages with OFFSET ... FETCH, which requires an ORDER BY."""
        if limit is None and offset is None:
            return ""
        parts = [] if has_order else ["ORDER BY (SELECT NULL)"]
        parts.append(f"OFFSET {offset or 0} ROWS")
        if limit is not None:
            parts.append(f"FETCH NEXT {limit} ROWS ONLY")
        return " ".join(parts)

    def pack_bytes(self, value: bytes) -> str:
        return "0x" + value.hex().upper()
