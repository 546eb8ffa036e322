"""MySQL dialect."""

from typing import Callable, ClassVar, Optional

from pydantic import Field

from ..data_kind import DataKind
from .base import DEFAULT_SUBSTITUTIONS, DEFAULT_TYPE_NAMES, Dialect, escape_for_like, _concat_function

_MAX_LIMIT = 18446744073709551615
"""MySQL has no OFFSET without LIMIT; its documentation recommends the largest BIGINT UNSIGNED."""


class MysqlDialect(Dialect):
    """Dialect for MySQL (scheme mysql)."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mysql",)

    F: ClassVar[dict[str, Callable]] = {
        "concat": _concat_function,
        "escape_for_like": escape_for_like,
    }

    SUPPORTS_RETURNING: ClassVar[bool] = False
    EMPTY_INSERT: ClassVar[str] = "() VALUES ()"
    # backslash is already the default LIKE escape character
    LIKE_ESCAPE_CLAUSE: ClassVar[str] = ""

    identifier_quote: tuple[str, str] = ("`", "`")
    type_names: dict[DataKind, str] = Field(default_factory=lambda: {
        **DEFAULT_TYPE_NAMES,
        DataKind.TIMESTAMP: "DATETIME",
    })
    substitutions: dict[str, str] = Field(default_factory=lambda: {
        **DEFAULT_SUBSTITUTIONS,
        "LEN": "CHAR_LENGTH",
    })

    def limit_clause(self, limit: Optional[int], offset: Optional[int], has_order: bool) -> str:
        if limit is None and offset is not None:
            return f"LIMIT {_MAX_LIMIT} OFFSET {offset}"
        return super().limit_clause(limit, offset, has_order)

    def pack_string(self, value: str) -> str:
        # backslash is an escape character in MySQL string literals (unless NO_BACKSLASH_ESCAPES)
        return "'" + value.replace("\\", "\\\\").replace("'", "''") + "'"
