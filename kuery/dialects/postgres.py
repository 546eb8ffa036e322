"""PostgreSQL dialect."""

from typing import Callable, ClassVar, Optional

from pydantic import Field

from ..data_kind import DataKind
from .base import (
    DEFAULT_SUBSTITUTIONS,
    DEFAULT_TYPE_NAMES,
    Dialect,
    PlaceholderStyle,
    escape_for_like,
    _concat_operator,
)

_SERIAL_TYPES = {
    "SMALLINT": "SMALLSERIAL",
    "INTEGER": "SERIAL",
    "BIGINT": "BIGSERIAL",
}


def _postgres_auto_increment(type_name: str) -> str:
    """Map integer types to their SERIAL pseudo-type; other types cannot auto-increment."""
    return _SERIAL_TYPES.get(type_name, "")


class PostgresDialect(Dialect):
    """Dialect for PostgreSQL (scheme postgresql)."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("postgresql", "postgres")

    F: ClassVar[dict[str, Callable]] = {
        "concat": _concat_operator,
        "escape_for_like": escape_for_like,
    }

    identifier_quote: tuple[str, str] = ('"', '"')
    placeholder_style: PlaceholderStyle = PlaceholderStyle.NUMERIC
    create_auto_increment: Optional[Callable[[str], str]] = Field(default=_postgres_auto_increment)
    type_names: dict[DataKind, str] = Field(default_factory=lambda: {
        **DEFAULT_TYPE_NAMES,
        DataKind.DOUBLE: "DOUBLE PRECISION",
        DataKind.DECIMAL: "NUMERIC",
        DataKind.BLOB: "BYTEA",
    })
    substitutions: dict[str, str] = Field(default_factory=lambda: {
        **DEFAULT_SUBSTITUTIONS,
        "LCASE": "LOWER",
        "UCASE": "UPPER",
        "LEN": "LENGTH",
        "MID": "SUBSTRING",
    })

    def pack_bytes(self, value: bytes) -> str:
        return "'\\x" + value.hex() + "'::bytea"
