"""Abstract data kinds and their mapping from Python types and values."""

import datetime
import decimal
import enum
from typing import Any, Optional


class DataKind(enum.Enum):
    """Database-agnostic column type; dialects map each kind to a type keyword."""

    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    REAL = "real"
    DOUBLE = "double"
    DECIMAL = "decimal"
    CHAR = "char"
    VARCHAR = "varchar"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    BLOB = "blob"

    @classmethod
    def from_python(cls, python_type: type) -> "DataKind":
        """Return the kind used to store values of ``python_type`` (e.g. ``int`` -> INTEGER)."""
        # bool before int, datetime before date: subclass order matters
        for candidate, kind in _PYTHON_TYPES:
            if python_type is candidate or (
                isinstance(python_type, type) and issubclass(python_type, candidate)
            ):
                return kind
        raise TypeError(f"Type `{python_type}` has no known conversion to SQL type")

    @classmethod
    def of_value(cls, value: Any) -> Optional["DataKind"]:
        """Infer the kind of a literal value; ``None`` for NULL or unsupported values."""
        if value is None:
            return None
        try:
            return cls.from_python(type(value))
        except TypeError:
            return None


_PYTHON_TYPES: tuple[tuple[type, DataKind], ...] = (
    (bool, DataKind.BOOLEAN),
    (int, DataKind.INTEGER),
    (float, DataKind.DOUBLE),
    (decimal.Decimal, DataKind.DECIMAL),
    (str, DataKind.TEXT),
    (datetime.datetime, DataKind.TIMESTAMP),
    (datetime.date, DataKind.DATE),
    (datetime.time, DataKind.TIME),
    (bytes, DataKind.BLOB),
    (bytearray, DataKind.BLOB),
)


__all__ = ["DataKind"]
