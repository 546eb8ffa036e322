"""Render Python values as SQL literals.

The set of supported values is closed: ``None``, ``bool``, ``int``, ``float``,
``Decimal``, ``str``, ``date``, ``time``, ``datetime`` and ``bytes``. Anything
else must be wrapped in a ``RawExpression`` by the caller.
"""

import datetime
import decimal
import math
from typing import Any, TYPE_CHECKING

from ..errors import QuerySyntaxError

if TYPE_CHECKING:
    from ..dialects.base import Dialect

SUPPORTED_VALUE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    decimal.Decimal,
    str,
    datetime.date,
    datetime.time,
    bytes,
    bytearray,
)


def check_value_kind(value: Any) -> Any:
    """Return ``value`` if it can be bound or inlined, else raise QuerySyntaxError."""
    if value is None:
        return value
    if not isinstance(value, SUPPORTED_VALUE_TYPES):
        raise QuerySyntaxError(
            f"Unsupported literal value `{value!r}` of type `{type(value).__name__}`",
            node=value,
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise QuerySyntaxError(f"Non-finite float `{value!r}` cannot be used as a literal", node=value)
    return value


def pack_type(value: Any, dialect: "Dialect") -> str:
    """Render ``value`` as an SQL literal fragment for ``dialect``."""
    check_value_kind(value)
    if value is None:
        return dialect.substitute("NULL")
    if isinstance(value, bool):
        return dialect.substitute("TRUE" if value else "FALSE")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, decimal.Decimal):
        if not value.is_finite():
            raise QuerySyntaxError(f"Non-finite decimal `{value}` cannot be used as a literal", node=value)
        return str(value)
    if isinstance(value, str):
        return dialect.pack_string(value)
    if isinstance(value, datetime.datetime):
        return dialect.pack_string(value.isoformat(sep=" "))
    if isinstance(value, (datetime.date, datetime.time)):
        return dialect.pack_string(value.isoformat())
    return dialect.pack_bytes(bytes(value))
