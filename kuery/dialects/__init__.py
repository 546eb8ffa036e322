"""SQL dialects and the URL-scheme registry that picks one.

``Dialect`` itself is the generic dialect (unquoted identifiers, ``?``
placeholders); the engine classes below only change its defaults.
"""

from .base import Dialect, PlaceholderStyle
from .sqlite import SqliteDialect
from .mysql import MysqlDialect
from .postgres import PostgresDialect
from .sqlserver import SqlserverDialect

DIALECTS_BY_SCHEME: dict[str, type[Dialect]] = {
    scheme: dialect_class
    for dialect_class in (SqliteDialect, MysqlDialect, PostgresDialect, SqlserverDialect)
    for scheme in dialect_class.SUPPORTED_SCHEMA
}


def get_dialect_for_scheme(scheme: str) -> Dialect:
    """Build the dialect for a URL scheme; a driver suffix is ignored (``mysql+pymysql`` is ``mysql``)."""
    engine = (scheme or "").partition("+")[0].lower()
    try:
        dialect_class = DIALECTS_BY_SCHEME[engine]
    except KeyError:
        raise ValueError(f"Unsupported database scheme: {scheme}") from None
    return dialect_class()


__all__ = [
    "DIALECTS_BY_SCHEME",
    "Dialect",
    "PlaceholderStyle",
    "SqliteDialect",
    "MysqlDialect",
    "PostgresDialect",
    "SqlserverDialect",
    "get_dialect_for_scheme",
]
