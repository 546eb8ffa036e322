"""Base Dialect: the configuration every compile call reads from.

A dialect is constructed once per target database and shared (read-only) by
any number of concurrent compilations. Subclasses change the defaults of the
fields below and override the few hooks whose output is not a simple lookup
(``limit_clause``, ``function_sql``, ``pack_string``, ``pack_bytes``).
"""

import enum
from typing import Any, Callable, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..data_kind import DataKind
from ..errors import QuerySyntaxError


class PlaceholderStyle(str, enum.Enum):
    """How bound parameters are spelled in the compiled SQL."""

    QMARK = "qmark"
    """``?`` for every parameter."""
    NUMERIC = "numeric"
    """``$1``, ``$2``, ... in binding order."""
    NAMED = "named"
    """``:p1``, ``:p2``, ... in binding order."""


DEFAULT_TYPE_NAMES: dict[DataKind, str] = {
    DataKind.SMALLINT: "SMALLINT",
    DataKind.INTEGER: "INTEGER",
    DataKind.BIGINT: "BIGINT",
    DataKind.REAL: "REAL",
    DataKind.DOUBLE: "DOUBLE",
    DataKind.DECIMAL: "DECIMAL",
    DataKind.CHAR: "CHAR",
    DataKind.VARCHAR: "VARCHAR",
    DataKind.TEXT: "TEXT",
    DataKind.BOOLEAN: "BOOLEAN",
    DataKind.DATE: "DATE",
    DataKind.TIME: "TIME",
    DataKind.TIMESTAMP: "TIMESTAMP",
    DataKind.BLOB: "BLOB",
}

DEFAULT_SUBSTITUTIONS: dict[str, str] = {
    "TRUE": "true",
    "FALSE": "false",
    "NULL": "NULL",
}


def escape_for_like(s: str) -> str:
    """Escape LIKE wildcards (``%``, ``_``) and the escape character itself."""
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _concat_operator(*args: Any):
    from ..expressions import BinaryOperatorExpression, as_expression
    if not args:
        raise ValueError("concat requires at least one argument")
    result = as_expression(args[0])
    for arg in args[1:]:
        result = BinaryOperatorExpression(symbol="||", arguments=(result, arg))
    return result


def _concat_function(*args: Any):
    from ..expressions import FunctionExpression
    return FunctionExpression(symbol="CONCAT", arguments=args)


class _DialectF:
    """Helper for dialect.f: __getattr__ returns the callable from the dialect's F config."""

    __slots__ = ("_dialect",)

    def __init__(self, dialect: "Dialect") -> None:
        self._dialect = dialect

    def __getattr__(self, name: str) -> Callable[..., Any]:
        F = type(self._dialect).F  # pylint: disable=invalid-name
        if name in F:
            return F[name]
        raise AttributeError(name)


class Dialect(BaseModel):
    """Generic SQL dialect: unquoted identifiers, ``?`` placeholders, bound literals.

    Any field can be overridden per instance, e.g. ``PostgresDialect(bind_literals=False)``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ()
    """URL schemes this dialect handles (e.g. ('sqlite',), ('mssql', 'sqlserver'))."""

    F: ClassVar[dict[str, Callable[..., Any]]] = {
        "concat": _concat_operator,
        "escape_for_like": escape_for_like,
    }
    """Dialect-specific SQL helpers (e.g. concat). Access via dialect.f.concat(a, b, c)."""

    SUPPORTS_RETURNING: ClassVar[bool] = True
    """Whether INSERT/UPDATE/DELETE accept a RETURNING clause."""

    EMPTY_INSERT: ClassVar[str] = "DEFAULT VALUES"
    """Tail of an INSERT that provides no column values."""

    LIKE_ESCAPE_CLAUSE: ClassVar[str] = " ESCAPE '\\'"
    """Appended to LIKE when the pattern was escaped with ``escape_for_like``."""

    AUTO_INCREMENT_REQUIRES_PRIMARY_KEY: ClassVar[bool] = False
    """Whether only primary key columns can auto-increment."""

    identifier_quote: tuple[str, str] = ("", "")
    """Opening and closing identifier quote; empty strings disable quoting."""
    placeholder_style: PlaceholderStyle = PlaceholderStyle.QMARK
    bind_literals: bool = True
    """If True, literal values become bound parameters; otherwise they are inlined."""
    create_auto_increment: Optional[Callable[[str], str]] = None
    """Turns a type keyword into an auto-increment column type; ``None`` means ``<type> AUTO_INCREMENT``."""
    type_names: dict[DataKind, str] = Field(default_factory=lambda: dict(DEFAULT_TYPE_NAMES))
    substitutions: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SUBSTITUTIONS))
    """Keyword spellings (``TRUE``, ``FALSE``, ``NULL``) and function renames (``LCASE`` -> ``LOWER``)."""

    @property
    def f(self) -> _DialectF:
        """Access dialect-specific helpers by name (e.g. self.f.concat(a, b, c))."""
        return _DialectF(self)

    @property
    def name(self) -> str:
        """Short name of the dialect (first supported scheme, or ``generic``)."""
        return self.SUPPORTED_SCHEMA[0] if self.SUPPORTED_SCHEMA else "generic"

    def substitute(self, keyword: str) -> str:
        """Return the dialect's spelling of ``keyword`` (the keyword itself when not substituted)."""
        return self.substitutions.get(keyword, keyword)

    def type_name(self, kind: DataKind) -> str:
        """Return the type keyword for ``kind``."""
        try:
            return self.type_names[kind]
        except KeyError as error:
            raise QuerySyntaxError(f"Data type {kind.name} is not supported by dialect {self.name}") from error

    def placeholder(self, index: int) -> str:
        """Placeholder for the ``index``-th bound parameter (1-based)."""
        if self.placeholder_style == PlaceholderStyle.NUMERIC:
            return f"${index}"
        if self.placeholder_style == PlaceholderStyle.NAMED:
            return f":p{index}"
        return "?"

    def function_sql(self, symbol: str, arguments: list[str]) -> str:
        """Render a function call from its (already compiled) arguments."""
        return self.substitute(symbol) + "(" + ", ".join(arguments) + ")"

    def limit_clause(self, limit: Optional[int], offset: Optional[int], has_order: bool) -> str:
        """Render LIMIT/OFFSET; empty string when neither is set."""
        parts = []
        if limit is not None:
            parts.append(f"LIMIT {limit}")
        if offset is not None:
            parts.append(f"OFFSET {offset}")
        return " ".join(parts)

    def pack_string(self, value: str) -> str:
        """Render text as an inline literal, doubling embedded quotes."""
        return "'" + value.replace("'", "''") + "'"

    def pack_bytes(self, value: bytes) -> str:
        """Render binary data as an inline literal."""
        return "X'" + value.hex().upper() + "'"


__all__ = ["Dialect", "PlaceholderStyle", "DEFAULT_TYPE_NAMES", "DEFAULT_SUBSTITUTIONS", "escape_for_like"]
