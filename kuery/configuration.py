"""Named dialect registry.

    use("postgresql")                                # default dialect
    use("sqlite:///tmp/app.db", name="local")        # URLs resolve by scheme
    use(SqliteDialect(), name="inline", bind_literals=False)

Statements compiled without an explicit dialect use the one registered as
``"default"``, or the generic ``Dialect()`` when none was registered.
"""

import logging
import urllib.parse
from typing import Any, Union

from .dialects import Dialect, get_dialect_for_scheme

logger = logging.getLogger(__name__)

_dialects: dict[str, Dialect] = {}


def use(dialect: Union[str, Dialect], name: str = "default", **overrides: Any) -> Dialect:
    """Register ``dialect`` under ``name`` and return it.

    ``dialect`` is a Dialect instance, a scheme (``"mysql"``) or a database
    URL (``"postgresql://user@host/db"``). Keyword arguments override fields
    of the dialect (e.g. ``bind_literals=False``).
    """
    if isinstance(dialect, str):
        scheme = urllib.parse.urlparse(dialect).scheme or dialect
        dialect = get_dialect_for_scheme(scheme)
    elif not isinstance(dialect, Dialect):
        raise TypeError(f"use() requires a Dialect, a scheme or a URL; got {type(dialect)}")
    if overrides:
        unknown = set(overrides) - set(type(dialect).model_fields)
        if unknown:
            raise ValueError(f"Unknown dialect field(s): {', '.join(sorted(unknown))}")
        dialect = dialect.model_copy(update=overrides)
    _dialects[name] = dialect
    logger.info("Using dialect %s as %r", dialect.name, name)
    return dialect


def get_dialect(name: str = "default") -> Dialect:
    try:
        return _dialects[name]
    except KeyError as error:
        if name == "default":
            return Dialect()
        raise ValueError(f"No dialect configured with name=`{name}`") from error


def reset() -> None:
    """Forget every registered dialect."""
    _dialects.clear()


__all__ = ["get_dialect", "reset", "use"]
