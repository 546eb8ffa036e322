"""Errors raised while compiling queries."""

from typing import Any


class QueryError(Exception):
    """Base class for every error raised by kuery."""


class QuerySyntaxError(QueryError, ValueError):
    """A query, expression or schema entity cannot be compiled to valid SQL.

    Compilation is all-or-nothing: when this is raised, no SQL is returned.
    ``node`` is the object that could not be compiled, when known.
    """

    def __init__(self, message: str, node: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.node = node


__all__ = ["QueryError", "QuerySyntaxError"]
