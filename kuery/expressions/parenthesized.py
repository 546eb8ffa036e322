"""Explicit parenthesized group."""

from typing import Any, Optional

from pydantic import field_validator

from ..data_kind import DataKind
from ._bases import Expression, as_expression


class ParenthesizedExpression(Expression):
    """Wraps ``inner`` in parentheses regardless of precedence (``(a OR b)``)."""

    inner: Expression

    @field_validator("inner", mode="before")
    @classmethod
    def _wrap_inner(cls, inner: Any) -> Expression:
        return as_expression(inner)

    @property
    def data_kind(self) -> Optional[DataKind]:
        return self.inner.data_kind

    def build(self, context) -> str:
        return "(" + self.inner.build_reference(context) + ")"


def group(inner: Any) -> ParenthesizedExpression:
    """Shortcut for ``ParenthesizedExpression(inner=inner)``."""
    return ParenthesizedExpression(inner=inner)
