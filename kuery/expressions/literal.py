"""Literal value expression."""

from typing import Any, Optional

from pydantic import model_validator

from ..data_kind import DataKind
from ._bases import Expression


class LiteralExpression(Expression):
    """A constant value: bound as a parameter or inlined, depending on the dialect.

    ``kind`` defaults to the kind inferred from ``value``; an explicit kind
    documents the intended column type (e.g. TEXT for a value compared to a
    VARCHAR column).
    """

    value: Any = None
    kind: Optional[DataKind] = None

    @model_validator(mode="after")
    def _infer_kind(self) -> "LiteralExpression":
        if self.kind is None:
            # frozen model: set through __dict__ once, during validation
            self.__dict__["kind"] = DataKind.of_value(self.value)
        return self

    @property
    def data_kind(self) -> Optional[DataKind]:
        return self.kind

    def build(self, context) -> str:
        return context.literal(self.value)
