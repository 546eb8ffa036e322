"""Per-compilation state: the dialect in use and the bound parameters collected so far."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .dialects.base import Dialect
from .utils.pack_name import pack_name
from .utils.pack_type import check_value_kind, pack_type


class BuildContext(BaseModel):
    """State threaded through one compile call.

    A new context is created for each compilation, so the parameter list is
    never shared between compiles (the dialect itself is read-only).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dialect: Dialect
    parameters: list[Any] = Field(default_factory=list)

    def bind(self, value: Any) -> str:
        """Append ``value`` to the parameters and return its placeholder."""
        check_value_kind(value)
        self.parameters.append(value)
        return self.dialect.placeholder(len(self.parameters))

    def literal(self, value: Any, inline: bool = False) -> str:
        """Render ``value`` as a placeholder or inline literal, following ``dialect.bind_literals``."""
        if inline or not self.dialect.bind_literals:
            return pack_type(value, self.dialect)
        return self.bind(value)

    def pack_name(self, name: str) -> str:
        return pack_name(name, self.dialect)

    def pack_type(self, value: Any) -> str:
        return pack_type(value, self.dialect)


__all__ = ["BuildContext"]
