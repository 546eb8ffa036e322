"""Quote identifiers according to the dialect in use."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..dialects.base import Dialect


def pack_name(name: str, dialect: "Dialect") -> str:
    """Return ``name`` wrapped in the dialect's identifier quotes.

    Names that already start with the opening quote are returned unchanged,
    so packing twice gives the same result as packing once. Closing quote
    characters inside the name are doubled.
    """
    opening, closing = dialect.identifier_quote
    if not opening or name.startswith(opening):
        return name
    return opening + name.replace(closing, closing * 2) + closing
