"""Raw SQL fragment expression."""

from ._bases import Expression


class RawExpression(Expression):
    """SQL text inserted verbatim (e.g. ``RawExpression(text="CURRENT_DATE")``).

    Nothing in ``text`` is quoted, escaped or bound; it is the escape hatch for
    values and syntax that have no dedicated node.
    """

    text: str

    def build(self, context) -> str:
        return self.text


def raw(text: str) -> RawExpression:
    """Shortcut for ``RawExpression(text=text)``."""
    return RawExpression(text=text)
