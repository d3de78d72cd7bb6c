"""
SQL parameter placeholder utilities.

Dialects differ in how positional parameters are written:

- ``numeric``: ``$1, $2, ...`` (PostgreSQL)
- ``qmark``: ``?`` for every parameter (SQLite)
- ``format``: ``%s`` for every parameter (MySQL drivers)

Placeholders are always positional; the n-th placeholder in the SQL text
corresponds to the n-th value of the parameter list.
"""

from typing import Any, List, Tuple

PLACEHOLDER_STYLES = ("numeric", "qmark", "format")


def placeholder(style: str, position: int) -> str:
    """
    Render the placeholder for a 1-based parameter position.

    Examples:
        >>> placeholder("numeric", 3)
        '$3'
        >>> placeholder("qmark", 3)
        '?'
    """
    if position < 1:
        raise ValueError(f"Parameter positions start at 1, got {position}")
    if style == "numeric":
        return f"${position}"
    if style == "qmark":
        return "?"
    if style == "format":
        return "%s"
    raise ValueError(f"Unknown placeholder style: {style!r}")


class ParameterList:
    """
    Ordered parameter accumulator.

    ``add`` appends a value and returns the placeholder for it, so the SQL
    text and the parameter positions cannot drift apart. A new instance is
    used for every compilation.

    Example:
        >>> params = ParameterList("numeric")
        >>> params.add("admin"), params.add("secret")
        ('$1', '$2')
        >>> params.values()
        ('admin', 'secret')
    """

    def __init__(self, style: str):
        if style not in PLACEHOLDER_STYLES:
            raise ValueError(f"Unknown placeholder style: {style!r}")
        self.style = style
        self._values: List[Any] = []

    def add(self, value: Any) -> str:
        self._values.append(value)
        return placeholder(self.style, len(self._values))

    def values(self) -> Tuple[Any, ...]:
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)
