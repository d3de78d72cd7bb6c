"""
SQL identifier handling utilities.

Provides functions for quoting table and column names and for building
``"table"."column"`` references. Embedded quote characters are escaped by
doubling them, so any declared name is rendered safely.
"""

from typing import Optional

QUOTE_CHARS = {
    "double": ('"', '"'),
    "backtick": ("`", "`"),
}


def quote_identifier(name: str, style: str = "double") -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote
        style: Quoting style ("double" for ANSI/PostgreSQL/SQLite,
            "backtick" for MySQL)

    Returns:
        Properly quoted identifier

    Raises:
        ValueError: If name is empty or the style is unknown

    Examples:
        >>> quote_identifier("users")
        '"users"'
        >>> quote_identifier('odd"name')
        '"odd""name"'
        >>> quote_identifier("users", style="backtick")
        '`users`'
    """
    if not name:
        raise ValueError("Identifier name must be non-empty string")
    try:
        open_char, close_char = QUOTE_CHARS[style]
    except KeyError:
        raise ValueError(f"Unknown quoting style: {style!r}") from None
    escaped = name.replace(close_char, close_char * 2)
    return f"{open_char}{escaped}{close_char}"


def qualify_column(table: Optional[str], column: str, style: str = "double") -> str:
    """
    Create a table-qualified column reference.

    Examples:
        >>> qualify_column("users", "id")
        '"users"."id"'
        >>> qualify_column(None, "id")
        '"id"'
    """
    quoted_column = quote_identifier(column, style)
    if table:
        return f"{quote_identifier(table, style)}.{quoted_column}"
    return quoted_column
