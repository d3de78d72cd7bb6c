"""Dialect registry.

Dialects are registered under one or more names and looked up by name, e.g.
from the ``default_dialect`` setting.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from .base import Dialect
from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect
from .sqlite import SQLiteDialect

_DIALECT_REGISTRY: Dict[str, Dialect] = {}


def register_dialect(dialect: Dialect, *aliases: str) -> None:
    """Register a dialect instance under its name and any aliases."""
    names = (dialect.name,) + aliases
    for name in names:
        if name in _DIALECT_REGISTRY:
            raise ValueError(
                f"Dialect '{name}' is already registered. "
                "Use a different name or unregister first."
            )
    for name in names:
        _DIALECT_REGISTRY[name] = dialect


def unregister_dialect(name: str) -> None:
    """Remove a dialect name (and only that name) from the registry."""
    _DIALECT_REGISTRY.pop(name, None)


def get_dialect(name: str) -> Dialect:
    """Retrieve a registered dialect by name."""
    key = name.strip().lower()
    if key not in _DIALECT_REGISTRY:
        raise KeyError(f"Dialect '{name}' not found in registry. Available: {list_dialects()}")
    return _DIALECT_REGISTRY[key]


def list_dialects() -> List[str]:
    """List all registered dialect names."""
    return sorted(_DIALECT_REGISTRY.keys())


def resolve_dialect(dialect: Optional[Union[str, Dialect]] = None) -> Dialect:
    """
    Resolve a dialect argument.

    ``None`` means the configured ``default_dialect``; a string is looked up in
    the registry; a ``Dialect`` instance is returned unchanged.
    """
    if isinstance(dialect, Dialect):
        return dialect
    if dialect is None:
        from ...config import get_settings

        dialect = get_settings().default_dialect
    return get_dialect(dialect)


register_dialect(PostgreSQLDialect(), "postgresql")
register_dialect(SQLiteDialect(), "sqlite3")
register_dialect(MySQLDialect())


__all__ = [
    "register_dialect",
    "unregister_dialect",
    "get_dialect",
    "list_dialects",
    "resolve_dialect",
]
