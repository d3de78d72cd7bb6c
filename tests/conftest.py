"""Pytest configuration and shared schema fixtures.

Settings are pinned to a known environment before any sqlaspect import so
that ``str(statement)`` and the executor default to the PostgreSQL dialect no
matter what the developer's shell or ``.env`` file contains.
"""

from __future__ import annotations

import os

os.environ["SQLASPECT_DEFAULT_DIALECT"] = "postgres"
os.environ.setdefault("SQLASPECT_LOG_LEVEL", "DEBUG")

from typing import Any, Callable, Iterator  # noqa: E402

import pytest  # noqa: E402

from sqlaspect import (  # noqa: E402
    Column,
    Integer,
    PrimaryKey,
    String,
    Table,
    Timestamp,
    Unique,
    get_dialect,
)
from sqlaspect.config import get_settings  # noqa: E402


@pytest.fixture
def users() -> Table:
    return Table(
        "users",
        Column("id", Integer(not_null=True)),
        Column("name", String(length=32, unique=True, not_null=True)),
        Column("password", String(length=128)),
        PrimaryKey("id"),
    )


@pytest.fixture
def views() -> Table:
    return Table(
        "views",
        Column("id", Integer(primary_key=True)),
        Column("user_id", Integer()),
        Column("url", String()),
        Column("ip", String()),
        Column("timestamp", Timestamp()),
    )


@pytest.fixture
def edges() -> Table:
    return Table(
        "edges",
        Column("a", Integer()),
        Column("b", Integer()),
        PrimaryKey("a", "b"),
    )


@pytest.fixture
def attrs() -> Table:
    return Table(
        "attrs",
        Column("id", Integer(primary_key=True)),
        Column("a", Integer()),
        Column("b", Integer()),
        Unique("a", "b"),
    )


@pytest.fixture
def expect_sql() -> Callable[..., None]:
    """
    Assert that a statement compiles to the given SQL and parameters.

    Usage:
        expect_sql('DELETE FROM "users"', users.delete())
        expect_sql('... = ?', stmt, 1, dialect="sqlite")
    """

    def _expect(expected: str, statement: Any, *params: Any, dialect: str = "postgres") -> None:
        compiled = statement.compile(get_dialect(dialect))
        assert compiled.sql == expected
        assert compiled.params == params

    return _expect


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop cached settings so monkeypatched environment variables apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
