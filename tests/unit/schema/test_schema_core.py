"""
Unit tests for the schema model: tables, columns and constraints.
"""

import pytest

from sqlaspect import (
    Column,
    Integer,
    PrimaryKey,
    SchemaError,
    String,
    Table,
    Unique,
    UnknownColumnError,
)
from sqlaspect.schema.types import Real, Timestamp, TypeKind


@pytest.mark.unit
class TestTableSchema:
    """Tests for table properties and column access."""

    def test_table_name(self, users):
        assert users.name == "users"
        assert str(users) == "users"

    def test_column_accessors(self, users):
        user_id = users.c["id"]
        assert user_id.name == "id"
        assert user_id.table is users
        assert users.c.name is users.c["name"]

    def test_columns_keep_declaration_order(self, users):
        assert [col.name for col in users.columns] == ["id", "name", "password"]
        assert users.c.keys() == ["id", "name", "password"]
        assert len(users.c) == 3
        assert "password" in users.c

    def test_primary_key_from_constraint(self, users):
        assert users.primary_key == ("id",)
        assert users.c["id"].is_primary
        assert not users.c["name"].is_primary

    def test_composite_primary_key(self, edges):
        assert edges.primary_key == ("a", "b")

    def test_primary_key_from_type_marker(self, attrs):
        assert attrs.primary_key == ("id",)

    def test_unique_constraints_declared(self, attrs):
        assert attrs.uniques == (("a", "b"),)

    def test_unique_from_type_marker(self, users):
        assert users.uniques == (("name",),)

    def test_marker_uniques_come_before_explicit_ones(self):
        table = Table(
            "t",
            Column("a", Integer()),
            Column("b", Integer(unique=True)),
            Unique("a", "b"),
        )
        assert table.uniques == (("b",), ("a", "b"))

    def test_table_without_columns_is_allowed(self):
        none = Table("none")
        assert none.columns == ()
        assert none.primary_key == ()

    def test_unknown_column_lookup(self, users):
        with pytest.raises(UnknownColumnError) as exc_info:
            users.c["missing"]
        assert exc_info.value.table == "users"
        assert exc_info.value.column == "missing"

    def test_unknown_column_attribute(self, users):
        with pytest.raises(UnknownColumnError):
            users.c.missing

    def test_declared_column_is_not_mutated(self):
        declared = Column("a", Integer())
        table = Table("t", declared)
        assert declared.table is None
        assert table.c["a"] is not declared

    def test_columns_are_read_only(self, users):
        with pytest.raises(AttributeError):
            users.name = "other"


@pytest.mark.unit
class TestImproperSchemas:
    """Invalid declarations must fail at construction."""

    def test_duplicate_columns(self):
        with pytest.raises(SchemaError, match="duplicate column"):
            Table("bad", Column("a", String()), Column("a", String()))

    def test_column_without_name(self):
        with pytest.raises(SchemaError, match="non-empty"):
            Table("bad", Column("", String()))

    def test_table_without_name(self):
        with pytest.raises(SchemaError):
            Table("", Column("a", String()))

    def test_primary_key_unknown_column(self):
        with pytest.raises(SchemaError, match="unknown column") as exc_info:
            Table("bad", Column("okay", String()), PrimaryKey("not"))
        assert exc_info.value.column == "not"

    def test_unique_unknown_column(self):
        with pytest.raises(SchemaError, match="unknown column"):
            Table("bad", Column("okay", String()), Unique("not"))

    def test_multiple_primary_key_markers(self):
        with pytest.raises(SchemaError, match="multiple primary keys"):
            Table(
                "bad",
                Column("id", Integer(primary_key=True)),
                Column("id2", Integer(primary_key=True)),
            )

    def test_marker_and_constraint_primary_keys(self):
        with pytest.raises(SchemaError, match="multiple primary keys"):
            Table("bad", Column("id", Integer(primary_key=True)), PrimaryKey("id"))

    def test_two_primary_key_constraints(self):
        with pytest.raises(SchemaError, match="multiple primary keys"):
            Table("bad", Column("a", Integer()), PrimaryKey("a"), PrimaryKey("a"))

    def test_empty_constraint(self):
        with pytest.raises(SchemaError, match="at least one column"):
            Table("bad", Column("a", Integer()), Unique())

    def test_constraint_repeating_a_column(self):
        with pytest.raises(SchemaError, match="more than once"):
            Table("bad", Column("a", Integer()), PrimaryKey("a", "a"))

    def test_unsupported_item(self):
        with pytest.raises(SchemaError, match="unsupported table item"):
            Table("bad", Column("a", Integer()), "b")

    def test_column_bound_to_another_table(self, users):
        with pytest.raises(SchemaError, match="already belongs"):
            Table("copy", users.c["id"])

    def test_column_requires_a_column_type(self):
        with pytest.raises(SchemaError, match="ColumnType"):
            Column("a", int)

    def test_unbound_column_cannot_build_predicates(self):
        with pytest.raises(SchemaError, match="not part of a table"):
            Column("a", Integer()).equals(1)


@pytest.mark.unit
class TestColumnTypes:
    def test_type_modifiers_default_to_false(self):
        col_type = Integer()
        assert (col_type.not_null, col_type.unique, col_type.primary_key) == (
            False,
            False,
            False,
        )

    def test_types_are_immutable(self):
        col_type = String(length=32)
        with pytest.raises(AttributeError):
            col_type.length = 64

    def test_type_kinds(self):
        assert String().kind is TypeKind.STRING
        assert Real().kind is TypeKind.REAL
        assert Timestamp(with_timezone=True).kind is TypeKind.TIMESTAMP

    def test_string_length_must_be_positive(self):
        with pytest.raises(ValueError):
            String(length=0)

    def test_types_compare_by_value(self):
        assert String(length=32, not_null=True) == String(length=32, not_null=True)
        assert Integer() != String()
