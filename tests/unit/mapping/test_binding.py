"""
Unit tests for record bindings and value extraction.
"""

from collections import namedtuple
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

import pytest
from pydantic import BaseModel, Field

from sqlaspect.exceptions import BindingError
from sqlaspect.mapping.binding import (
    binding_for,
    db_field,
    is_named_tuple,
    is_record_type,
    record_values,
)


@dataclass
class User:
    id: int = db_field("id", default=0)
    name: str = db_field("name", default="")
    contacts: List[str] = field(default_factory=list)
    _token: Optional[str] = None


class Account(BaseModel):
    id: int = Field(json_schema_extra={"db": "id"})
    display_name: str = Field("", json_schema_extra={"db": "name"})
    note: Optional[str] = None


@pytest.mark.unit
class TestBindingFor:
    def test_dataclass_binding(self):
        binding = binding_for(User)

        assert [f.name for f in binding.fields] == ["id", "name", "contacts"]
        assert list(binding.tagged()) == ["id", "name"]
        assert binding.required() == ()
        assert binding.tagged()["id"].annotation is int

    def test_pydantic_binding(self):
        binding = binding_for(Account)

        assert binding.tagged()["name"].name == "display_name"
        assert [f.name for f in binding.required()] == ["id"]
        assert binding.fields[2].tag is None

    def test_binding_is_cached(self):
        assert binding_for(User) is binding_for(User)

    def test_untagged_field_writes_under_its_name(self):
        contacts = binding_for(User).fields[2]
        assert contacts.tag is None
        assert contacts.column == "contacts"

    def test_duplicate_tags(self):
        @dataclass
        class Broken:
            first: str = db_field("name", default="")
            second: str = db_field("name", default="")

        with pytest.raises(BindingError, match="both bound to column 'name'") as exc_info:
            binding_for(Broken)
        assert exc_info.value.destination == "Broken"

    def test_non_record_type(self):
        with pytest.raises(BindingError, match="not a dataclass or pydantic model"):
            binding_for(dict)

    def test_init_false_fields_are_skipped(self):
        @dataclass
        class Row:
            id: int = db_field("id", default=0)
            computed: int = field(init=False, default=0)

        assert [f.name for f in binding_for(Row).fields] == ["id"]

    def test_db_field_keeps_existing_metadata(self):
        @dataclass
        class Row:
            id: int = db_field("id", default=0, metadata={"doc": "primary key"})

        from dataclasses import fields

        assert dict(fields(Row)[0].metadata) == {"doc": "primary key", "db": "id"}


@pytest.mark.unit
class TestIsRecordType:
    @pytest.mark.parametrize("destination", [User, Account])
    def test_record_types(self, destination):
        assert is_record_type(destination)

    @pytest.mark.parametrize("destination", [int, dict, User(), "User", Optional[int]])
    def test_other_values(self, destination):
        assert not is_record_type(destination)


@pytest.mark.unit
class TestRecordValues:
    def test_mapping(self):
        assert record_values({"id": 1}) == {"id": 1}

    def test_dataclass_instance(self):
        values = record_values(User(id=1, name="admin", contacts=["a@example.com"]))
        assert values == {"id": 1, "name": "admin", "contacts": ["a@example.com"]}

    def test_pydantic_instance_uses_tags(self):
        values = record_values(Account(id=3, display_name="admin"))
        assert values == {"id": 3, "name": "admin", "note": None}

    def test_plain_object(self):
        class Row:
            def __init__(self):
                self.id = 5
                self._hidden = True

        assert record_values(Row()) == {"id": 5}

    def test_named_tuple(self):
        class Login(NamedTuple):
            id: int
            name: str

        Point = namedtuple("Point", ["x", "y"])
        assert record_values(Login(4, "visitor")) == {"id": 4, "name": "visitor"}
        assert record_values(Point(1, 2)) == {"x": 1, "y": 2}
        assert is_named_tuple(Point(1, 2))
        assert not is_named_tuple((1, 2))

    @pytest.mark.parametrize("value", [42, "admin", None, User])
    def test_unsupported_values(self, value):
        with pytest.raises(TypeError):
            record_values(value)
