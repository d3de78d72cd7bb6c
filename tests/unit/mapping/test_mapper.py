"""
Unit tests for the result mapper.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

import pytest
from pydantic import BaseModel, Field

from sqlaspect import MappingError, NoResultError, Result, db_field, map_all, map_one, map_scalar
from sqlaspect.mapping.mapper import convert


@dataclass
class User:
    id: int = db_field("id", default=0)
    name: str = db_field("name", default="")
    is_admin: bool = db_field("is_admin", default=False)
    contacts: List[str] = field(default_factory=list)


@dataclass
class Login:
    name: str = db_field("name")
    last_seen: Optional[date] = db_field("last_seen", default=None)


class Account(BaseModel):
    id: int = Field(json_schema_extra={"db": "id"})
    display_name: str = Field("", json_schema_extra={"db": "name"})


@dataclass
class Session:
    token: str
    user_id: int = db_field("id", default=0)
    user_name: str = db_field("name", default="")


class Profile(BaseModel):
    theme: str
    user_id: int = Field(0, json_schema_extra={"db": "id"})


@pytest.fixture
def user_rows() -> Result:
    return Result.from_rows(
        ["id", "name", "password", "is_admin"],
        [(1, "admin", "secret", 1), (2, "client", "hunter2", 0)],
    )


@pytest.mark.unit
class TestMapOne:
    def test_dataclass(self, user_rows):
        """Extra result columns are ignored and untagged fields keep defaults."""
        user = map_one(user_rows, User)
        assert user == User(id=1, name="admin", is_admin=True)
        assert user.contacts == []

    def test_pydantic_model(self, user_rows):
        account = map_one(user_rows, Account)
        assert account.id == 1
        assert account.display_name == "admin"

    def test_missing_optional_column_keeps_default(self):
        result = Result.from_rows(["id"], [(9,)])
        assert map_one(result, User) == User(id=9)

    def test_missing_required_column(self):
        result = Result.from_rows(["id", "last_seen"], [(1, None)])
        with pytest.raises(MappingError, match="field 'name' has no default") as exc_info:
            map_one(result, Login)
        assert exc_info.value.destination == "Login"

    def test_values_are_converted(self):
        result = Result.from_rows(["name", "last_seen"], [("admin", "2024-03-01")])
        assert map_one(result, Login) == Login(name="admin", last_seen=date(2024, 3, 1))

    def test_conversion_failure(self):
        result = Result.from_rows(["id"], [("not a number",)])
        with pytest.raises(MappingError, match="cannot convert 'not a number' to int") as exc_info:
            map_one(result, User)
        assert exc_info.value.column == "id"

    def test_no_rows(self):
        with pytest.raises(NoResultError):
            map_one(Result.from_rows(["id", "name"]), User)

    def test_scalar_destination(self):
        assert map_one(Result.from_rows(["count"], [("3",)]), int) == 3

    @pytest.mark.parametrize("destination", [None, "User", 3])
    def test_invalid_destination(self, user_rows, destination):
        with pytest.raises(MappingError, match="destination must be a type"):
            map_one(user_rows, destination)

    def test_null_for_required_string(self):
        result = Result.from_rows(["id", "name"], [(1, None)])
        with pytest.raises(MappingError, match="cannot convert None to str") as exc_info:
            map_one(result, User)
        assert exc_info.value.column == "name"

    def test_untagged_field_without_default_needs_a_template(self, user_rows):
        """Only tagged fields are checked against the result columns."""
        with pytest.raises(MappingError, match="cannot construct destination") as exc_info:
            map_one(user_rows, Session)
        assert exc_info.value.destination == "Session"

    def test_dataclass_template(self, user_rows):
        template = Session(token="abc")
        session = map_one(user_rows, template)
        assert session == Session(token="abc", user_id=1, user_name="admin")
        assert template.user_id == 0

    def test_pydantic_template(self, user_rows):
        profile = map_one(user_rows, Profile(theme="dark"))
        assert profile.theme == "dark"
        assert profile.user_id == 1

    def test_template_keeps_unbound_tagged_fields(self):
        result = Result.from_rows(["id"], [(7,)])
        session = map_one(result, Session(token="abc", user_name="kept"))
        assert session == Session(token="abc", user_id=7, user_name="kept")

    def test_inconsistent_binding(self, user_rows):
        @dataclass
        class Broken:
            a: int = db_field("id", default=0)
            b: int = db_field("id", default=0)

        with pytest.raises(MappingError, match="both bound"):
            map_one(user_rows, Broken)


@pytest.mark.unit
class TestMapAll:
    def test_records_in_result_order(self, user_rows):
        users = map_all(user_rows, User)
        assert [u.id for u in users] == [1, 2]
        assert [u.is_admin for u in users] == [True, False]

    def test_empty_result(self):
        assert map_all(Result.from_rows(["id", "name"]), User) == []

    def test_scalars(self):
        result = Result.from_rows(["id"], [(3,), (1,), (2,)])
        assert map_all(result, int) == [3, 1, 2]

    def test_optional_scalars(self):
        result = Result.from_rows(["id"], [(1,), (None,)])
        assert map_all(result, Optional[int]) == [1, None]

    def test_scalars_need_one_column(self, user_rows):
        with pytest.raises(MappingError, match="exactly one result column"):
            map_all(user_rows, int)

    def test_template_per_row(self, user_rows):
        sessions = map_all(user_rows, Session(token="abc"))
        assert [(s.token, s.user_id) for s in sessions] == [("abc", 1), ("abc", 2)]
        assert sessions[0] is not sessions[1]

    def test_each_call_builds_a_new_list(self, user_rows):
        first = map_all(user_rows, User)
        second = map_all(user_rows, User)
        assert first == second
        assert first is not second


@pytest.mark.unit
class TestMapScalar:
    def test_first_value(self):
        result = Result.from_rows(["count"], [(5,), (6,)])
        assert map_scalar(result) == 5

    def test_with_type(self):
        assert map_scalar(Result.from_rows(["flag"], [(1,)]), bool) is True

    def test_no_rows(self):
        with pytest.raises(NoResultError, match="no rows"):
            map_scalar(Result.from_rows(["count"]))

    def test_several_columns(self, user_rows):
        with pytest.raises(MappingError, match="got 4"):
            map_scalar(user_rows)


@pytest.mark.unit
class TestConvert:
    def test_any_and_none_leave_values_untouched(self):
        marker = object()
        assert convert(marker, None) is marker

    def test_lax_conversion(self):
        assert convert("12", int) == 12
        assert convert(0, bool) is False

    def test_none_for_required_type(self):
        with pytest.raises(MappingError):
            convert(None, int, column="id")


@pytest.mark.unit
class TestResult:
    def test_row_width_must_match(self):
        with pytest.raises(ValueError, match="row 1 has 1 values"):
            Result.from_rows(["id", "name"], [(1, "admin"), (2,)])

    def test_first_and_len(self):
        result = Result.from_rows(["id"], [[1], [2]])
        assert result.first() == (1,)
        assert len(result) == 2
        assert Result.from_rows(["id"]).first() is None
