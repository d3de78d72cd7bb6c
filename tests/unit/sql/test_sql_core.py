"""
Unit tests for SQL core utilities: identifiers and parameters.
"""

import pytest

from sqlaspect.sql.core.identifier import qualify_column, quote_identifier
from sqlaspect.sql.core.parameters import ParameterList, placeholder


@pytest.mark.unit
class TestQuoteIdentifier:
    """Tests for quote_identifier function."""

    def test_quote_ascii_column(self):
        """ASCII column names should be double-quoted."""
        assert quote_identifier("user_id") == '"user_id"'

    def test_quote_unicode_column(self):
        """Non-ASCII names are quoted unchanged."""
        assert quote_identifier("年金计划号") == '"年金计划号"'

    def test_quote_with_internal_quotes(self):
        """Internal double quotes should be escaped."""
        assert quote_identifier('column"name') == '"column""name"'

    def test_quote_backtick_style(self):
        """Backtick style is used by MySQL."""
        assert quote_identifier("users", style="backtick") == "`users`"

    def test_quote_backtick_with_internal_backtick(self):
        assert quote_identifier("column`name", style="backtick") == "`column``name`"

    def test_empty_identifier_rejected(self):
        with pytest.raises(ValueError):
            quote_identifier("")

    def test_unknown_style_rejected(self):
        with pytest.raises(ValueError, match="Unknown quoting style"):
            quote_identifier("users", style="brackets")


@pytest.mark.unit
class TestQualifyColumn:
    """Tests for qualify_column function."""

    def test_qualify_with_table(self):
        assert qualify_column("users", "id") == '"users"."id"'

    def test_qualify_without_table(self):
        assert qualify_column(None, "id") == '"id"'

    def test_qualify_backtick(self):
        assert qualify_column("users", "id", style="backtick") == "`users`.`id`"


@pytest.mark.unit
class TestPlaceholders:
    def test_numeric(self):
        assert [placeholder("numeric", i) for i in (1, 2, 3)] == ["$1", "$2", "$3"]

    def test_qmark(self):
        assert placeholder("qmark", 7) == "?"

    def test_format(self):
        assert placeholder("format", 2) == "%s"

    def test_positions_start_at_one(self):
        with pytest.raises(ValueError):
            placeholder("numeric", 0)

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            placeholder("named", 1)


@pytest.mark.unit
class TestParameterList:
    def test_values_and_placeholders_stay_in_step(self):
        params = ParameterList("numeric")
        assert params.add(1) == "$1"
        assert params.add("admin") == "$2"
        assert params.add(None) == "$3"
        assert params.values() == (1, "admin", None)
        assert len(params) == 3

    def test_unknown_style_rejected(self):
        with pytest.raises(ValueError):
            ParameterList("pyformat")
