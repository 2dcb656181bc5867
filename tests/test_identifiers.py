import pytest

from dbtoolkit.db.identifiers import assert_identifier, is_valid_identifier, quote_identifier
from dbtoolkit.db.query import DBError, InvalidIdentifier


@pytest.mark.parametrize("name", ["user_id", "_tmp", "Table1", "a", "_", "x9_Y"])
def test_accepts_safe_identifiers(name):
    assert is_valid_identifier(name)
    assert assert_identifier(name) == name


@pytest.mark.parametrize("name", ["1abc", "user name", "drop;table", "", "name\n", "a-b", "`x`", None, 5])
def test_rejects_unsafe_identifiers(name):
    assert not is_valid_identifier(name)
    with pytest.raises(InvalidIdentifier) as excinfo:
        assert_identifier(name)
    assert excinfo.value.identifier == name


def test_invalid_identifier_is_a_db_and_value_error():
    with pytest.raises(DBError):
        assert_identifier("bad name")
    with pytest.raises(ValueError):
        assert_identifier("bad name")


def test_quote_uses_dialect_quote_char():
    assert quote_identifier("users") == '"users"'
    assert quote_identifier("users", "`") == "`users`"
    with pytest.raises(InvalidIdentifier):
        quote_identifier("users`; DROP TABLE x; --", "`")
