import pytest
from core.dialects import Dialect
from core.enum_extractor import extract_enum_values, parse_check_clause, parse_enum_type
from models.table import ColumnMetadata


@pytest.mark.parametrize("full_type, expected", [
    ("enum('active','inactive','pending')", ["active", "inactive", "pending"]),
    ("set('read','write')", ["read", "write"]),
    ("ENUM('b','a')", ["b", "a"]),
    ("enum('it''s','plain')", ["it's", "plain"]),
    ("enum('with, comma','x')", ["with, comma", "x"]),
    ("enum('a','b','a')", ["a", "b"]),
])
def test_parse_enum_type(full_type, expected):
    assert parse_enum_type(full_type) == expected


@pytest.mark.parametrize("full_type", [None, "", "varchar(255)", "int(11)", "enumeration", "enum("])
def test_parse_enum_type_non_enum(full_type):
    assert parse_enum_type(full_type) is None


def test_parse_check_clause():
    assert parse_check_clause("([status]='active' OR [status]='inactive')") == ["active", "inactive"]


def test_parse_check_clause_in_list():
    assert parse_check_clause("([size] IN ('S','M','L'))") == ["S", "M", "L"]


def test_parse_check_clause_empty_and_escaped_literals():
    assert parse_check_clause("([code]='' OR [code]='A')") == ["", "A"]
    assert parse_check_clause("([note]='it''s' OR [note]='ok')") == ["it's", "ok"]


def test_parse_check_clause_without_literals():
    assert parse_check_clause("([total]>=(0))") is None
    assert parse_check_clause(None) is None
    assert parse_check_clause("([name]<>'") is None


def test_extract_dispatches_per_dialect():
    col = ColumnMetadata(
        name="status", data_type="enum",
        full_type="enum('a','b')", check_clause="([status]='x')",
    )
    assert extract_enum_values(Dialect.MYSQL, col) == ["a", "b"]
    assert extract_enum_values(Dialect.MSSQL, col) == ["x"]
