"""Tests for kuery.dialects: per-engine quoting, placeholders, type names, paging and helpers."""

import pytest
from pydantic import ValidationError

from kuery.data_kind import DataKind
from kuery.dialects import (
    DIALECTS_BY_SCHEME,
    Dialect,
    MysqlDialect,
    PlaceholderStyle,
    PostgresDialect,
    SqliteDialect,
    SqlserverDialect,
    get_dialect_for_scheme,
)
from kuery.dialects.base import escape_for_like
from kuery.errors import QuerySyntaxError
from kuery.expressions import BinaryOperatorExpression, FunctionExpression


def test_generic_defaults(generic):
    assert generic.name == "generic"
    assert generic.identifier_quote == ("", "")
    assert generic.placeholder_style == PlaceholderStyle.QMARK
    assert generic.bind_literals is True
    assert generic.create_auto_increment is None
    assert generic.substitute("TRUE") == "true"
    assert generic.substitute("COALESCE") == "COALESCE"


def test_placeholder_styles():
    assert Dialect().placeholder(3) == "?"
    assert Dialect(placeholder_style=PlaceholderStyle.NUMERIC).placeholder(3) == "$3"
    assert Dialect(placeholder_style=PlaceholderStyle.NAMED).placeholder(3) == ":p3"
    assert PostgresDialect().placeholder(1) == "$1"


def test_dialects_are_frozen(generic):
    with pytest.raises(ValidationError):
        generic.bind_literals = False


def test_fields_can_be_overridden_per_instance():
    dialect = PostgresDialect(bind_literals=False)
    assert dialect.bind_literals is False
    assert dialect.identifier_quote == ('"', '"')


def test_type_names():
    assert Dialect().type_name(DataKind.DOUBLE) == "DOUBLE"
    assert SqliteDialect().type_name(DataKind.DOUBLE) == "REAL"
    assert PostgresDialect().type_name(DataKind.BLOB) == "BYTEA"
    assert MysqlDialect().type_name(DataKind.TIMESTAMP) == "DATETIME"
    assert SqlserverDialect().type_name(DataKind.BOOLEAN) == "BIT"


def test_type_name_missing_raises():
    dialect = Dialect(type_names={DataKind.INTEGER: "INTEGER"})
    with pytest.raises(QuerySyntaxError, match="TEXT"):
        dialect.type_name(DataKind.TEXT)


def test_function_substitutions():
    assert Dialect().function_sql("LCASE", ["x"]) == "LCASE(x)"
    assert PostgresDialect().function_sql("LCASE", ["x"]) == "LOWER(x)"
    assert MysqlDialect().function_sql("LEN", ["x"]) == "CHAR_LENGTH(x)"
    assert SqliteDialect().function_sql("MID", ["x", "1"]) == "SUBSTR(x, 1)"
    assert SqliteDialect().function_sql("NOW", []) == "DATETIME('now')"
    assert SqlserverDialect().function_sql("NOW", []) == "GETDATE()"


def test_limit_clauses():
    assert Dialect().limit_clause(None, None, False) == ""
    assert Dialect().limit_clause(10, 20, False) == "LIMIT 10 OFFSET 20"
    assert SqliteDialect().limit_clause(None, 5, False) == "LIMIT -1 OFFSET 5"
    assert MysqlDialect().limit_clause(None, 5, False) == "LIMIT 18446744073709551615 OFFSET 5"
    assert SqlserverDialect().limit_clause(10, None, True) == "OFFSET 0 ROWS FETCH NEXT 10 ROWS ONLY"
    assert SqlserverDialect().limit_clause(10, 5, False) == (
        "ORDER BY (SELECT NULL) OFFSET 5 ROWS FETCH NEXT 10 ROWS ONLY"
    )


def test_pack_bytes():
    assert Dialect().pack_bytes(b"\x01\xab") == "X'01AB'"
    assert PostgresDialect().pack_bytes(b"\x01\xab") == "'\\x01ab'::bytea"
    assert SqlserverDialect().pack_bytes(b"\x01\xab") == "0x01AB"


def test_auto_increment_generators():
    assert SqliteDialect().create_auto_increment("INTEGER") == "INTEGER"
    assert SqliteDialect().create_auto_increment("TEXT") == ""
    assert PostgresDialect().create_auto_increment("BIGINT") == "BIGSERIAL"
    assert SqlserverDialect().create_auto_increment("INT") == "INT IDENTITY(1,1)"
    assert SqliteDialect.AUTO_INCREMENT_REQUIRES_PRIMARY_KEY
    assert not PostgresDialect.AUTO_INCREMENT_REQUIRES_PRIMARY_KEY


def test_f_concat_operator_and_function():
    expression = SqliteDialect().f.concat("a", "b", "c")
    assert isinstance(expression, BinaryOperatorExpression)
    assert expression.symbol == "||"
    function = MysqlDialect().f.concat("a", "b")
    assert isinstance(function, FunctionExpression)
    assert function.symbol == "CONCAT"


def test_f_unknown_helper_raises(generic):
    with pytest.raises(AttributeError):
        generic.f.nope


def test_escape_for_like():
    assert escape_for_like("hello") == "hello"
    assert escape_for_like("50%") == "50\\%"
    assert escape_for_like("a_b") == "a\\_b"
    assert escape_for_like("\\") == "\\\\"
    assert SqliteDialect().f.escape_for_like("x%_\\y") == "x\\%\\_\\\\y"


@pytest.mark.parametrize(
    "scheme, dialect_class",
    [
        ("sqlite", SqliteDialect),
        ("mysql", MysqlDialect),
        ("mysql+pymysql", MysqlDialect),
        ("postgresql", PostgresDialect),
        ("postgres", PostgresDialect),
        ("MSSQL", SqlserverDialect),
    ],
)
def test_get_dialect_for_scheme(scheme, dialect_class):
    assert type(get_dialect_for_scheme(scheme)) is dialect_class


def test_get_dialect_for_unknown_scheme():
    with pytest.raises(ValueError, match="Unsupported database scheme"):
        get_dialect_for_scheme("oracle")


def test_scheme_registry_covers_every_engine():
    assert DIALECTS_BY_SCHEME["postgres"] is PostgresDialect
    assert DIALECTS_BY_SCHEME["mssql"] is DIALECTS_BY_SCHEME["sqlserver"] is SqlserverDialect
    assert set(DIALECTS_BY_SCHEME.values()) == {SqliteDialect, MysqlDialect, PostgresDialect, SqlserverDialect}


def test_pack_string_per_dialect():
    assert Dialect().pack_string("a\\b'c") == "'a\\b''c'"
    assert MysqlDialect().pack_string("a\\b'c") == "'a\\\\b''c'"
