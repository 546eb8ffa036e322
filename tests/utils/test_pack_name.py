"""Tests for kuery.utils.pack_name."""

import pytest

from kuery.utils.pack_name import pack_name


def test_generic_dialect_leaves_names_unquoted(generic):
    assert pack_name("toDoTable", generic) == "toDoTable"


def test_quotes_per_dialect(sqlite, mysql, postgres, sqlserver):
    assert pack_name("toDoTable", sqlite) == '"toDoTable"'
    assert pack_name("toDoTable", postgres) == '"toDoTable"'
    assert pack_name("toDoTable", mysql) == "`toDoTable`"
    assert pack_name("toDoTable", sqlserver) == "[toDoTable]"


def test_embedded_closing_quote_is_doubled(postgres, mysql, sqlserver):
    assert pack_name('odd"name', postgres) == '"odd""name"'
    assert pack_name("odd`name", mysql) == "`odd``name`"
    assert pack_name("odd]name", sqlserver) == "[odd]]name]"


@pytest.mark.parametrize("name", ["plain", "with space", "MixedCase"])
def test_packing_is_idempotent(name, postgres, sqlserver):
    for dialect in (postgres, sqlserver):
        once = pack_name(name, dialect)
        assert pack_name(once, dialect) == once
