import pytest

from kuery import configuration
from kuery.column import Column
from kuery.context import BuildContext
from kuery.data_kind import DataKind
from kuery.dialects import Dialect, MysqlDialect, PostgresDialect, SqliteDialect, SqlserverDialect
from kuery.table import Table


@pytest.fixture(autouse=True)
def reset_configuration():
    """Every test starts (and leaves) with no registered dialect."""
    configuration.reset()
    yield
    configuration.reset()


@pytest.fixture
def generic():
    return Dialect()


@pytest.fixture
def inline():
    return Dialect(bind_literals=False)


@pytest.fixture
def sqlite():
    return SqliteDialect()


@pytest.fixture
def mysql():
    return MysqlDialect()


@pytest.fixture
def postgres():
    return PostgresDialect()


@pytest.fixture
def sqlserver():
    return SqlserverDialect()


@pytest.fixture
def context(generic):
    return BuildContext(dialect=generic)


@pytest.fixture
def todos():
    return Table(
        "toDoTable",
        Column("toDo_id", DataKind.INTEGER, auto_increment=True, primary_key=True, not_null=True, unique=True),
        Column("toDo_title", str, not_null=True),
        Column("toDo_completed", bool, default=False),
        Column("owner_id", int),
    )


@pytest.fixture
def users():
    return Table(
        "users",
        Column("id", int, primary_key=True),
        Column("username", str),
        Column("manager_id", int),
    )


@pytest.fixture
def numbers():
    return Table("t", Column("a", int), Column("b", int), Column("c", int), Column("s", str), Column("p", str))
