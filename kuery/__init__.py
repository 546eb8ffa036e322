"""kuery: database-agnostic SQL query construction on Pydantic models."""

from .column import Column
from .configuration import get_dialect, use
from .data_kind import DataKind
from .dialects import (
    Dialect,
    MysqlDialect,
    PlaceholderStyle,
    PostgresDialect,
    SqliteDialect,
    SqlserverDialect,
    get_dialect_for_scheme,
)
from .errors import QueryError, QuerySyntaxError
from .execution import Executor, execute
from .expressions import Expression, exists, raw
from .predicates import and_, not_, or_
from .query import Delete, Insert, Join, Select, delete, insert, select, update, Update
from .query_builder import (
    CompiledQuery,
    QueryBuilder,
    compile,
    compile_create_index,
    compile_create_table,
    compile_drop_table,
)
from .table import ForeignKey, Index, Table
