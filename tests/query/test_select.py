"""Tests for kuery.query.Select: clauses, joins, subqueries, grouping and paging."""

import pytest

from kuery.column import Column
from kuery.errors import QuerySyntaxError
from kuery.expressions import exists
from kuery.functions import count
from kuery.query import Join, Select, select
from kuery.table import Table


def test_from_is_inferred_from_selected_columns(todos):
    compiled = select(todos.toDo_title).where(todos.toDo_completed == False).compile()  # noqa: E712
    assert compiled.sql == "SELECT toDoTable.toDo_title FROM toDoTable WHERE toDoTable.toDo_completed = ?"
    assert compiled.parameters == [False]


def test_docstring_example(todos, postgres):
    pending = select(todos.toDo_title).where(toDo_completed=False)
    compiled = pending.order_by(todos.toDo_title).limit(10).compile(postgres)
    assert compiled.sql == (
        'SELECT "toDoTable"."toDo_title" FROM "toDoTable" WHERE "toDoTable"."toDo_completed" = $1 '
        'ORDER BY "toDoTable"."toDo_title" ASC LIMIT 10'
    )
    assert compiled.parameters == [False]


def test_select_table_expands_to_its_columns(users):
    assert select(users).sql == "SELECT users.id, users.username, users.manager_id FROM users"


def test_select_star_from(users):
    assert select().from_(users).sql == "SELECT * FROM users"


def test_from_requires_a_table(users):
    with pytest.raises(TypeError):
        select().from_("users")


def test_empty_select():
    with pytest.raises(QuerySyntaxError, match="no columns and no tables"):
        select().compile()


def test_distinct(todos):
    assert select(todos.owner_id).distinct().sql == "SELECT DISTINCT toDoTable.owner_id FROM toDoTable"


def test_where_lookups(todos):
    compiled = select(todos.toDo_title).where(toDo_title__icontains="Milk", toDo_id__lt=42).compile()
    assert compiled.sql == (
        "SELECT toDoTable.toDo_title FROM toDoTable "
        "WHERE LOWER(toDoTable.toDo_title) LIKE ? ESCAPE '\\' AND toDoTable.toDo_id < ?"
    )
    assert compiled.parameters == ["%milk%", 42]


@pytest.mark.parametrize(
    "lookup, value, condition",
    [
        ({"owner_id__isnull": True}, None, "toDoTable.owner_id IS NULL"),
        ({"owner_id__isnull": False}, None, "toDoTable.owner_id IS NOT NULL"),
        ({"toDo_id__in": [1, 2]}, [1, 2], "toDoTable.toDo_id IN (?, ?)"),
        ({"toDo_id__range": (1, 5)}, [1, 5], "toDoTable.toDo_id BETWEEN ? AND ?"),
        ({"toDo_id__ne": 3}, [3], "toDoTable.toDo_id <> ?"),
        ({"toDo_id__gte": 3}, [3], "toDoTable.toDo_id >= ?"),
        ({"toDo_title__startswith": "a"}, ["a%"], "toDoTable.toDo_title LIKE ? ESCAPE '\\'"),
        ({"toDo_title__iexact": "Milk"}, ["milk"], "LOWER(toDoTable.toDo_title) = ?"),
    ],
)
def test_single_where_lookup(todos, lookup, value, condition):
    compiled = select(todos.toDo_title).where(**lookup).compile()
    assert compiled.sql == "SELECT toDoTable.toDo_title FROM toDoTable WHERE " + condition
    assert compiled.parameters == (value or [])


def test_where_unknown_column(todos):
    with pytest.raises(ValueError, match="has no column"):
        select(todos.toDo_title).where(nope=1)


def test_where_requires_conditions(todos):
    with pytest.raises(ValueError):
        select(todos.toDo_title).where()


def test_where_calls_are_anded(todos):
    query = select(todos.toDo_title).where(todos.toDo_id > 1).filter(todos.toDo_id < 9)
    assert query.sql == "SELECT toDoTable.toDo_title FROM toDoTable WHERE toDoTable.toDo_id > ? AND toDoTable.toDo_id < ?"
    assert query.parameters == [1, 9]


def test_builders_do_not_modify_the_base_query(todos):
    base = select(todos.toDo_title)
    filtered = base.where(todos.toDo_id == 1).order_by(todos.toDo_title).limit(3)
    assert base.where_clause is None
    assert base.order_by_fields == ()
    assert base.limit_value is None
    assert base.sql == "SELECT toDoTable.toDo_title FROM toDoTable"
    assert filtered is not base


def test_statements_compare_by_identity(todos):
    query = select(todos.toDo_title)
    assert query == query
    assert not (query == select(todos.toDo_title))
    assert len({query, select(todos.toDo_title)}) == 2


def test_order_by(todos):
    query = select(todos.toDo_title).order_by(todos.toDo_completed, todos.toDo_id.desc)
    assert query.sql == (
        "SELECT toDoTable.toDo_title FROM toDoTable ORDER BY toDoTable.toDo_completed ASC, toDoTable.toDo_id DESC"
    )


def test_order_by_requires_expressions(todos):
    with pytest.raises(TypeError):
        select(todos.toDo_title).order_by("toDo_title")


def test_inner_and_left_joins(todos, users):
    on = todos.owner_id == users.id
    assert select(todos.toDo_title, users.username).join(users, on=on).sql == (
        "SELECT toDoTable.toDo_title, users.username FROM toDoTable "
        "INNER JOIN users ON toDoTable.owner_id = users.id"
    )
    assert select(todos.toDo_title, users.username).left_join(users, on=on).sql == (
        "SELECT toDoTable.toDo_title, users.username FROM toDoTable "
        "LEFT OUTER JOIN users ON toDoTable.owner_id = users.id"
    )
    assert "RIGHT OUTER JOIN users" in select(todos.toDo_title).right_join(users, on=on).sql
    assert "FULL OUTER JOIN users" in select(todos.toDo_title).full_join(users, on=on).sql


def test_self_join_through_alias(users):
    managers = users.as_("managers")
    query = select(users.username, managers.username.as_("manager")).join(
        managers, on=users.manager_id == managers.id
    )
    assert query.sql == (
        "SELECT users.username, managers.username AS manager FROM users "
        "INNER JOIN users AS managers ON users.manager_id = managers.id"
    )


def test_join_using(todos, postgres):
    owners = Table("owners", Column("owner_id", int), Column("nickname", str))
    query = select(todos.toDo_title, owners.nickname).join(owners, using="owner_id")
    assert query.sql == (
        "SELECT toDoTable.toDo_title, owners.nickname FROM toDoTable INNER JOIN owners USING (owner_id)"
    )
    assert query.compile(postgres).sql.endswith('INNER JOIN "owners" USING ("owner_id")')


def test_cross_and_natural_joins(numbers, users):
    assert select(numbers.a, users.id).cross_join(users).sql == "SELECT t.a, users.id FROM t CROSS JOIN users"
    assert select(numbers.a).natural_join(users).sql == "SELECT t.a FROM t NATURAL JOIN users"


def test_join_conditions_are_checked(todos, users, context):
    query = select(todos.toDo_title).join(users, on=todos.owner_id == users.id, using="id")
    with pytest.raises(QuerySyntaxError, match="both ON and USING"):
        query.compile()
    with pytest.raises(QuerySyntaxError, match="takes no condition"):
        Join(kind="CROSS", table=users, on=todos.owner_id == users.id).build(context)


def test_join_requires_a_table(todos):
    with pytest.raises(TypeError):
        select(todos.toDo_title).join("users")


def test_in_subquery_numbers_placeholders_in_order(todos, users, postgres):
    owners = select(users.id).where(users.username.startswith("a"))
    query = select(todos.toDo_title).where(todos.toDo_completed == False, todos.owner_id.in_(owners))  # noqa: E712
    compiled = query.limit(5).compile(postgres)
    assert compiled.sql == (
        'SELECT "toDoTable"."toDo_title" FROM "toDoTable" '
        'WHERE "toDoTable"."toDo_completed" = $1 AND "toDoTable"."owner_id" IN '
        '(SELECT "users"."id" FROM "users" WHERE "users"."username" LIKE $2 ESCAPE \'\\\') LIMIT 5'
    )
    assert compiled.parameters == [False, "a%"]


def test_correlated_exists(todos, users):
    owned = select(todos.toDo_id).where(todos.owner_id == users.id)
    assert select(users.username).where(exists(owned)).sql == (
        "SELECT users.username FROM users WHERE EXISTS "
        "(SELECT toDoTable.toDo_id FROM toDoTable WHERE toDoTable.owner_id = users.id)"
    )
    assert select(users.username).where(~exists(owned)).sql.startswith(
        "SELECT users.username FROM users WHERE NOT EXISTS (SELECT"
    )


def test_subquery_as_from_source(todos):
    counts = select(todos.owner_id, count().as_("n")).group_by(todos.owner_id).as_subquery("counts")
    assert select().from_(counts).sql == (
        "SELECT * FROM (SELECT toDoTable.owner_id, COUNT(*) AS n FROM toDoTable "
        "GROUP BY toDoTable.owner_id) AS counts"
    )


def test_subquery_source_needs_an_alias(todos):
    unnamed = select(todos.owner_id).as_subquery()
    with pytest.raises(QuerySyntaxError, match="alias"):
        select().from_(unnamed).compile()


def test_union(users, todos):
    first = select(users.username)
    second = select(todos.toDo_title).where(todos.toDo_id > 3)
    assert first.union(second).sql == (
        "SELECT users.username FROM users UNION SELECT toDoTable.toDo_title FROM toDoTable WHERE toDoTable.toDo_id > ?"
    )
    assert " UNION ALL SELECT " in first.union_all(second).sql
    with pytest.raises(TypeError):
        first.union(users)


def test_union_member_cannot_be_ordered_or_paged(users, todos):
    first = select(users.username).order_by(users.username)
    for member in (
        select(todos.toDo_title).order_by(todos.toDo_title),
        select(todos.toDo_title).limit(1),
        select(todos.toDo_title).offset(2),
    ):
        with pytest.raises(QuerySyntaxError, match="UNION member cannot be ordered or paged"):
            first.union(member).compile()
    assert first.union(select(todos.toDo_title)).limit(1).sql == (
        "SELECT users.username FROM users UNION SELECT toDoTable.toDo_title FROM toDoTable "
        "ORDER BY users.username ASC LIMIT 1"
    )


def test_conditions_must_be_expressions():
    people = Table("people", Column("name", str))
    # `name` is the table's own attribute, so this comparison is a plain bool
    with pytest.raises(TypeError, match="where requires expressions"):
        select(people["name"]).where(people.name == "ann")
    with pytest.raises(TypeError, match="having requires expressions"):
        select(people["name"]).group_by(people["name"]).having(True)
    compiled = select(people["name"]).where(people["name"] == "ann").compile()
    assert compiled.sql == "SELECT people.name FROM people WHERE people.name = ?"
    assert compiled.parameters == ["ann"]


def test_group_by_having(todos):
    query = (
        select(todos.owner_id, count(todos.toDo_id))
        .group_by(todos.owner_id)
        .having(count(todos.toDo_id) > 2)
    )
    compiled = query.compile()
    assert compiled.sql == (
        "SELECT toDoTable.owner_id, COUNT(toDoTable.toDo_id) FROM toDoTable "
        "GROUP BY toDoTable.owner_id HAVING COUNT(toDoTable.toDo_id) > ?"
    )
    assert compiled.parameters == [2]


def test_having_validity_is_left_to_the_database(todos):
    # neither grouped nor aggregated: still compiles
    query = select(todos.owner_id).group_by(todos.owner_id).having(todos.toDo_title == "x")
    assert query.sql.endswith("HAVING toDoTable.toDo_title = ?")


def test_clause_order_does_not_depend_on_call_order(todos):
    query = (
        select(todos.owner_id)
        .limit(2)
        .order_by(todos.owner_id)
        .having(count() > 1)
        .group_by(todos.owner_id)
        .where(todos.toDo_id > 0)
    )
    assert query.sql == (
        "SELECT toDoTable.owner_id FROM toDoTable WHERE toDoTable.toDo_id > ? GROUP BY toDoTable.owner_id "
        "HAVING COUNT(*) > ? ORDER BY toDoTable.owner_id ASC LIMIT 2"
    )


def test_limit_and_offset_per_dialect(todos, sqlite, mysql, sqlserver):
    page = select(todos.toDo_title).limit(10).offset(20)
    assert page.sql == "SELECT toDoTable.toDo_title FROM toDoTable LIMIT 10 OFFSET 20"
    assert page.compile(sqlserver).sql == (
        "SELECT [toDoTable].[toDo_title] FROM [toDoTable] ORDER BY (SELECT NULL) OFFSET 20 ROWS FETCH NEXT 10 ROWS ONLY"
    )
    ordered = select(todos.toDo_title).order_by(todos.toDo_title).limit(10)
    assert ordered.compile(sqlserver).sql.endswith("ORDER BY [toDoTable].[toDo_title] ASC OFFSET 0 ROWS FETCH NEXT 10 ROWS ONLY")
    skip = select(todos.toDo_title).offset(5)
    assert skip.compile(sqlite).sql.endswith("LIMIT -1 OFFSET 5")
    assert skip.compile(mysql).sql.endswith("LIMIT 18446744073709551615 OFFSET 5")


@pytest.mark.parametrize("value", [-1, 2.5, "3", True, None])
def test_invalid_limit(todos, value):
    with pytest.raises(QuerySyntaxError):
        select(todos.toDo_title).limit(value)
    with pytest.raises(QuerySyntaxError):
        select(todos.toDo_title).offset(value)


def test_select_class_starts_empty():
    query = Select()
    assert query.select_fields == ()
    assert query.tables == ()
