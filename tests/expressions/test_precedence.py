"""Tests for operand parenthesization: the compiled SQL keeps the structure of the expression tree."""

from kuery.expressions import Precedence, group, raw
from kuery.functions import lcase
from kuery.query_builder import QueryBuilder


def sql(expression, dialect=None):
    return QueryBuilder(dialect).compile(expression).sql


def test_levels_are_ordered():
    assert Precedence.OR < Precedence.AND < Precedence.NOT < Precedence.COMPARISON
    assert Precedence.COMPARISON < Precedence.CONCAT < Precedence.ADDITIVE
    assert Precedence.ADDITIVE < Precedence.MULTIPLICATIVE < Precedence.UNARY < Precedence.ATOM


def test_lower_precedence_child_is_wrapped(numbers):
    assert sql((numbers.a + numbers.b) * numbers.c) == "(t.a + t.b) * t.c"
    assert sql(numbers.a * (numbers.b + numbers.c)) == "t.a * (t.b + t.c)"


def test_higher_precedence_child_is_not_wrapped(numbers):
    assert sql(numbers.a * numbers.b + numbers.c) == "t.a * t.b + t.c"
    assert sql(numbers.a + numbers.b * numbers.c) == "t.a + t.b * t.c"


def test_right_operand_of_non_associative_operator(numbers):
    assert sql(numbers.a - (numbers.b - numbers.c)) == "t.a - (t.b - t.c)"
    assert sql(numbers.a / (numbers.b / numbers.c)) == "t.a / (t.b / t.c)"
    assert sql(numbers.a - (numbers.b + numbers.c)) == "t.a - (t.b + t.c)"


def test_left_operand_of_equal_precedence(numbers):
    assert sql((numbers.a - numbers.b) - numbers.c) == "t.a - t.b - t.c"


def test_associative_operators_need_no_parentheses(numbers):
    assert sql(numbers.a + (numbers.b + numbers.c)) == "t.a + t.b + t.c"
    assert sql(numbers.a * (numbers.b * numbers.c)) == "t.a * t.b * t.c"


def test_or_inside_and(numbers):
    expression = ((numbers.a == 1) | (numbers.b == 2)) & (numbers.c == 3)
    compiled = QueryBuilder().compile(expression)
    assert compiled.sql == "(t.a = ? OR t.b = ?) AND t.c = ?"
    assert compiled.parameters == [1, 2, 3]


def test_and_inside_or(numbers):
    expression = (numbers.a == 1) | (numbers.b == 2) & (numbers.c == 3)
    assert sql(expression) == "t.a = ? OR t.b = ? AND t.c = ?"


def test_not_wraps_boolean_operands(numbers):
    assert sql(~((numbers.a == 1) & (numbers.b == 2))) == "NOT (t.a = ? AND t.b = ?)"
    assert sql(~(numbers.a == 1)) == "NOT t.a = ?"


def test_comparison_inside_comparison(numbers):
    assert sql((numbers.a == 1) == False) == "(t.a = ?) = ?"  # noqa: E712


def test_arithmetic_inside_comparison(numbers):
    assert sql(numbers.a + 1 > numbers.b * 2) == "t.a + ? > t.b * ?"


def test_concat_and_arithmetic_are_always_separated(numbers):
    assert sql((numbers.a + numbers.b).concat("x")) == "(t.a + t.b) || ?"
    assert sql(numbers.s.concat("x") + 1) == "(t.s || ?) + ?"


def test_unary_minus(numbers):
    assert sql(-(numbers.a + numbers.b)) == "- (t.a + t.b)"
    assert sql(-numbers.a * numbers.b) == "- t.a * t.b"


def test_functions_and_literals_are_atoms(numbers):
    assert sql(lcase(numbers.s) == "x") == "LCASE(t.s) = ?"
    assert sql(lcase(numbers.s.concat("x"))) == "LCASE(t.s || ?)"


def test_explicit_group(numbers):
    assert sql(group(numbers.a) + 1) == "(t.a) + ?"
    assert sql(group((numbers.a == 1) & (numbers.b == 2)) | (numbers.c == 3)) == "(t.a = ? AND t.b = ?) OR t.c = ?"


def test_raw_fragment_is_verbatim(numbers):
    assert sql(numbers.a > raw("CURRENT_DATE")) == "t.a > CURRENT_DATE"
