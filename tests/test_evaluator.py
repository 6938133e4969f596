import pytest

from bisaya.ast import BinaryOp, Ident, Literal, UnaryOp
from bisaya.environment import Environment
from bisaya.errors import BisayaError
from bisaya.evaluator import Evaluator
from bisaya.interpreter import Interpreter
from bisaya.parser import parse_program
from bisaya.types import TypeSpec


def value_of(type_keyword: str, expression: str, declarations: str = ''):
    """Run `r = <expression>` with `r` declared as the given type and return r."""
    source = f"SUGOD\n{declarations}\nMUGNA {type_keyword} r\nr = {expression}\nKATAPUSAN"
    interp = Interpreter()
    interp.run(parse_program(source))
    return interp.global_env.get('r')


def error_name(expression: str, declarations: str = '', type_keyword: str = 'NUMERO') -> str:
    with pytest.raises(BisayaError) as exc:
        value_of(type_keyword, expression, declarations)
    return exc.value.err.name


@pytest.mark.parametrize('expression, expected', [
    ('7 / 2', 3),
    ('-7 / 2', -3),
    ('7 / -2', -3),
    ('7 % 3', 1),
    ('-7 % 3', -1),
    ('2 + 3 * 4', 14),
    ('(2 + 3) * 4', 20),
    ('10 - 4 - 3', 3),
])
def test_integer_arithmetic(expression, expected):
    assert value_of('NUMERO', expression) == expected


@pytest.mark.parametrize('expression, expected', [
    ('7.0 / 2', 3.5),
    ('1 + 2.5', 3.5),
    ('2 * 0.25', 0.5),
    ('5.5 % 2', 1.5),
])
def test_float_promotion(expression, expected):
    assert value_of('TIPIK', expression) == expected


def test_int_result_is_not_widened_into_tipik():
    assert error_name('1 + 2', type_keyword='TIPIK') == 'TypeError'


def test_string_concatenation():
    assert value_of('LETRA', '"ab" + \'c\'') == 'abc'


@pytest.mark.parametrize('expression', ['"a" + 1', '1 - "a"', '"OO" + 1', 'DILI 1', '-"a"'])
def test_operator_type_mismatch(expression):
    assert error_name(expression) == 'TypeError'


@pytest.mark.parametrize('expression', ['1 / 0', '1 % 0', '1.5 / 0'])
def test_division_by_zero(expression):
    assert error_name(expression) == 'RuntimeError'


@pytest.mark.parametrize('expression, expected', [
    ('1 < 2', True),
    ('2 <= 2', True),
    ('3 > 4', False),
    ('1 == 1.0', True),
    ('1 <> 2', True),
    ("'a' < 'b'", True),
    ("'a' == 'a'", True),
    ('"OO" == "DILI"', False),
    ('"OO" <> "DILI"', True),
    ('DILI "DILI"', True),
    ('"OO" UG "DILI"', False),
    ('"OO" O "DILI"', True),
])
def test_comparisons_and_logic(expression, expected):
    assert value_of('TINUOD', expression) is expected


@pytest.mark.parametrize('expression', ['1 == "1"', '"OO" == 1', '"OO" < "DILI"', '1 UG "OO"'])
def test_comparison_type_mismatch(expression):
    assert error_name(expression, type_keyword='TINUOD') == 'TypeError'


def test_undeclared_identifier():
    assert error_name('missing + 1') == 'ReferenceError'


def test_unset_operand():
    assert error_name('a + 1', declarations='MUGNA NUMERO a') == 'TypeError'


def test_and_short_circuits():
    declarations = 'MUGNA TINUOD f = "DILI"'
    # the right operand names an undeclared variable and is never evaluated
    assert value_of('TINUOD', 'f UG missing > 1', declarations) is False


def test_or_short_circuits():
    declarations = 'MUGNA TINUOD f = "DILI"'
    assert value_of('TINUOD', 'DILI f O missing > 1', declarations) is True


def test_right_operand_is_evaluated_when_needed():
    declarations = 'MUGNA TINUOD t = "OO"'
    assert error_name('t UG missing > 1', declarations, 'TINUOD') == 'ReferenceError'


def test_evaluate_nodes_directly():
    env = Environment()
    env.declare('n', TypeSpec('NUMERO'), 6)
    evaluator = Evaluator()
    node = BinaryOp('*', Ident('n'), UnaryOp('-', Literal(2, 'NUMERO')))
    assert evaluator.evaluate(node, env) == -12


def test_conditions_must_be_boolean():
    evaluator = Evaluator()
    with pytest.raises(BisayaError) as exc:
        evaluator.is_truthy(1)
    assert exc.value.err.name == 'TypeError'
