import pytest

from bisaya.environment import Environment
from bisaya.errors import BisayaError
from bisaya.types import NoneVal, TypeSpec


@pytest.mark.parametrize('first, second', [
    (TypeSpec('NUMERO'), TypeSpec('NUMERO')),
    (TypeSpec('NUMERO'), TypeSpec('LETRA')),
    (TypeSpec('TINUOD'), TypeSpec('TIPIK')),
])
def test_duplicate_declaration_fails_regardless_of_type(first, second):
    env = Environment()
    env.declare('x', first)
    with pytest.raises(BisayaError) as exc:
        env.declare('x', second)
    assert exc.value.err.name == 'DeclarationError'


def test_declared_variables_start_unset():
    env = Environment()
    env.declare('n', TypeSpec('NUMERO'))
    assert isinstance(env.get('n'), NoneVal)
    assert env.type_of('n') == TypeSpec('NUMERO')


def test_declare_with_value():
    env = Environment()
    env.declare('t', TypeSpec('TINUOD'), True)
    assert env.get('t') is True


def test_assign_to_undeclared_name_fails():
    env = Environment()
    with pytest.raises(BisayaError) as exc:
        env.assign('ghost', 1)
    assert exc.value.err.name == 'ReferenceError'


def test_get_undeclared_name_fails():
    env = Environment()
    with pytest.raises(BisayaError) as exc:
        env.get('ghost')
    assert exc.value.err.name == 'ReferenceError'


@pytest.mark.parametrize('type_spec, value', [
    (TypeSpec('NUMERO'), 'text'),
    (TypeSpec('NUMERO'), True),
    (TypeSpec('TIPIK'), 3),
    (TypeSpec('LETRA'), 1),
    (TypeSpec('TINUOD'), 1),
])
def test_assign_wrong_type_fails(type_spec, value):
    env = Environment()
    env.declare('v', type_spec)
    with pytest.raises(BisayaError) as exc:
        env.assign('v', value)
    assert exc.value.err.name == 'TypeError'


def test_assign_replaces_value():
    env = Environment()
    env.declare('f', TypeSpec('TIPIK'), 1.5)
    env.assign('f', 2.25)
    assert env.get('f') == 2.25
