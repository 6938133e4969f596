"""Expression evaluation for Bisaya++.

`Evaluator.evaluate` walks an expression tree and produces a runtime value
(int for NUMERO, float for TIPIK, str for LETRA, bool for TINUOD).
Identifiers are resolved through the Environment; nothing is ever handed to
Python's own expression evaluator.

Arithmetic follows the usual promotion rule: int with int stays int, any
float operand makes the result a float. Division of two ints truncates
toward zero and `%` on ints keeps the sign of the dividend, so that
`(a / b) * b + a % b == a` always holds.
"""

from __future__ import annotations

from typing import Any
import math

from .ast import BinaryOp, UnaryOp, Literal, Ident, Node
from .environment import Environment
from .errors import BisayaError
from .types import ErrorVal, NoneVal, is_number, type_name


_ARITHMETIC = ('+', '-', '*', '/', '%')
_ORDERING = ('<', '>', '<=', '>=')
_EQUALITY = ('==', '<>')


def operand_error(op: str, *values: Any) -> BisayaError:
    names = ' and '.join(type_name(v) for v in values)
    return BisayaError(ErrorVal('TypeError', f'unsupported {op} for {names}'))


class Evaluator:
    """Recursive evaluator over expression nodes."""

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            return self.apply_unary_op(node.op, operand)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            # Short-circuit for UG and O
            if node.op == 'UG':
                if not self.require_bool(node.op, left):
                    return False
                return self.require_bool(node.op, self.evaluate(node.right, env))
            if node.op == 'O':
                if self.require_bool(node.op, left):
                    return True
                return self.require_bool(node.op, self.evaluate(node.right, env))
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def require_bool(self, op: str, value: Any) -> bool:
        if not isinstance(value, bool):
            raise BisayaError(ErrorVal('TypeError', f'{op} expects TINUOD, got {type_name(value)}'))
        return value

    def is_truthy(self, value: Any) -> bool:
        # Conditions must be TINUOD; there is no implicit truthiness.
        if isinstance(value, bool):
            return value
        raise BisayaError(ErrorVal('TypeError', f'condition must be TINUOD, got {type_name(value)}'))

    def apply_unary_op(self, op: str, operand: Any) -> Any:
        if op == 'DILI':
            return not self.require_bool(op, operand)
        if op in ('-', '+'):
            if is_number(operand):
                return -operand if op == '-' else operand
            raise BisayaError(ErrorVal('TypeError', f'unary {op} expects a number, got {type_name(operand)}'))
        raise BisayaError(ErrorVal('TypeError', f'unsupported unary operator {op}'))

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op in _ARITHMETIC:
            # String concatenation
            if op == '+' and isinstance(a, str) and isinstance(b, str):
                return a + b
            if not (is_number(a) and is_number(b)):
                raise operand_error(op, a, b)
            return self.arithmetic(op, a, b)
        if op in _ORDERING:
            if (is_number(a) and is_number(b)) or (isinstance(a, str) and isinstance(b, str)):
                if op == '<': return a < b
                if op == '>': return a > b
                if op == '<=': return a <= b
                return a >= b
            raise operand_error(op, a, b)
        if op in _EQUALITY:
            if not self.comparable(a, b):
                raise operand_error(op, a, b)
            return (a == b) if op == '==' else (a != b)
        raise BisayaError(ErrorVal('TypeError', f'unknown operator {op}'))

    def comparable(self, a: Any, b: Any) -> bool:
        if isinstance(a, NoneVal) or isinstance(b, NoneVal):
            return False
        if is_number(a) and is_number(b):
            return True
        if isinstance(a, bool) and isinstance(b, bool):
            return True
        return isinstance(a, str) and isinstance(b, str)

    def arithmetic(self, op: str, a: Any, b: Any) -> Any:
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if b == 0:
            raise BisayaError(ErrorVal('RuntimeError', 'division by zero' if op == '/' else 'modulo by zero'))
        both_int = isinstance(a, int) and isinstance(b, int)
        if op == '/':
            if both_int:
                # integer division truncating toward zero
                quotient = abs(a) // abs(b)
                return quotient if (a < 0) == (b < 0) else -quotient
            return a / b
        # op == '%'
        if both_int:
            remainder = abs(a) % abs(b)
            return -remainder if a < 0 else remainder
        return math.fmod(a, b)
