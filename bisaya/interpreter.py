"""Statement executor for the Bisaya++ language.

The `Interpreter` walks the statement tree of a parsed `Program` in strict
source order. Every statement handler receives the shared Environment and
the output list explicitly; PUNDOK blocks run against that same Environment,
so there is exactly one scope for the whole program.

Any BisayaError raised while executing a statement aborts the program and
propagates to the caller. Lines printed before the failure stay in the
output list the caller passed in.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Union
import builtins

from .ast import (
    Program, Declaration, Assignment, Step, Print, Input,
    Conditional, Loop, Node,
)
from .environment import Environment
from .errors import BisayaError
from .evaluator import Evaluator
from .formatter import render
from .parser import parse_program
from .types import ErrorVal, convert_input, is_number, type_name, to_string


InputProvider = Callable[[str], str]


def input_from(values: Union[InputProvider, Iterable[str], None]) -> InputProvider:
    """Turn a callable, an iterable of raw strings, or None into a provider.

    A provider is called once per DAWAT variable with the variable name and
    returns the raw text for it. With None the values are read from
    `builtins.input`.
    """
    if values is None:
        return lambda name: builtins.input()
    if callable(values):
        return values
    remaining = iter(values)

    def next_value(name: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise BisayaError(ErrorVal('InputError', f'no input left for {name}'))
    return next_value


class Interpreter:
    """Core interpreter that executes Bisaya++ AST."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 input_provider: Union[InputProvider, Iterable[str], None] = None,
                 writer: Optional[Callable[[str], Any]] = None):
        self.global_env = Environment()
        self.evaluator = Evaluator()
        self.read_input = input_from(input_provider)
        self.writer = writer
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    # Public API
    def run(self, program: Program, output: Optional[List[str]] = None,
            env: Optional[Environment] = None) -> List[str]:
        if output is None:
            output = []
        if env is None:
            env = self.global_env
        try:
            self.execute_block(program.body, env, output)
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None
        return output

    def execute_block(self, statements: List[Node], env: Environment, output: List[str]) -> None:
        for stmt in statements:
            self.execute(stmt, env, output)

    def execute(self, node: Node, env: Environment, output: List[str]) -> None:
        if isinstance(node, Declaration):
            for name, initializer in node.items:
                value = initializer.value if initializer is not None else None
                env.declare(name, node.type_spec, value)
                if self.debug_level >= 2:
                    self.debug(f"declare {name}: {node.type_spec!r} = {to_string(env.get(name))}")
            return
        if isinstance(node, Assignment):
            value = self.evaluator.evaluate(node.value, env)
            # chain semantics: one value, assigned right to left
            for name in reversed(node.targets):
                env.assign(name, value)
                if self.debug_level >= 2:
                    self.debug(f"assign {name} = {to_string(value)}")
            return
        if isinstance(node, Step):
            self.step(node, env)
            return
        if isinstance(node, Print):
            for line in render(node.segments, env, self.evaluator.evaluate):
                self.emit(line, output)
            return
        if isinstance(node, Input):
            for name in node.names:
                type_spec = env.type_of(name)
                raw = self.read_input(name)
                try:
                    value = convert_input(raw, type_spec)
                except ValueError as e:
                    raise BisayaError(ErrorVal('TypeError', f'invalid input for {name}: {e}'))
                env.assign(name, value)
                if self.debug_level >= 2:
                    self.debug(f"input {name} = {to_string(value)}")
            return
        if isinstance(node, Conditional):
            for index, branch in enumerate(node.branches):
                if branch.condition is not None:
                    cond = self.evaluator.evaluate(branch.condition, env)
                    taken = self.evaluator.is_truthy(cond)
                else:
                    taken = True
                if self.debug_level >= 3:
                    self.debug(f"branch {index} -> {taken}")
                if taken:
                    self.execute_block(branch.body.statements, env, output)
                    break
            return
        if isinstance(node, Loop):
            self.execute(node.init, env, output)
            iterations = 0
            while True:
                cond = self.evaluator.evaluate(node.condition, env)
                if not self.evaluator.is_truthy(cond):
                    break
                self.execute_block(node.body.statements, env, output)
                self.execute(node.update, env, output)
                iterations += 1
            if self.debug_level >= 3:
                self.debug(f"loop finished after {iterations} iterations")
            return
        # catch any other nodes
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def step(self, node: Step, env: Environment) -> None:
        current = env.get(node.name)
        if not is_number(current):
            raise BisayaError(ErrorVal('TypeError', f'{node.op} expects a number, {node.name} is {type_name(current)}'))
        env.assign(node.name, current + 1 if node.op == '++' else current - 1)
        if self.debug_level >= 2:
            self.debug(f"{node.name}{node.op} -> {to_string(env.get(node.name))}")

    def emit(self, line: str, output: List[str]) -> None:
        output.append(line)
        if self.writer is not None:
            self.writer(line)


def run_program(source: str, inputs: Union[InputProvider, Iterable[str], None] = None,
                debug_level: int = 0) -> List[str]:
    """Convenience function to parse and run a Bisaya++ program from source string.

    Returns the output lines. `inputs` supplies DAWAT values, either as an
    iterable of raw strings or as a callable taking the variable name.
    """
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, input_provider=inputs)
    return interpreter.run(ast_program)

