"""Pretty-printer that turns a Bisaya++ AST back into source text.

The output is canonical: one statement per line, four-space indentation
inside PUNDOK blocks, and every binary operation wrapped in parentheses.
Parsing the printed text yields a tree equal to the one printed.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Program, Block, Declaration, Assignment, Step, Print, Input,
    Conditional, Loop, BinaryOp, UnaryOp, Literal, Ident, Newline, Escape, Node,
)
from .types import TRUE_WORD, FALSE_WORD, format_float

INDENT = '    '


def format_literal(node: Literal) -> str:
    value = node.value
    if isinstance(value, bool):
        return f'"{TRUE_WORD}"' if value else f'"{FALSE_WORD}"'
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, int):
        return repr(value)
    # "OO"/"DILI" in double quotes would read back as TINUOD
    if "'" not in value:
        return f"'{value}'"
    return f'"{value}"'


def format_expression(node: Node) -> str:
    if isinstance(node, Literal):
        return format_literal(node)
    if isinstance(node, Ident):
        return node.name
    if isinstance(node, UnaryOp):
        operand = format_expression(node.operand)
        if node.op == 'DILI':
            return f"DILI {operand}"
        # "--x" would read back as a comment
        if isinstance(node.operand, UnaryOp):
            operand = f"({operand})"
        return f"{node.op}{operand}"
    if isinstance(node, BinaryOp):
        return f"({format_expression(node.left)} {node.op} {format_expression(node.right)})"
    raise NotImplementedError(f"format_expression: unexpected node type {type(node)}")


def format_segment(node: Node) -> str:
    if isinstance(node, Newline):
        return '$'
    if isinstance(node, Escape):
        return f'[{node.char}]'
    return format_expression(node)


def format_simple(node: Node) -> str:
    if isinstance(node, Step):
        return f"{node.name}{node.op}"
    if isinstance(node, Assignment):
        return ' = '.join(node.targets + [format_expression(node.value)])
    raise NotImplementedError(f"format_simple: unexpected node type {type(node)}")


def format_block(block: Block, depth: int, lines: List[str]) -> None:
    lines[-1] += ' PUNDOK{'
    for stmt in block.statements:
        format_statement(stmt, depth + 1, lines)
    lines.append(INDENT * depth + '}')


def format_statement(node: Node, depth: int, lines: List[str]) -> None:
    pad = INDENT * depth
    if isinstance(node, Declaration):
        items = []
        for name, initializer in node.items:
            items.append(name if initializer is None else f"{name} = {format_literal(initializer)}")
        lines.append(f"{pad}MUGNA {node.type_spec.kind} {', '.join(items)}")
    elif isinstance(node, (Assignment, Step)):
        lines.append(pad + format_simple(node))
    elif isinstance(node, Print):
        lines.append(f"{pad}IPAKITA: {' & '.join(format_segment(s) for s in node.segments)}")
    elif isinstance(node, Input):
        lines.append(f"{pad}DAWAT: {', '.join(node.names)}")
    elif isinstance(node, Conditional):
        for index, branch in enumerate(node.branches):
            if branch.condition is None:
                lines.append(f"{pad}KUNG WALA")
            else:
                keyword = 'KUNG' if index == 0 else 'KUNG DILI'
                lines.append(f"{pad}{keyword} ({format_expression(branch.condition)})")
            format_block(branch.body, depth, lines)
    elif isinstance(node, Loop):
        lines.append(f"{pad}ALANG SA ({format_simple(node.init)}, "
                     f"{format_expression(node.condition)}, {format_simple(node.update)})")
        format_block(node.body, depth, lines)
    else:
        raise NotImplementedError(f"format_statement: unexpected node type {type(node)}")


def format_program(program: Program) -> str:
    lines = ['SUGOD']
    for stmt in program.body:
        format_statement(stmt, 1, lines)
    lines.append('KATAPUSAN')
    return '\n'.join(lines) + '\n'
