"""Abstract Syntax Tree (AST) definitions for the Bisaya++ language.

The AST classes defined in this module represent the syntactic structure
of parsed Bisaya++ programs. Statement nodes own their expressions and
their PUNDOK blocks, which may nest to any depth. All nodes are plain
dataclasses, so two trees compare equal when they have the same shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Any

from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


@dataclass
class Block(Node):
    statements: List[Node]


@dataclass
class Declaration(Node):
    type_spec: TypeSpec
    items: List[Tuple[str, Optional['Literal']]]  # (name, initializer)


@dataclass
class Assignment(Node):
    targets: List[str]  # in source order; assigned right to left
    value: Node


@dataclass
class Step(Node):
    name: str
    op: str  # '++' or '--'


@dataclass
class Print(Node):
    segments: List[Node]


@dataclass
class Input(Node):
    names: List[str]


@dataclass
class Branch(Node):
    condition: Optional[Node]  # None for KUNG WALA
    body: Block


@dataclass
class Conditional(Node):
    branches: List[Branch]


@dataclass
class Loop(Node):
    init: Node  # Assignment or Step
    condition: Node
    update: Node  # Assignment or Step
    body: Block


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node


@dataclass
class UnaryOp(Node):
    op: str
    operand: Node


@dataclass
class Literal(Node):
    value: Any
    literal_type: str  # 'NUMERO', 'TIPIK', 'LETRA', 'TINUOD'


@dataclass
class Ident(Node):
    name: str


@dataclass
class Newline(Node):
    """The `$` marker inside IPAKITA."""
    pass


@dataclass
class Escape(Node):
    """A bracket-escaped character inside IPAKITA, e.g. `[#]`."""
    char: str
