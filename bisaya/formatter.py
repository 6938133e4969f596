"""Rendering of IPAKITA segments into output lines."""

from __future__ import annotations

from typing import Any, Callable, List

from .ast import Escape, Ident, Literal, Newline, Node
from .environment import Environment
from .types import to_string


def render(segments: List[Node], env: Environment,
           evaluate: Callable[[Node, Environment], Any]) -> List[str]:
    """Concatenate the segments of one IPAKITA statement.

    `&` contributes no text. `$` ends the current line and starts a new one,
    so a statement yields one line plus one more per `$`. Any segment that is
    not a literal, a name, `$` or an escape is evaluated as an expression.
    """
    lines: List[str] = []
    current: List[str] = []
    for segment in segments:
        if isinstance(segment, Newline):
            lines.append(''.join(current))
            current = []
        elif isinstance(segment, Escape):
            current.append(segment.char)
        elif isinstance(segment, Literal):
            current.append(to_string(segment.value))
        elif isinstance(segment, Ident):
            current.append(to_string(env.get(segment.name)))
        else:
            current.append(to_string(evaluate(segment, env)))
    lines.append(''.join(current))
    return lines
