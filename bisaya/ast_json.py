"""JSON serialization/deserialization for Bisaya++ AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. It supports a full round-trip for
all node types and `TypeSpec`.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    Block,
    Declaration,
    Assignment,
    Step,
    Print,
    Input,
    Branch,
    Conditional,
    Loop,
    BinaryOp,
    UnaryOp,
    Literal,
    Ident,
    Newline,
    Escape,
)
from .types import TypeSpec


def typespec_to_obj(t: TypeSpec) -> Dict[str, Any]:
    return {"kind": t.kind}


def typespec_from_obj(o: Dict[str, Any]) -> TypeSpec:
    return TypeSpec(o["kind"])


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (int, float, str, bool)):
        return node

    # TypeSpec
    if isinstance(node, TypeSpec):
        return {"__type__": "TypeSpec", "value": typespec_to_obj(node)}

    # Node types
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Declaration):
        return {
            "type": "Declaration",
            "type_spec": ast_to_obj(node.type_spec),
            "items": [[name, ast_to_obj(init)] for (name, init) in node.items],
        }
    if isinstance(node, Assignment):
        return {"type": "Assignment", "targets": list(node.targets), "value": ast_to_obj(node.value)}
    if isinstance(node, Step):
        return {"type": "Step", "name": node.name, "op": node.op}
    if isinstance(node, Print):
        return {"type": "Print", "segments": [ast_to_obj(s) for s in node.segments]}
    if isinstance(node, Input):
        return {"type": "Input", "names": list(node.names)}
    if isinstance(node, Branch):
        return {"type": "Branch", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Conditional):
        return {"type": "Conditional", "branches": [ast_to_obj(b) for b in node.branches]}
    if isinstance(node, Loop):
        return {
            "type": "Loop",
            "init": ast_to_obj(node.init),
            "condition": ast_to_obj(node.condition),
            "update": ast_to_obj(node.update),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value), "literal_type": node.literal_type}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, Newline):
        return {"type": "Newline"}
    if isinstance(node, Escape):
        return {"type": "Escape", "char": node.char}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, float, str, bool)):
        return obj
    if isinstance(obj, dict) and obj.get("__type__") == "TypeSpec":
        return typespec_from_obj(obj["value"])
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Declaration":
        return Declaration(
            type_spec=ast_from_obj(obj["type_spec"]),
            items=[(name, ast_from_obj(init)) for (name, init) in obj["items"]],
        )
    if t == "Assignment":
        return Assignment(targets=list(obj["targets"]), value=ast_from_obj(obj["value"]))
    if t == "Step":
        return Step(name=obj["name"], op=obj["op"])
    if t == "Print":
        return Print(segments=[ast_from_obj(s) for s in obj["segments"]])
    if t == "Input":
        return Input(names=list(obj["names"]))
    if t == "Branch":
        return Branch(condition=ast_from_obj(obj.get("condition")), body=ast_from_obj(obj["body"]))
    if t == "Conditional":
        return Conditional(branches=[ast_from_obj(b) for b in obj["branches"]])
    if t == "Loop":
        return Loop(
            init=ast_from_obj(obj["init"]),
            condition=ast_from_obj(obj["condition"]),
            update=ast_from_obj(obj["update"]),
            body=ast_from_obj(obj["body"]),
        )
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "Literal":
        return Literal(value=ast_from_obj(obj["value"]), literal_type=obj["literal_type"])
    if t == "Ident":
        return Ident(name=obj["name"])
    if t == "Newline":
        return Newline()
    if t == "Escape":
        return Escape(char=obj["char"])

    raise ValueError(f"Unknown AST node type: {t}")
