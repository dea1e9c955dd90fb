"""JSON serialization/deserialization for NusaLang ASTs.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node becomes an
object whose ``"type"`` key names the node class; tuples become lists.
It supports a full round-trip for all node types.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    Let,
    ExprStmt,
    FuncDef,
    Print,
    NumberLit,
    StringLit,
    Ident,
    BinaryOp,
    Call,
)


def ast_to_obj(node: Any) -> Dict[str, Any]:
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(s) for s in node.body]}
    if isinstance(node, Let):
        return {"type": "Let", "name": node.name, "expr": ast_to_obj(node.expr)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, FuncDef):
        return {
            "type": "FuncDef",
            "name": node.name,
            "params": list(node.params),
            "body": [ast_to_obj(s) for s in node.body],
        }
    if isinstance(node, Print):
        return {"type": "Print", "expr": ast_to_obj(node.expr)}
    if isinstance(node, NumberLit):
        return {"type": "NumberLit", "value": node.value}
    if isinstance(node, StringLit):
        return {"type": "StringLit", "value": node.value}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Call):
        return {"type": "Call", "name": node.name, "args": [ast_to_obj(a) for a in node.args]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=tuple(ast_from_obj(s) for s in obj["body"]))
    if t == "Let":
        return Let(name=obj["name"], expr=ast_from_obj(obj["expr"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "FuncDef":
        return FuncDef(
            name=obj["name"],
            params=tuple(obj["params"]),
            body=tuple(ast_from_obj(s) for s in obj["body"]),
        )
    if t == "Print":
        return Print(expr=ast_from_obj(obj["expr"]))
    if t == "NumberLit":
        return NumberLit(value=float(obj["value"]))
    if t == "StringLit":
        return StringLit(value=obj["value"])
    if t == "Ident":
        return Ident(name=obj["name"])
    if t == "BinaryOp":
        if obj["op"] not in ('+', '-', '*', '/'):
            raise ValueError(f"Unknown binary operator: {obj['op']}")
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "Call":
        return Call(name=obj["name"], args=tuple(ast_from_obj(a) for a in obj["args"]))

    raise ValueError(f"Unknown AST node type: {t}")
