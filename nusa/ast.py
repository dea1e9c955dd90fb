"""Abstract Syntax Tree (AST) definitions for NusaLang.

The parser builds these nodes and the interpreter walks them. Nodes are
frozen dataclasses and every sequence is a tuple, so a tree never changes
once it has been parsed and subtrees can be shared safely (function values
hold on to their body without copying it).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


# Expressions

@dataclass(frozen=True)
class NumberLit(Node):
    value: float


@dataclass(frozen=True)
class StringLit(Node):
    value: str


@dataclass(frozen=True)
class Ident(Node):
    name: str


@dataclass(frozen=True)
class BinaryOp(Node):
    op: str  # one of '+', '-', '*', '/'
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Call(Node):
    name: str
    args: Tuple[Expr, ...]


Expr = Union[NumberLit, StringLit, Ident, BinaryOp, Call]


# Statements

@dataclass(frozen=True)
class Let(Node):
    name: str
    expr: Expr


@dataclass(frozen=True)
class ExprStmt(Node):
    expr: Expr


@dataclass(frozen=True)
class FuncDef(Node):
    name: str
    params: Tuple[str, ...]
    body: Tuple[Stmt, ...]


@dataclass(frozen=True)
class Print(Node):
    expr: Expr


Stmt = Union[Let, ExprStmt, FuncDef, Print]


@dataclass(frozen=True)
class Program(Node):
    body: Tuple[Stmt, ...]
