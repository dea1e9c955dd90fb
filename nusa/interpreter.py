"""Interpreter for NusaLang.

Walks a parsed :class:`~nusa.ast.Program` statement by statement against
an :class:`~nusa.environment.Environment`. ``print`` output goes to an
injected sink (any callable taking one line of text); everything else is
pure evaluation.

Calls do not use a scope chain. Each call runs its body in a full copy
of the caller's environment with the arguments bound on top, and the
copy is dropped when the body finishes. A callee can therefore read
everything the caller could see at the time of the call, but nothing it
binds is visible afterwards. Calls always evaluate to ``0``.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence
import math
import sys

from .ast import (
    Program, Let, ExprStmt, FuncDef, Print,
    NumberLit, StringLit, Ident, BinaryOp, Call, Node, Stmt,
)
from .environment import Environment
from .errors import (
    NusaError, UndefinedFunctionError, ArgumentMismatchError, NusaRuntimeError,
)
from .parser import parse_program
from .types import FunctionValue, Value, to_string, type_name


Output = Callable[[str], object]

DEFAULT_MAX_DEPTH = 100


class Interpreter:
    """Core interpreter that executes NusaLang ASTs."""
    def __init__(self, output: Output = print, debug_level: int = 0,
                 debug_file: Optional[str] = 'debug.txt', max_depth: int = DEFAULT_MAX_DEPTH):
        self.output = output
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None
        self.max_depth = max_depth
        self.depth = 0

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.global_env
        self.debug(f"run {len(program.body)} statements")
        try:
            try:
                self.execute_block(program.body, env)
            except RecursionError:
                raise NusaRuntimeError("expression nesting too deep") from None
            self.debug("finished")
        except NusaError as ex:
            self.debug(f"{ex.stage} error: {ex.message}")
            raise
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements: Sequence[Stmt], env: Environment) -> None:
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Node, env: Environment) -> None:
        if isinstance(node, Let):
            value = self.evaluate(node.expr, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, Print):
            self.output(to_string(self.evaluate(node.expr, env)))
            return
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return
        if isinstance(node, FuncDef):
            env.set(node.name, FunctionValue(node.name, node.params, node.body))
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Value:
        if isinstance(node, NumberLit):
            return node.value
        if isinstance(node, StringLit):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name)
        if isinstance(node, BinaryOp):
            # walk the left spine iteratively; long chains like 1 + 1 + ... + 1
            # are left-deep and would otherwise recurse once per operator
            spine = []
            while isinstance(node, BinaryOp):
                spine.append(node)
                node = node.left
            value = self.evaluate(node, env)
            for op_node in reversed(spine):
                right = self.evaluate(op_node.right, env)
                value = self.apply_binary_op(op_node.op, value, right)
            return value
        if isinstance(node, Call):
            func = env.lookup(node.name)
            if func is None:
                raise UndefinedFunctionError(node.name)
            if not isinstance(func, FunctionValue):
                raise NusaRuntimeError(f"cannot call non-function {node.name!r} ({type_name(func)})")
            if len(node.args) != func.arity:
                raise ArgumentMismatchError(node.name, func.arity, len(node.args))
            args = [self.evaluate(arg, env) for arg in node.args]
            self.call_function(func, args, env)
            return 0.0
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: FunctionValue, args: List[Value], caller_env: Environment) -> None:
        if self.depth >= self.max_depth:
            raise NusaRuntimeError(f"maximum call depth exceeded ({self.max_depth}) in {func.name}")
        call_env = caller_env.copy()
        for param, arg in zip(func.params, args):
            call_env.set(param, arg)
        self.depth += 1
        if self.debug_level >= 3:
            self.debug(f"enter {func.name} depth={self.depth}")
        try:
            self.execute_block(func.body, call_env)
        except RecursionError:
            # the host stack ran out before max_depth; report it from the outermost call
            if self.depth > 1:
                raise
            raise NusaRuntimeError(f"maximum call depth exceeded in {func.name}") from None
        finally:
            self.depth -= 1
        if self.debug_level >= 3:
            self.debug(f"leave {func.name} depth={self.depth}")

    def apply_binary_op(self, op: str, a: Value, b: Value) -> Value:
        if isinstance(a, float) and isinstance(b, float):
            if op == '+':
                return a + b
            if op == '-':
                return a - b
            if op == '*':
                return a * b
            if op == '/':
                return divide(a, b)
            raise NotImplementedError(f"unknown operator {op}")
        if isinstance(a, str) and isinstance(b, str):
            if op == '+':
                return a + b
            raise NusaRuntimeError(f"invalid operation for strings: {op}")
        raise NusaRuntimeError(f"expected numbers, got {type_name(a)} {op} {type_name(b)}")


def divide(a: float, b: float) -> float:
    """IEEE-754 division: x/0 is +-inf and 0/0 is NaN instead of an error."""
    if b == 0.0:
        if a == 0.0 or a != a:
            return float('nan')
        # the sign of a zero divisor counts: 1 / -0 == -inf
        negative = (a < 0) != (math.copysign(1.0, b) < 0)
        return float('-inf') if negative else float('inf')
    return a / b


def evaluate(program: Program, output: Output = print, **options) -> None:
    """Execute a parsed program, sending print output to ``output``."""
    Interpreter(output=output, **options).run(program)


def run_program(source: str, output: Output = print, **options) -> None:
    """Convenience function to tokenize, parse and run NusaLang source."""
    evaluate(parse_program(source), output, **options)
