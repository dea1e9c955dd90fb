"""Parser for NusaLang.

A recursive-descent parser over the token list produced by
:func:`nusa.lexer.tokenize`. Statements are dispatched on their leading
token and expressions are parsed by precedence climbing:

    level 1:  +  -
    level 2:  *  /

Both levels are left-associative. A semicolon may follow any statement
and a lone semicolon is an empty statement, so ``print 1; print 2`` and
``print 1 print 2`` parse to the same program.

The public entry points are :func:`parse` (tokens to ``Program``) and
:func:`parse_program` (source text to ``Program``).
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from lark import Token

from .ast import (
    Program, Let, ExprStmt, FuncDef, Print,
    NumberLit, StringLit, Ident, BinaryOp, Call, Expr, Stmt,
)
from .errors import UnexpectedTokenError, UnexpectedEOFError, NestingTooDeepError
from .lexer import tokenize


# token type -> (precedence, operator)
BINARY_OPERATORS = {
    'PLUS': (1, '+'),
    'MINUS': (1, '-'),
    'STAR': (2, '*'),
    'SLASH': (2, '/'),
}


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def consume(self, expected: str) -> Token:
        token = self.peek()
        if token is None:
            raise UnexpectedEOFError(expected)
        if token.type != expected:
            raise UnexpectedTokenError(token, expected)
        self.pos += 1
        return token

    def match(self, expected: str) -> bool:
        token = self.peek()
        return token is not None and token.type == expected

    def skip_semicolons(self):
        while self.match('SEMICOLON'):
            self.pos += 1

    def parse_program(self) -> Program:
        statements: List[Stmt] = []
        self.skip_semicolons()
        try:
            while self.peek() is not None:
                statements.append(self.parse_statement())
                self.skip_semicolons()
        except RecursionError:
            # deeply parenthesized input exhausts the host stack
            raise NestingTooDeepError() from None
        return Program(tuple(statements))

    def parse_statement(self) -> Stmt:
        token = self.peek()
        if token is None:
            raise UnexpectedEOFError("statement")
        if token.type == 'LET':
            return self.parse_let()
        if token.type == 'FUNC':
            return self.parse_func_def()
        if token.type == 'PRINT':
            self.consume('PRINT')
            return Print(self.parse_expression())
        return ExprStmt(self.parse_expression())

    def parse_let(self) -> Let:
        self.consume('LET')
        name = self.consume('IDENT')
        self.consume('EQUAL')
        return Let(name.value, self.parse_expression())

    def parse_func_def(self) -> FuncDef:
        self.consume('FUNC')
        name = self.consume('IDENT')
        self.consume('LPAR')
        params: List[str] = []
        while self.match('IDENT'):
            params.append(self.consume('IDENT').value)
            if not self.match('COMMA'):
                break
            self.consume('COMMA')
        self.consume('RPAR')
        self.consume('LBRACE')
        body: List[Stmt] = []
        self.skip_semicolons()
        while not self.match('RBRACE'):
            body.append(self.parse_statement())
            self.skip_semicolons()
        self.consume('RBRACE')
        return FuncDef(name.value, tuple(params), tuple(body))

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_binary(0)

    def parse_binary(self, min_prec: int) -> Expr:
        left = self.parse_primary()
        while True:
            token = self.peek()
            if token is None or token.type not in BINARY_OPERATORS:
                break
            prec, op = BINARY_OPERATORS[token.type]
            if prec < min_prec:
                break
            self.pos += 1
            right = self.parse_binary(prec + 1)
            left = BinaryOp(op, left, right)
        return left

    def parse_primary(self) -> Expr:
        token = self.peek()
        if token is None:
            raise UnexpectedEOFError("expression")
        if token.type == 'NUMBER':
            self.pos += 1
            return NumberLit(token.value)
        if token.type == 'STRING':
            self.pos += 1
            return StringLit(token.value)
        if token.type == 'IDENT':
            self.pos += 1
            if self.match('LPAR'):
                return Call(token.value, self.parse_arguments())
            return Ident(token.value)
        if token.type == 'LPAR':
            self.consume('LPAR')
            expr = self.parse_expression()
            self.consume('RPAR')
            return expr
        raise UnexpectedTokenError(token, "expression")

    def parse_arguments(self) -> tuple:
        self.consume('LPAR')
        args: List[Expr] = []
        while not self.match('RPAR'):
            args.append(self.parse_expression())
            # a missing comma ends the list; the closing paren is then required
            if not self.match('COMMA'):
                break
            self.consume('COMMA')
        self.consume('RPAR')
        return tuple(args)


def parse(tokens: Sequence[Token]) -> Program:
    """Parse a token list into a Program AST."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Tokenize and parse NusaLang source code into a Program AST."""
    return parse(tokenize(source))
