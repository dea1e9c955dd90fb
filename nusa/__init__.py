# NusaLang package
# This package provides the lexer, parser and interpreter for NusaLang.
from .errors import NusaError, LexError, ParseError, EvalError
from .lexer import tokenize
from .parser import parse, parse_program
from .interpreter import evaluate, run_program, Interpreter

__all__ = [
    'tokenize',
    'parse',
    'parse_program',
    'evaluate',
    'run_program',
    'Interpreter',
    'NusaError',
    'LexError',
    'ParseError',
    'EvalError',
]
