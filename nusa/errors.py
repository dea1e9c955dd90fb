"""Error types raised by the NusaLang pipeline.

Every stage raises a subclass of :class:`NusaError`. The first error
aborts the stage and nothing downstream runs, so callers only need to
catch the three family classes (``LexError``, ``ParseError`` and
``EvalError``) to report which stage failed.
"""

from typing import Any, Optional


class NusaError(Exception):
    """Base class for all NusaLang errors."""
    stage = 'Error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


###############################################################################
# Lexing
###############################################################################


class LexError(NusaError):
    stage = 'Lexing'

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column


class InvalidCharacterError(LexError):
    def __init__(self, char: str, line: int, column: int):
        super().__init__(f"invalid character {char!r}", line, column)
        self.char = char


class InvalidNumberError(LexError):
    def __init__(self, text: str, line: int, column: int):
        super().__init__(f"invalid number format {text!r}", line, column)
        self.text = text


class UnterminatedStringError(LexError):
    def __init__(self, line: int, column: int):
        super().__init__("unterminated string literal", line, column)


###############################################################################
# Parsing
###############################################################################


class ParseError(NusaError):
    stage = 'Parse'


class UnexpectedTokenError(ParseError):
    def __init__(self, token: Any, expected: Optional[str] = None):
        msg = f"unexpected token {token.type} {token.value!r} at {token.line}:{token.column}"
        if expected:
            msg += f", expected {expected}"
        super().__init__(msg)
        self.token = token
        self.expected = expected


class UnexpectedEOFError(ParseError):
    def __init__(self, expected: Optional[str] = None):
        msg = "unexpected end of file"
        if expected:
            msg += f", expected {expected}"
        super().__init__(msg)
        self.expected = expected


class NestingTooDeepError(ParseError):
    def __init__(self):
        super().__init__("expression nesting too deep")


###############################################################################
# Evaluation
###############################################################################


class EvalError(NusaError):
    stage = 'Runtime'


class UndefinedVariableError(EvalError):
    def __init__(self, name: str):
        super().__init__(f"undefined variable {name!r}")
        self.name = name


class UndefinedFunctionError(EvalError):
    def __init__(self, name: str):
        super().__init__(f"undefined function {name!r}")
        self.name = name


class ArgumentMismatchError(EvalError):
    def __init__(self, name: str, expected: int, got: int):
        super().__init__(f"{name} expects {expected} arguments, got {got}")
        self.name = name
        self.expected = expected
        self.got = got


class NusaRuntimeError(EvalError):
    """Catch-all for invalid operations detected while evaluating."""
