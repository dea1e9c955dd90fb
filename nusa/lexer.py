"""Tokenizer for NusaLang.

``tokenize`` turns source text into a list of ``lark.Token`` objects. A
token is a ``str`` subclass, so it prints like the text it came from, and
it carries ``type``, ``value`` and its source position (``line`` and
``column`` are 1-based). ``NUMBER`` tokens hold a ``float`` value and
``STRING`` tokens hold the decoded text.
"""

from __future__ import annotations

from typing import List

from lark import Token

from .errors import InvalidCharacterError, InvalidNumberError, UnterminatedStringError


KEYWORDS = {
    'func': 'FUNC',
    'let': 'LET',
    'print': 'PRINT',
}

PUNCTUATION = {
    '+': 'PLUS',
    '-': 'MINUS',
    '*': 'STAR',
    '/': 'SLASH',
    '=': 'EQUAL',
    '(': 'LPAR',
    ')': 'RPAR',
    '{': 'LBRACE',
    '}': 'RBRACE',
    ',': 'COMMA',
    ';': 'SEMICOLON',
}

ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '\\': '\\',
    '\'': '\'',
    '"': '"',
}

WHITESPACE = ' \t\r\n'
DIGITS = '0123456789'


def _is_ident_start(c: str) -> bool:
    return c.isascii() and (c.isalpha() or c == '_')


def _is_ident_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == '_')


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    The scan stops at the first character that cannot start a token.
    Numbers are scanned as any run of digits and dots and only then
    converted, so ``1.2.3`` is reported as an invalid number rather than
    split into several tokens. A string that reaches the end of input
    without its closing quote yields the text read so far; only a
    backslash at the very end of input is reported as unterminated.
    """
    tokens: List[Token] = []
    i = 0
    line = 1
    col = 1
    length = len(source)

    def advance(n: int = 1):
        nonlocal i, col, line
        for _ in range(n):
            if i < length and source[i] == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1

    while i < length:
        c = source[i]
        if c in WHITESPACE:
            advance()
            continue
        start_i, start_line, start_col = i, line, col
        if c in PUNCTUATION:
            tokens.append(Token(PUNCTUATION[c], c, start_i, start_line, start_col))
            advance()
            continue
        # Numbers
        if c in DIGITS:
            while i < length and (source[i] in DIGITS or source[i] == '.'):
                advance()
            text = source[start_i:i]
            try:
                value = float(text)
            except ValueError:
                raise InvalidNumberError(text, start_line, start_col)
            tokens.append(Token('NUMBER', value, start_i, start_line, start_col))
            continue
        # Identifiers and keywords
        if _is_ident_start(c):
            while i < length and _is_ident_char(source[i]):
                advance()
            text = source[start_i:i]
            tokens.append(Token(KEYWORDS.get(text, 'IDENT'), text, start_i, start_line, start_col))
            continue
        # Strings, either quote style
        if c == '\'' or c == '"':
            quote = c
            advance()
            chars: List[str] = []
            while i < length:
                ch = source[i]
                if ch == quote:
                    advance()
                    break
                if ch == '\\':
                    advance()
                    if i >= length:
                        raise UnterminatedStringError(start_line, start_col)
                    escaped = source[i]
                    chars.append(ESCAPES.get(escaped, escaped))
                    advance()
                    continue
                chars.append(ch)
                advance()
            tokens.append(Token('STRING', ''.join(chars), start_i, start_line, start_col))
            continue
        raise InvalidCharacterError(c, start_line, start_col)
    return tokens
