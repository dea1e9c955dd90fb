"""CLI entry point for the NusaLang interpreter.

Usage:
    python -m nusa [-v|-vv|-vvv] [--max-depth N] <program_file>
    python -m nusa [-v...] --tokens <program_file>
    python -m nusa [-v...] --emit-ast <program_file>
    python -m nusa [-v...] [--max-depth N] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --max-depth   Maximum nesting of function calls before a runtime error
  --tokens      Print the token stream of the given .nusa file
  --emit-ast    Parse the given .nusa file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are reported on stderr with the
stage that failed (Lexing, Parse or Runtime) and exit status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import NusaError
from .interpreter import Interpreter, DEFAULT_MAX_DEPTH
from .lexer import tokenize
from .parser import parse


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        print(f"Error: file {path} is not valid UTF-8", file=sys.stderr)
        sys.exit(1)


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def load_program(path: Path) -> Program:
    source = read_source(path)
    try:
        return parse(tokenize(source))
    except NusaError as e:
        print(f"{e.stage} error: {e.message}", file=sys.stderr)
        sys.exit(1)


def execute(program: Program, debug_level: int, max_depth: int) -> None:
    interpreter = Interpreter(debug_level=debug_level, max_depth=max_depth)
    try:
        interpreter.run(program)
    except NusaError as e:
        print(f"{e.stage} error: {e.message}", file=sys.stderr)
        sys.exit(1)


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='nusa', description="NusaLang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--max-depth', type=positive_int, default=DEFAULT_MAX_DEPTH,
                        help=f'maximum function call depth (default {DEFAULT_MAX_DEPTH})')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', metavar='NUSA_FILE', help='print the tokens of the given .nusa file')
    group.add_argument('--emit-ast', metavar='NUSA_FILE', help='emit AST JSON for the given .nusa file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='NusaLang program file (.nusa) to execute')
    args = parser.parse_args(argv)

    # Token dump mode
    if args.tokens:
        source = read_source(Path(args.tokens))
        try:
            tokens = tokenize(source)
        except NusaError as e:
            print(f"{e.stage} error: {e.message}", file=sys.stderr)
            sys.exit(1)
        for token in tokens:
            print(f"{token.line}:{token.column}\t{token.type}\t{token.value!r}")
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = load_program(program_file)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        try:
            obj = ast_to_obj(program)
            text = json.dumps(obj, ensure_ascii=False, indent=2)
        except RecursionError:
            print(f"Error: {program_file} is nested too deeply to serialize", file=sys.stderr)
            sys.exit(1)
        with open(out_path, 'w', encoding='utf-8') as out:
            out.write(text)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                program = ast_from_obj(json.load(f))
        except (ValueError, TypeError, KeyError, RecursionError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        execute(program, args.v, args.max_depth)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --tokens/--emit-ast/--ast')
    execute(load_program(Path(args.program)), args.v, args.max_depth)


if __name__ == '__main__':
    main()
