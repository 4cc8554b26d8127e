"""CLI entry point for the minic interpreter.

Usage:
    python -m minic [-v|-vv|-vvv] <program_file>
    python -m minic [-v...] --emit-ast <program_file>
    python -m minic [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given program and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Builtins and the null/true/false
constants are bound before the program runs. A result other than null is
printed as `Interpreter Result: <value>`.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .interpreter import Interpreter, bootstrap_environment
from .parser import parse_program
from .types import NullVal, inspect


def read_source(path: Path) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file {path}: {e}", file=sys.stderr)
        sys.exit(1)


def parse_or_exit(source: str, path: Path) -> Program:
    try:
        program, errors = parse_program(source)
    except RecursionError:
        print(f"Error parsing file {path}: expression nested too deeply", file=sys.stderr)
        sys.exit(1)
    if errors:
        print("Parser errors:")
        for err in errors:
            print(f"\t{err}")
        sys.exit(1)
    return program


def evaluate(program: Program, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    result = interpreter.run(program, bootstrap_environment())
    if not isinstance(result, NullVal):
        print(f"Interpreter Result: {inspect(result)}")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='minic', description="minic language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='SOURCE_FILE', help='emit AST JSON for the given source file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        program = parse_or_exit(read_source(program_file), program_file)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        try:
            program = ast_from_obj(json.loads(read_source(ast_path)))
        except (ValueError, TypeError, KeyError) as e:
            print(f"Error loading AST {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(program, Program):
            print(f"Error loading AST {ast_path}: not a program", file=sys.stderr)
            sys.exit(1)
        evaluate(program, args.v)
        return

    # Default: execute source file
    if not args.program:
        print(f"Usage: {parser.prog} <filename>", file=sys.stderr)
        sys.exit(1)
    program_file = Path(args.program)
    program = parse_or_exit(read_source(program_file), program_file)
    evaluate(program, args.v)


if __name__ == '__main__':
    main()
