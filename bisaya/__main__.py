"""CLI entry point for the Bisaya++ interpreter.

Usage:
    python -m bisaya [-v|-vv|-vvv] <program_file>
    python -m bisaya [-v...] --emit-ast <program_file>
    python -m bisaya [-v...] --ast <ast_json_file>
    python -m bisaya --format <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .bpp file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --format      Print the program back in canonical layout

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Output lines are printed as soon as each
IPAKITA runs. DAWAT reads one console line and splits it on commas, so
`DAWAT: x, y` can be answered with `4, 5`.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .ast_json import ast_to_obj, ast_from_obj
from .errors import BisayaError, error
from .interpreter import Interpreter
from .parser import parse_program
from .printer import format_program


class ConsoleInput:
    """Feeds DAWAT one value at a time from comma-separated console lines."""
    def __init__(self, read_line=None):
        self.read_line = read_line or (lambda: input())
        self.pending: List[str] = []

    def __call__(self, name: str) -> str:
        while not self.pending:
            # prompt goes to stderr; stdout is program output only
            print(f"Enter value for {name}: ", end='', file=sys.stderr, flush=True)
            try:
                line = self.read_line()
            except EOFError:
                raise error('InputError', f'no input left for {name}')
            self.pending = [part.strip() for part in line.split(',')]
        return self.pending.pop(0)


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def execute(program, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level, input_provider=ConsoleInput(), writer=print)
    try:
        interpreter.run(program)
    except BisayaError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: List[str] = None) -> None:
    parser = argparse.ArgumentParser(description="Bisaya++ language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='BPP_FILE', help='emit AST JSON for the given .bpp file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--format', metavar='BPP_FILE', help='print the program in canonical layout')
    parser.add_argument('program', nargs='?', help='Bisaya++ program file (.bpp) to execute')
    args = parser.parse_args(argv)

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        execute(ast_from_obj(data), args.v)
        return

    source_arg = args.emit_ast or args.format or args.program
    if not source_arg:
        parser.error('missing program file; or use --emit-ast/--ast/--format')
    source = read_source(source_arg)
    try:
        ast_program = parse_program(source)
    except BisayaError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    if args.format:
        sys.stdout.write(format_program(ast_program))
        return

    execute(ast_program, args.v)


if __name__ == '__main__':
    main()
