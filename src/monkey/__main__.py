#!/usr/bin/env python3
"""
CLI for the monkey interpreter.

Usage:
    python -m monkey [repl] [--ast]
    python -m monkey run FILE
    python -m monkey parse FILE
    python -m monkey tokens FILE

Examples:
    # Interactive session; each line is parsed and evaluated on its own
    python -m monkey

    # Show how a line groups instead of evaluating it
    echo "1 + 2 * 3" | python -m monkey repl --ast

    # Evaluate a file and print the last statement's value
    python -m monkey run examples/conditionals.mk

    # Debug logging from the parser and interpreter
    MONKEY_LOG_LEVEL=debug python -m monkey run examples/conditionals.mk
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

PROMPT = ">> "
LOG_LEVELS = ("debug", "info", "warning", "error")

logger = logging.getLogger("monkey.cli")


def configure_logging(level_name: Optional[str]) -> None:
    """Configure root logging from --log-level, else MONKEY_LOG_LEVEL."""
    name = level_name or os.environ.get("MONKEY_LOG_LEVEL", "warning")
    level = getattr(logging, name.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(name)s: %(levelname)s: %(message)s",
    )


def read_source(path_str: str) -> Optional[str]:
    source_path = Path(path_str)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return None
    return source_path.read_text()


def repl(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
         show_ast: bool = False) -> int:
    """Read-eval-print loop over lines of input."""
    from . import parse_program, compile_and_run
    from .errors import MonkeyError

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    interactive = stdin.isatty()

    while True:
        if interactive:
            stdout.write(PROMPT)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        if not line.strip():
            continue

        if show_ast:
            try:
                print(parse_program(line), file=stdout)
            except MonkeyError as e:
                print(e, file=stdout)
            continue

        result = compile_and_run(line)
        if not result.success:
            print(result.error_message, file=stdout)
        elif result.value is not None:
            print(result.output, file=stdout)

    return 0


def cmd_repl(args) -> int:
    return repl(show_ast=args.ast)


def cmd_run(args) -> int:
    """Evaluate a source file and print its value."""
    from . import compile_and_run

    source = read_source(args.file)
    if source is None:
        return 1

    result = compile_and_run(source)
    if not result.success:
        print(result.error_message, file=sys.stderr)
        return 1

    if result.value is not None:
        print(result.output)
    return 0


def cmd_parse(args) -> int:
    """Print the AST of a source file."""
    from . import parse_program, print_ast
    from .errors import MonkeyError

    source = read_source(args.file)
    if source is None:
        return 1

    try:
        program = parse_program(source)
    except MonkeyError as e:
        print(e, file=sys.stderr)
        return 1

    print_ast(program)
    return 0


def cmd_tokens(args) -> int:
    """Print the token stream of a source file, one token per line."""
    from . import Lexer
    from .errors import MonkeyError

    source = read_source(args.file)
    if source is None:
        return 1

    try:
        for token in Lexer(source):
            print(token)
    except MonkeyError as e:
        print(e, file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='python -m monkey',
        description='monkey language parser and evaluator',
    )
    parser.add_argument('--log-level', choices=LOG_LEVELS,
                        help='Logging level (default: $MONKEY_LOG_LEVEL or warning)')

    subparsers = parser.add_subparsers(dest='action')

    # repl command
    repl_parser = subparsers.add_parser('repl', help='Interactive read-eval-print loop (default)')
    repl_parser.add_argument('--ast', action='store_true',
                             help='Print the parsed program instead of evaluating it')

    # run command
    run_parser = subparsers.add_parser('run', help='Evaluate a source file')
    run_parser.add_argument('file', help='Source file')

    # parse command
    parse_parser = subparsers.add_parser('parse', help='Print the AST of a source file')
    parse_parser.add_argument('file', help='Source file')

    # tokens command
    tokens_parser = subparsers.add_parser('tokens', help='Print the tokens of a source file')
    tokens_parser.add_argument('file', help='Source file')

    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    logger.debug("action: %s", args.action or "repl")

    if args.action is None:
        return repl()
    elif args.action == 'repl':
        return cmd_repl(args)
    elif args.action == 'run':
        return cmd_run(args)
    elif args.action == 'parse':
        return cmd_parse(args)
    elif args.action == 'tokens':
        return cmd_tokens(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
