#!/usr/bin/env python3
"""
CLI for the minipy interpreter.

Usage:
    python -m minipy [repl]
    python -m minipy run FILE
    python -m minipy tokens (FILE | -c SOURCE)
    python -m minipy ast (FILE | -c SOURCE)

Examples:
    # Interactive prompt
    python -m minipy

    # Run a script and print the value of its last statement
    python -m minipy run script.mpy

    # Show how a snippet is tokenized and parsed
    python -m minipy tokens -c "x = 2 ** -1"
    python -m minipy ast -c "if x < 3: x += 1"
"""

import argparse
import logging
import sys
from pathlib import Path


def read_source(args) -> str:
    """Source text from -c, stdin ('-') or a file."""
    if getattr(args, 'source', None) is not None:
        return args.source
    if args.file == '-':
        return sys.stdin.read()
    return Path(args.file).read_text()


def _load(args):
    """Read the source for a command, or print why it cannot be read."""
    try:
        return read_source(args)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e.strerror}", file=sys.stderr)
        return None


def _report(err, args):
    from .shell import render_error
    print(render_error(err.kind, err.diagnostic.format(), not args.no_color), file=sys.stderr)


def cmd_repl(args):
    """Start the interactive prompt."""
    from .shell import Shell

    Shell(color=not args.no_color).run()
    return 0


def cmd_run(args):
    """Run a script file."""
    from .errors import MinipyError
    from .session import Session

    source = _load(args)
    if source is None:
        return 1

    try:
        value = Session().run_program(source)
    except MinipyError as e:
        _report(e, args)
        return 1

    if not value.is_none:
        print(value.to_repr())
    return 0


def cmd_tokens(args):
    """Print the token stream of a file or snippet."""
    from .errors import MinipyError
    from .lexer import tokenize

    source = _load(args)
    if source is None:
        return 1

    try:
        tokens = tokenize(source)
    except MinipyError as e:
        _report(e.with_source(source), args)
        return 1

    for token in tokens:
        print(f"{token.line}:{token.column}\t{token}")
    return 0


def cmd_ast(args):
    """Print the canonical rendering of a parsed file or snippet."""
    from .errors import MinipyError
    from .lexer import tokenize
    from .parser import parse_program

    source = _load(args)
    if source is None:
        return 1

    try:
        program = parse_program(tokenize(source))
    except MinipyError as e:
        _report(e.with_source(source), args)
        return 1

    print(program)
    return 0


def _add_source_arguments(parser):
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('file', nargs='?', help="Source file ('-' for stdin)")
    group.add_argument('-c', dest='source', metavar='SOURCE',
                       help='Source text given on the command line')


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m minipy',
        description='minipy: a small Python-like interpreter',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log tokenizer, parser and interpreter activity')
    parser.add_argument('--no-color', action='store_true',
                        help='Do not colour error messages')

    subparsers = parser.add_subparsers(dest='action')

    # repl command
    subparsers.add_parser('repl', help='Start the interactive prompt (default)')

    # run command
    run_parser = subparsers.add_parser('run', help='Run a script file')
    run_parser.add_argument('file', help="Source file ('-' for stdin)")

    # tokens command
    tokens_parser = subparsers.add_parser('tokens', help='Print the token stream')
    _add_source_arguments(tokens_parser)

    # ast command
    ast_parser = subparsers.add_parser('ast', help='Print the parsed program')
    _add_source_arguments(ast_parser)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(levelname)s %(name)s: %(message)s')

    if args.action in (None, 'repl'):
        return cmd_repl(args)
    elif args.action == 'run':
        return cmd_run(args)
    elif args.action == 'tokens':
        return cmd_tokens(args)
    elif args.action == 'ast':
        return cmd_ast(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
