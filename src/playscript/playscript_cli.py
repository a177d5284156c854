"""
PlayScript CLI Entrypoint.

This module provides the command-line interface for running PlayScript code.

Features:
    - Read source from `.play` files or inline strings.
    - Lex, parse, and evaluate, printing one result per statement.
    - Optionally dump the token table, the AST, or an evaluation trace.
    - Evaluate a single bare expression in calculator mode.
    - Launch an interactive REPL.

Example usage:
    playscript hello.play
    playscript -s "int age = 1+2; age+3;" --ast
    playscript -c "2+3+4" --trace
    playscript --repl --verbose

Configuration:
    Log level comes from `--log-level`, else the PLAYSCRIPT_LOG_LEVEL environment
    variable, else WARNING.
"""

import argparse
import logging
import os
import sys

from playscript.playscript_errors import PlayScriptError
from playscript.playscript_eval import Interpreter
from playscript.playscript_lexer import dump_tokens, tokenize
from playscript.playscript_parser import parse, parse_expression

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "PLAYSCRIPT_LOG_LEVEL"


def configure_logging(level: str | None = None) -> None:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {name}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)


def run_playscript(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
    trace: bool = False,
    calc: bool = False,
) -> None:
    """
    Run the PlayScript pipeline: lex, parse, evaluate, and print results.

    Args:
        source (str): PlayScript source code or path to a `.play` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        show_tokens (bool): Print the token table before parsing.
        show_ast (bool): Print the AST dump before evaluating.
        trace (bool): Print a `Calculating: <Kind>` line for every visited node.
        calc (bool): Treat the source as one unterminated expression.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.play'.
        PlayScriptError: On the first syntax or evaluation error.
    """
    if not is_string and not source.endswith(".play"):
        raise ValueError("Only .play files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    tokens = tokenize(source)
    if show_tokens:
        print(dump_tokens(tokens))

    tracer = print if trace else None

    if calc:
        expr = parse_expression(tokens)
        if show_ast:
            print(expr.dump())
        print(Interpreter(trace=tracer).evaluate(expr))
        return

    tree = parse(tokens)
    if show_ast:
        print(tree.dump())

    interpreter = Interpreter(trace=tracer)
    for result in interpreter.iter_results(tree):
        print(result)


def main() -> None:
    """
    Entry point for the PlayScript CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified,
    otherwise runs the pipeline once. Errors are reported as
    `[error] >>> <message>` on stderr with exit status 1.
    """
    if len(sys.argv) == 1:
        from playscript.playscript_repl import start_repl

        configure_logging()
        start_repl()
        return
    parser = argparse.ArgumentParser(prog="playscript")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-c",
        "--calc",
        action="store_true",
        help="Evaluate a single expression without a trailing ';'",
    )
    parser.add_argument("--tokens", action="store_true", help="Print the token table")
    parser.add_argument("--ast", action="store_true", help="Print the AST dump")
    parser.add_argument(
        "--trace", action="store_true", help="Print each node as it is evaluated"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of running a script",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.repl or args.source is None:
        from playscript.playscript_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    try:
        run_playscript(
            source=args.source,
            is_string=args.string or args.calc,
            show_tokens=args.tokens,
            show_ast=args.ast,
            trace=args.trace,
            calc=args.calc,
        )
    except PlayScriptError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
