"""Command line interface for calclib."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from .errors import CalcError
from .evaluator import evaluate
from .parser import Parser, StringVisitor
from .session import CalculatorSession


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calclib",
        description="Evaluate arithmetic expressions (+ - * / parentheses, unary minus, postfix !).",
    )
    parser.add_argument(
        "expressions",
        nargs="*",
        metavar="EXPR",
        help="Expressions to evaluate. Without any, read one expression per line from stdin.",
    )
    parser.add_argument(
        "--ast",
        action="store_true",
        help="Print the parsed expression instead of its value.",
    )
    parser.add_argument(
        "--history-limit",
        type=int,
        default=None,
        help="Number of history entries kept in interactive mode (default: unlimited).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log lexing, parsing and evaluation details to stderr.",
    )
    return parser


def _show_ast(text: str) -> str:
    expression = Parser().parse(text)
    if expression is None:
        return "(incomplete)"
    return expression.accept(StringVisitor())


def _evaluate_arguments(expressions: list[str], show_ast: bool, out: TextIO, err: TextIO) -> int:
    status = 0
    for text in expressions:
        try:
            if show_ast:
                print(_show_ast(text), file=out)
            else:
                print(evaluate(text).display(), file=out)
        except CalcError as exc:
            print(f"Error: {exc}", file=err)
            status = 1
    return status


def _run_interactive(session: CalculatorSession, source: TextIO, out: TextIO) -> int:
    """Feed each line to the session as if typed and followed by '='."""
    for line in source:
        line = line.strip().rstrip("=")
        if not line:
            continue
        if not session.type_text(line):
            print("Error: invalid characters", file=out)
            continue
        session.evaluate_input()
        print(session.result, file=out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.expressions:
        return _evaluate_arguments(args.expressions, args.ast, sys.stdout, sys.stderr)

    session = CalculatorSession(history_limit=args.history_limit)
    return _run_interactive(session, sys.stdin, sys.stdout)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
