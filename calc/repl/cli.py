"""Command line interface and interactive console for calc."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from pygments.console import colorize

from ..core.config import settings
from ..core.errors import CalcError, CannotParseError
from ..core.logging import setup_logging
from ..parser.visitors import format_number
from .environment import load_constants
from .session import Session


class Console:
    """
    Line-oriented calculator loop.

    Reads one line at a time; "quit" or end of input stops the loop, "vars"
    and "history" list the session state, anything else is evaluated. A
    failing line is reported and the loop carries on.
    """

    def __init__(
        self,
        session: Session,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        color: bool = True,
        prompt: str | None = None,
    ):
        self.session = session
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.color = color
        self.prompt = settings.PROMPT if prompt is None else prompt
        self._commands = {
            "vars": self.show_variables,
            "history": self.show_history,
        }

    def run(self) -> int:
        while True:
            self.write(self.paint("green", self.prompt), end="")
            self.stdout.flush()
            raw = self.stdin.readline()
            if not raw:
                self.write("")
                return 0
            line = raw.strip()
            if line == "quit":
                return 0
            self.handle(line)

    def handle(self, line: str) -> None:
        command = self._commands.get(line)
        if command is not None:
            command()
            return

        try:
            result = self.session.evaluate(line)
        except CannotParseError:
            self.write("cannot parse expression")
        except CalcError as exc:
            self.write(f"exception: {exc}")
        else:
            self.write(self.paint("yellow", f"{self.session.answer_name} = {format_number(result)}"))

    def show_variables(self) -> None:
        for name, value in self.session.variables():
            self.write(f"  {name} = {format_number(value)}")

    def show_history(self) -> None:
        for index, entry in enumerate(self.session.history):
            self.write(
                self.paint("brightblack", f"{index:2}. ")
                + self.paint("green", entry.expression)
                + self.paint("blue", f" = {format_number(entry.result)}")
            )

    def paint(self, color_key: str, text: str) -> str:
        return colorize(color_key, text) if self.color else text

    def write(self, text: str, end: str = "\n") -> None:
        self.stdout.write(text + end)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calc",
        description="Evaluate arithmetic and comparison expressions.",
    )
    parser.add_argument(
        "-e",
        "--expression",
        dest="expressions",
        action="append",
        default=[],
        help="Evaluate an expression and exit (repeatable; expressions share variables).",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the parse tree of each --expression before its result.",
    )
    parser.add_argument(
        "--constants",
        type=Path,
        default=settings.CONSTANTS_FILE,
        help="YAML file of extra constants to seed the session with.",
    )
    parser.add_argument(
        "--history-size",
        type=int,
        default=settings.HISTORY_SIZE,
        help=f"Number of results kept by the 'history' command (default: {settings.HISTORY_SIZE}).",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Disable colored output.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help=f"Logging level (default: {settings.LOG_LEVEL}).",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=settings.LOG_FORMAT,
        help=f"Log record format on stderr (default: {settings.LOG_FORMAT}).",
    )
    parser.set_defaults(color=settings.COLOR)
    return parser


def run_expressions(session: Session, expressions: list[str], tree: bool, stdout: TextIO) -> int:
    """Evaluate expressions in order, stopping at the first failure."""
    for expression in expressions:
        try:
            if tree:
                stdout.write(session.tree(expression))
            result = session.evaluate(expression)
        except CalcError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        stdout.write(f"{format_number(result)}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_format, settings.LOG_FILE)

    if args.history_size < 1:
        parser.error("--history-size must be at least 1")

    session = Session(history_size=args.history_size)

    if args.constants:
        try:
            session.environment.update(load_constants(args.constants))
        except (OSError, CalcError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    if args.expressions:
        return run_expressions(session, args.expressions, args.tree, sys.stdout)

    return Console(session, color=args.color).run()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
