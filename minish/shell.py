"""The interactive read-eval loop."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence

from minish.env import Environment, create_env
from minish.errors import ShellExit, ShellSyntaxError
from minish.executor import execute_pipeline
from minish.expand import _Lookup
from minish.heredoc import HeredocInterrupted, process_heredocs
from minish.lexer import tokenize_line
from minish.models import Command
from minish.parser import parse
from minish.signals import reset_signal, setup_signal_handlers

try:
    import readline as _readline
except ImportError:
    _readline = None

PROMPT = "minishell$ "


def _input_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def parse_line(line: str, env: _Lookup | None, status: int) -> list[Command]:
    """Tokenize and parse *line*; raises ``ShellSyntaxError`` on bad syntax."""
    if not line:
        return []
    return parse(tokenize_line(line), env, status)


class Shell:
    """A shell session holding the environment and last status."""

    def __init__(
        self, env: Environment, read_line: Callable[[str], str | None] | None = None
    ) -> None:
        self.env = env
        self.status = 0
        self.read_line = read_line or _input_line

    def process_line(self, line: str) -> int:
        """Run one command line and return its status; ``exit`` raises ``ShellExit``."""
        if not line:
            return self.status
        try:
            commands = parse_line(line, self.env, self.status)
        except ShellSyntaxError as exc:
            sys.stderr.write(f"{exc}\n")
            return exc.status
        if not commands:
            return 0
        try:
            process_heredocs(commands, self.env, self.read_line, sys.stderr)
        except HeredocInterrupted:
            reset_signal()
            return 130
        return execute_pipeline(commands, self.env, self.status)

    def run(self) -> int:
        """Read and run lines until end of input or ``exit``; return the final status."""
        while True:
            reset_signal()
            try:
                line = self.read_line(PROMPT)
            except KeyboardInterrupt:
                sys.stderr.write("\n")
                self.status = 130
                continue
            if line is None:
                sys.stderr.write("exit\n")
                return self.status
            if not line:
                continue
            if _readline is not None and self.read_line is _input_line:
                _readline.add_history(line)
            try:
                self.status = self.process_line(line)
            except ShellExit as exc:
                return exc.code


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive shell; takes no arguments."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args:
        print("Utilisation: minish")
        return 1
    env = create_env(os.environ)
    if env is None:
        return 0
    setup_signal_handlers()
    return Shell(env).run()


if __name__ == "__main__":
    sys.exit(main())