"""Reading here-document bodies."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from minish.expand import _Lookup, expand
from minish.models import Command, Redirect

ReadLine = Callable[[str], "str | None"]


class HeredocInterrupted(Exception):
    """Reading a here-document was interrupted by the user."""


def _default_read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def read_heredoc(
    redirect: Redirect,
    env: _Lookup | None,
    read_line: ReadLine | None = None,
    stderr: TextIO | None = None,
) -> str:
    """Read lines until the delimiter and return the body, one newline per line.

    Raises ``HeredocInterrupted`` on interrupt and ``ValueError`` when the
    redirection has no delimiter.
    """
    if redirect.eof is None:
        raise ValueError("here-document without delimiter")
    read = read_line or _default_read_line
    err = stderr if stderr is not None else sys.stderr
    lines: list[str] = []
    while True:
        try:
            line = read("> ")
        except KeyboardInterrupt as exc:
            raise HeredocInterrupted() from exc
        if line is None:
            err.write(
                "minishell: warning: here-document delimited by end-of-file "
                f"(wanted `{redirect.eof}')\n"
            )
            break
        if line == redirect.eof:
            break
        if redirect.expand_heredoc:
            line = expand(line, env, 0)
        lines.append(line + "\n")
    return "".join(lines)


def process_heredocs(
    commands: Iterable[Command],
    env: _Lookup | None,
    read_line: ReadLine | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Read every here-document; each command keeps its last body as input."""
    for cmd in commands:
        for redirect in cmd.redirects:
            if redirect.is_heredoc:
                cmd.heredoc_input = read_heredoc(redirect, env, read_line, stderr)