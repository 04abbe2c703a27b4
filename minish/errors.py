"""Shell exceptions and error reporting."""

from __future__ import annotations

import sys
from typing import TextIO


class ShellSyntaxError(Exception):
    """Raised when a command line cannot be parsed."""

    status = 2


class ShellExit(Exception):
    """Raised to leave the shell with a given exit status."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


def err_msg(prefix: str | None, msg: str, code: int, stream: TextIO | None = None) -> int:
    """Write ``minishell: [prefix: ]msg`` to *stream* and return *code*."""
    out = stream if stream is not None else sys.stderr
    head = f"{prefix}: " if prefix else ""
    out.write(f"minishell: {head}{msg}\n")
    return code