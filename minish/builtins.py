"""Commands run inside the shell process."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Sequence
from typing import TextIO

from minish.env import Environment
from minish.errors import ShellExit

BUILTIN_NAMES = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit", ":"})

_NUMERIC = re.compile(r"[+-]?[0-9]+")
_LLONG_MAX = 2**63 - 1


def _stream(stream: TextIO | None, default: TextIO) -> TextIO:
    return stream if stream is not None else default


def _is_name_char(c: str) -> bool:
    return c == "_" or (c.isascii() and c.isalnum())


def is_valid_env_var(text: str | None) -> bool:
    """True if *text* is a bare ``$NAME`` word."""
    if not text or text[0] != "$" or len(text) < 2:
        return False
    return all(_is_name_char(c) for c in text[1:])


def is_builtin(name: str | None) -> bool:
    """True if *name* is handled by the shell itself."""
    if not name:
        return False
    return name in BUILTIN_NAMES or is_valid_env_var(name)


def valid_name(text: str | None) -> bool:
    """True if *text* is a valid variable identifier."""
    if not text:
        return False
    first = text[0]
    if not (first == "_" or (first.isascii() and first.isalpha())):
        return False
    return all(_is_name_char(c) for c in text[1:])


def parse_export_arg(arg: str) -> tuple[str, str | None]:
    """Split ``NAME=VALUE``; the value is ``None`` when there is no ``=``."""
    name, sep, value = arg.partition("=")
    return name, (value if sep else None)


def _is_n_flag(arg: str) -> bool:
    return len(arg) >= 2 and arg[0] == "-" and set(arg[1:]) == {"n"}


def builtin_echo(args: Sequence[str], stdout: TextIO | None = None) -> int:
    """Print the arguments; leading ``-n`` flags suppress the newline."""
    out = _stream(stdout, sys.stdout)
    words = list(args[1:])
    newline = True
    while words and _is_n_flag(words[0]):
        newline = False
        words.pop(0)
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def _getcwd() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def builtin_cd(
    args: Sequence[str],
    env: Environment,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Change directory, updating ``OLDPWD`` and ``PWD`` where they exist."""
    out = _stream(stdout, sys.stdout)
    err = _stream(stderr, sys.stderr)
    if len(args) > 2:
        err.write("minishell: cd: too many arguments\n")
        return 1
    if len(args) < 2 or args[1] == "~":
        target = env.get("HOME")
        if target is None:
            err.write("minishell: cd: HOME not set\n")
            return 1
    elif args[1] == "-":
        target = env.get("OLDPWD")
        if target is None:
            err.write("minishell: cd: OLDPWD not set\n")
            return 1
        out.write(f"{target}\n")
    else:
        target = args[1]
    old_pwd = _getcwd()
    try:
        os.chdir(target)
    except OSError as exc:
        err.write(f"minishell: cd: {exc.strerror}\n")
        return 1
    current = _getcwd()
    if current is None:
        err.write("minishell: cd: getcwd: cannot access current directory\n")
        return 1
    if "OLDPWD" in env:
        env.set("OLDPWD", old_pwd)
    if "PWD" in env:
        env.set("PWD", current)
    return 0


def builtin_pwd(
    args: Sequence[str], stdout: TextIO | None = None, stderr: TextIO | None = None
) -> int:
    """Print the working directory."""
    out = _stream(stdout, sys.stdout)
    err = _stream(stderr, sys.stderr)
    if len(args) > 1 and len(args[1]) > 1 and args[1][0] == "-":
        err.write(f"minishell: pwd: -{args[1][1]}: invalid option\n")
        return 2
    try:
        cwd = os.getcwd()
    except OSError as exc:
        err.write(f"pwd: {exc.strerror}\n")
        return 1
    out.write(f"{cwd}\n")
    return 0


def builtin_env(env: Environment, stdout: TextIO | None = None) -> int:
    """Print every variable that has a value."""
    out = _stream(stdout, sys.stdout)
    for name, value in env.items():
        if value is not None:
            out.write(f"{name}={value}\n")
    return 0


def builtin_export(
    args: Sequence[str],
    env: Environment,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Set variables, or list them all when called without arguments."""
    out = _stream(stdout, sys.stdout)
    err = _stream(stderr, sys.stderr)
    if len(args) < 2:
        for name, value in env.items():
            if value is not None:
                out.write(f'declare -x {name}="{value}"\n')
            else:
                out.write(f"declare -x {name}\n")
        return 0
    status = 0
    end_of_options = False
    for arg in args[1:]:
        if not end_of_options and len(arg) > 1 and arg[0] == "-":
            if arg == "--":
                end_of_options = True
                continue
            err.write(f"minishell: export: {arg[:2]}: invalid option\n")
            return 2
        name, value = parse_export_arg(arg)
        if not valid_name(name):
            err.write(f"minishell: export: '{arg}': not a valid identifier\n")
            status = 1
            continue
        if name in env and value is None:
            continue
        env.set(name, value)
    return status


def builtin_unset(args: Sequence[str], env: Environment, stderr: TextIO | None = None) -> int:
    """Remove the named variables."""
    err = _stream(stderr, sys.stderr)
    for arg in args[1:]:
        if len(arg) > 1 and arg[0] == "-":
            err.write(f"minishell: unset: {arg}: invalid option\n")
            return 2
        env.unset(arg)
    return 0


def _announce_exit() -> None:
    try:
        with open("/dev/tty", "w") as tty:
            tty.write("exit\n")
    except OSError:
        pass


def _overflows(text: str) -> bool:
    negative = text.startswith("-")
    value = int(text.lstrip("+-"))
    return value > (_LLONG_MAX + 1 if negative else _LLONG_MAX)


def builtin_exit(args: Sequence[str], last_status: int, stderr: TextIO | None = None) -> int:
    """Leave the shell by raising ``ShellExit`` with the chosen status."""
    err = _stream(stderr, sys.stderr)
    _announce_exit()
    if len(args) < 2:
        raise ShellExit(last_status)
    arg = args[1]
    if not _NUMERIC.fullmatch(arg) or _overflows(arg):
        err.write(f"minishell: exit: {arg}: numeric argument required\n")
        raise ShellExit(2)
    if len(args) > 2:
        err.write("minishell: exit: too many arguments\n")
        raise ShellExit(1)
    raise ShellExit(int(arg) % 256)


def run_builtin(
    args: Sequence[str],
    env: Environment,
    last_status: int,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run the builtin named by ``args[0]`` and return its status."""
    name = args[0]
    if name == ":" or is_valid_env_var(name):
        return 0
    if name == "echo":
        return builtin_echo(args, stdout)
    if name == "pwd":
        return builtin_pwd(args, stdout, stderr)
    if name == "env":
        return builtin_env(env, stdout)
    if name == "export":
        return builtin_export(args, env, stdout, stderr)
    if name == "cd":
        return builtin_cd(args, env, stdout, stderr)
    if name == "unset":
        return builtin_unset(args, env, stderr)
    if name == "exit":
        return builtin_exit(args, last_status, stderr)
    return 127