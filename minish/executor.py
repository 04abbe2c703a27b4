"""Running parsed pipelines."""

from __future__ import annotations

import io
import os
import signal
import stat
import subprocess
import sys
import threading
from collections.abc import Sequence
from contextlib import ExitStack
from typing import IO, Union

from minish.builtins import is_builtin, run_builtin
from minish.env import Environment
from minish.errors import ShellExit, err_msg
from minish.models import Command, TokenType
from minish.signals import ignore_signals

_Input = Union[None, bytes, IO[bytes]]


class _RedirectFailed(Exception):
    pass


def find_cmd_path(cmd: str | None, env: Environment) -> str | None:
    """Locate *cmd* directly when it has a ``/``, else through ``PATH``."""
    if not cmd:
        return None
    if "/" in cmd:
        return cmd if os.path.exists(cmd) else None
    path_value = env.get("PATH")
    if path_value is None:
        return None
    for directory in filter(None, path_value.split(":")):
        candidate = f"{directory}/{cmd}"
        if os.path.exists(candidate):
            return candidate
    return None


def status_from_returncode(returncode: int) -> int:
    """Shell status for a child's return code; death by signal N gives 128+N."""
    return 128 - returncode if returncode < 0 else returncode


def _resolve(cmd: Command, stack: ExitStack) -> tuple[bytes | IO[bytes] | None, IO[bytes] | None]:
    """Open the command's redirections; returns (stdin source, stdout file)."""
    source: bytes | IO[bytes] | None = None
    out: IO[bytes] | None = None
    for redir in cmd.redirects:
        try:
            if redir.type in (TokenType.REDIR_OUT, TokenType.REDIR_APPEND):
                append = redir.type is TokenType.REDIR_APPEND
                flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
                fd = os.open(redir.target or "", flags, 0o644)
                out = stack.enter_context(open(fd, "ab" if append else "wb"))
            elif redir.type is TokenType.REDIR_IN:
                source = stack.enter_context(open(redir.target or "", "rb"))
            elif redir.is_heredoc:
                if cmd.heredoc_input is None:
                    raise _RedirectFailed
                source = cmd.heredoc_input.encode()
        except OSError as exc:
            err_msg(redir.target, exc.strerror or str(exc), 1)
            raise _RedirectFailed from exc
    return source, out


def _emit(data: str, out: IO[bytes] | None) -> None:
    if out is not None:
        out.write(data.encode())
    elif data:
        sys.stdout.write(data)
        sys.stdout.flush()


def _run_in_shell(cmd: Command, env: Environment, last_status: int) -> int:
    with ExitStack() as stack:
        try:
            _, out = _resolve(cmd, stack)
        except _RedirectFailed:
            return 1
        if not cmd.args:
            return 0
        buf = io.StringIO()
        try:
            return run_builtin(cmd.args, env, last_status, buf, sys.stderr)
        finally:
            _emit(buf.getvalue(), out)


def _feed(data: bytes) -> int:
    read_fd, write_fd = os.pipe()

    def writer() -> None:
        with open(write_fd, "wb") as pipe:
            try:
                pipe.write(data)
            except BrokenPipeError:
                pass

    threading.Thread(target=writer, daemon=True).start()
    return read_fd


def _close(source: _Input) -> None:
    if source is not None and not isinstance(source, bytes):
        source.close()


def _child_signals() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)


def _spawn(
    cmd: Command, env: Environment, source: _Input, stdout: IO[bytes] | int | None
) -> subprocess.Popen | int:
    name = cmd.args[0]
    if name == "!":
        return 1
    path = find_cmd_path(name, env)
    if path is None:
        reason = "No such file or directory" if "/" in name else "command not found"
        return err_msg(name, reason, 127)
    try:
        if stat.S_ISDIR(os.stat(path).st_mode):
            return err_msg(name, "Is a directory", 126)
    except OSError:
        pass
    fed = _feed(source) if isinstance(source, bytes) else None
    stdin = fed if fed is not None else source
    child_env = dict(entry.split("=", 1) for entry in env.to_envp())
    sys.stdout.flush()
    try:
        return subprocess.Popen(
            cmd.args,
            executable=path,
            env=child_env,
            stdin=stdin,
            stdout=stdout,
            preexec_fn=_child_signals if os.name == "posix" else None,
        )
    except OSError as exc:
        return err_msg(name, exc.strerror or str(exc), 126)
    finally:
        if fed is not None:
            os.close(fed)


def _run_pipeline(commands: Sequence[Command], env: Environment) -> int:
    results: list[subprocess.Popen | int] = []
    prev: _Input = None
    with ExitStack() as stack:
        for index, cmd in enumerate(commands):
            last = index == len(commands) - 1
            try:
                source, out = _resolve(cmd, stack)
            except _RedirectFailed:
                _close(prev)
                results.append(1)
                prev = b""
                continue
            if source is None:
                source = prev
            else:
                _close(prev)
            if not cmd.args:
                _close(source)
                results.append(0)
                prev = b""
            elif is_builtin(cmd.name):
                _close(source)
                buf = io.StringIO()
                try:
                    status = run_builtin(cmd.args, Environment(dict(env.items())), 0, buf, sys.stderr)
                except ShellExit as exc:
                    status = exc.code
                results.append(status)
                if out is not None or last:
                    _emit(buf.getvalue(), out)
                    prev = b""
                else:
                    prev = buf.getvalue().encode()
            else:
                target = out if out is not None else (None if last else subprocess.PIPE)
                proc = _spawn(cmd, env, source, target)
                if not isinstance(source, bytes):
                    _close(source)
                results.append(proc)
                if isinstance(proc, subprocess.Popen) and proc.stdout is not None:
                    prev = proc.stdout
                else:
                    prev = b""
        _close(prev)
        saved = signal.getsignal(signal.SIGINT), signal.getsignal(signal.SIGQUIT)
        ignore_signals()
        try:
            statuses = [
                item if isinstance(item, int) else item.wait() for item in results
            ]
        finally:
            signal.signal(signal.SIGINT, saved[0])
            signal.signal(signal.SIGQUIT, saved[1])
    final = statuses[-1]
    if final == -signal.SIGQUIT:
        sys.stderr.write("Quit (core dumped)\n")
    elif final == -signal.SIGINT:
        sys.stderr.write("\n")
    return status_from_returncode(final)


def execute_pipeline(commands: Sequence[Command], env: Environment, last_status: int) -> int:
    """Run *commands* connected by pipes and return the last one's status.

    A lone builtin or redirection-only command runs inside the shell, so its
    effects on the environment persist; ``exit`` there raises ``ShellExit``.
    """
    if not commands:
        return last_status
    first = commands[0]
    if len(commands) == 1 and (not first.args or is_builtin(first.name)):
        return _run_in_shell(first, env, last_status)
    return _run_pipeline(commands, env)