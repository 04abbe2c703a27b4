"""Signal handling for the interactive shell."""

from __future__ import annotations

import signal
from types import FrameType


class _SignalState:
    """Holds the number of the last signal the shell caught."""

    def __init__(self) -> None:
        self.last = 0


_state = _SignalState()


def last_signal() -> int:
    """Number of the last signal caught by the shell, or 0."""
    return _state.last


def reset_signal() -> None:
    """Forget the last caught signal."""
    _state.last = 0


def _on_signal(signo: int, frame: FrameType | None) -> None:
    _state.last = signo
    if signo == signal.SIGINT:
        raise KeyboardInterrupt


def _ignore_quit() -> None:
    sigquit = getattr(signal, "SIGQUIT", None)
    if sigquit is not None:
        signal.signal(sigquit, signal.SIG_IGN)


def setup_signal_handlers() -> None:
    """Catch SIGINT (interrupting the current read) and ignore SIGQUIT."""
    signal.signal(signal.SIGINT, _on_signal)
    _ignore_quit()


def ignore_signals() -> None:
    """Ignore SIGINT and SIGQUIT, as while waiting for children."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    _ignore_quit()


def restore_signals() -> None:
    """Reinstall the interactive handlers."""
    setup_signal_handlers()