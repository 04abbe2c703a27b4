"""The shell's variable environment."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping


class Environment:
    """Ordered shell variables; a value of ``None`` marks an exported name without value."""

    def __init__(self, variables: Mapping[str, str | None] | None = None) -> None:
        self._vars: dict[str, str | None] = dict(variables or {})

    def get(self, name: str) -> str | None:
        """Return the value of *name*, or ``None`` if unset or valueless."""
        return self._vars.get(name)

    def set(self, name: str, value: str | None) -> None:
        """Set *name*, keeping its position if it already exists."""
        self._vars[name] = value

    def unset(self, name: str) -> None:
        """Remove *name* if present."""
        self._vars.pop(name, None)

    def to_envp(self) -> list[str]:
        """Return the variables as ``NAME=VALUE`` strings."""
        return [f"{name}={value if value is not None else ''}" for name, value in self._vars.items()]

    def items(self) -> Iterator[tuple[str, str | None]]:
        return iter(list(self._vars.items()))

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vars))

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"


def _current_uid() -> str:
    getuid = getattr(os, "getuid", None)
    return str(getuid()) if getuid is not None else "0"


def create_env(envp: Iterable[str] | Mapping[str, str]) -> Environment | None:
    """Build an environment from ``NAME=VALUE`` entries.

    Returns ``None`` when *envp* is empty. Raises ``ValueError`` for an
    entry without ``=``. A ``UID`` variable is added when missing.
    """
    if isinstance(envp, Mapping):
        entries = [f"{name}={value}" for name, value in envp.items()]
    else:
        entries = list(envp)
    if not entries:
        return None
    env = Environment()
    for entry in entries:
        name, sep, value = entry.partition("=")
        if not sep:
            raise ValueError(f"invalid environment entry: {entry!r}")
        if name not in env:
            env.set(name, value)
    if "UID" not in env:
        env.set("UID", _current_uid())
    return env