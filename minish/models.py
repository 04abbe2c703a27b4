"""Core data types shared by the lexer, parser and executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class TokenType(IntEnum):
    """Kinds of lexical tokens."""

    WORD = 0
    REDIR_IN = 1  # <
    REDIR_OUT = 2  # >
    REDIR_APPEND = 3  # >>
    HEREDOC = 4  # <<
    PIPE = 5  # |
    REDIR_RDWR = 6  # <>

    @property
    def is_redirect(self) -> bool:
        return self not in (TokenType.WORD, TokenType.PIPE)


@dataclass(frozen=True)
class Token:
    """A single token produced by the lexer."""

    value: str
    type: TokenType = TokenType.WORD


@dataclass
class Redirect:
    """A redirection attached to a command.

    ``target`` is the file name for file redirections; ``eof`` is the
    delimiter for here-documents.
    """

    type: TokenType
    target: str | None = None
    eof: str | None = None
    expand_heredoc: bool = True

    @property
    def is_heredoc(self) -> bool:
        return self.type is TokenType.HEREDOC


@dataclass
class Command:
    """One simple command of a pipeline."""

    args: list[str] = field(default_factory=list)
    redirects: list[Redirect] = field(default_factory=list)
    heredoc_input: str | None = None

    @property
    def name(self) -> str | None:
        return self.args[0] if self.args else None

    def add_arg(self, value: str | None) -> None:
        """Append an argument; ``None`` is ignored."""
        if value is None:
            return
        self.args.append(value)