"""Turning a token list into a pipeline of commands."""

from __future__ import annotations

from collections.abc import Iterable

from minish.errors import ShellSyntaxError
from minish.expand import _Lookup, expand, has_quotes, remove_quotes
from minish.lexer import is_whitespace
from minish.models import Command, Redirect, Token, TokenType

_PIPE_ERROR = "syntax error near unexpected token `|'"


class AmbiguousRedirectError(ShellSyntaxError):
    """A redirection target expanded to nothing or to several words."""

    # The line is dropped and the shell reports status 0, as the original does.
    status = 0


def is_ambiguous(text: str) -> bool:
    """True if *text* has unquoted whitespace, so it would split into several words."""
    quote: str | None = None
    for c in text:
        if c in "'\"" and quote is None:
            quote = c
        elif c == quote:
            quote = None
        elif quote is None and is_whitespace(c):
            return True
    return False


def create_redirect(
    token: Token, target: str | None, env: _Lookup | None, status: int
) -> Redirect:
    """Build the redirection for *token* whose operand text is *target*.

    Here-document delimiters are unquoted but never expanded; quoting any part
    of the delimiter turns off expansion of the body. File targets are expanded
    and must yield exactly one non-empty word.
    """
    if token.type is TokenType.HEREDOC:
        if target is None:
            return Redirect(TokenType.HEREDOC)
        return Redirect(
            TokenType.HEREDOC,
            eof=remove_quotes(target),
            expand_heredoc=not has_quotes(target),
        )
    if target is None:
        return Redirect(token.type)
    expanded = expand(target, env, status)
    if not expanded or is_ambiguous(expanded):
        raise AmbiguousRedirectError(f"minishell: {target}: ambiguous redirect")
    return Redirect(token.type, target=remove_quotes(expanded))


def _add_word(cmd: Command, value: str, env: _Lookup | None, status: int) -> None:
    clean = remove_quotes(expand(value, env, status))
    if clean or '"' in value:
        cmd.add_arg(clean)


def parse(tokens: Iterable[Token], env: _Lookup | None, status: int) -> list[Command]:
    """Group *tokens* into commands separated by pipes.

    Raises ``ShellSyntaxError`` for misplaced pipes or a redirection without
    a target, and ``AmbiguousRedirectError`` for a bad redirection target.
    """
    toks = list(tokens)
    n = len(toks)
    if not toks:
        return []
    if toks[0].type is TokenType.PIPE:
        raise ShellSyntaxError(_PIPE_ERROR)
    commands: list[Command] = []
    i = 0
    while i < n:
        cmd = Command()
        while i < n and toks[i].type is not TokenType.PIPE:
            tok = toks[i]
            if tok.type is TokenType.WORD:
                _add_word(cmd, tok.value, env, status)
            else:
                nxt = toks[i + 1] if i + 1 < n else None
                if nxt is None or nxt.type is not TokenType.WORD:
                    shown = nxt.value if nxt is not None else "newline"
                    raise ShellSyntaxError(f"syntax error near unexpected token `{shown}'")
                cmd.redirects.append(create_redirect(tok, nxt.value, env, status))
                i += 1
            i += 1
        commands.append(cmd)
        if i < n:
            i += 1
            if i >= n or toks[i].type is TokenType.PIPE:
                raise ShellSyntaxError(_PIPE_ERROR)
    return commands