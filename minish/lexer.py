"""Splitting a command line into tokens."""

from __future__ import annotations

from minish.errors import ShellSyntaxError
from minish.models import Token, TokenType

_QUOTES = "\"'"
_UNCLOSED = "syntax error: unclosed quote"


def is_whitespace(c: str) -> bool:
    """True for the token separators: space and tab."""
    return c in (" ", "\t")


def is_special(c: str) -> bool:
    """True for the operator characters ``|``, ``<`` and ``>``."""
    return c in ("|", "<", ">")


def _char(text: str, i: int) -> str:
    return text[i] if i < len(text) else ""


def check_quote(text: str) -> int:
    """Length of the quoted section at the start of *text*, or 0 if none.

    A ``$`` directly before the opening quote is part of the section.
    Raises ``ShellSyntaxError`` if the quote is not closed.
    """
    start = 0
    if _char(text, 0) == "$" and _char(text, 1) in _QUOTES and _char(text, 1):
        start = 1
    quote = _char(text, start)
    if not quote or quote not in _QUOTES:
        return 0
    end = text.find(quote, start + 1)
    if end < 0:
        raise ShellSyntaxError(_UNCLOSED)
    return end + 1


def get_token_len(text: str) -> int:
    """Length of the token starting at the beginning of *text*."""
    if text and is_special(text[0]):
        return 2 if text[:2] in ("<<", ">>", "<>") else 1
    i = 0
    while i < len(text) and not is_whitespace(text[i]) and not is_special(text[i]):
        if text[i] in _QUOTES:
            i += check_quote(text[i:])
        else:
            i += 1
    return i


def extract_quoted(text: str, length: int) -> str:
    """Copy the first *length* characters of *text*, keeping quoted sections whole."""
    if length <= 0:
        raise ValueError("token length must be positive")
    parts: list[str] = []
    i = 0
    while i < length and i < len(text):
        c = text[i]
        opens = c in _QUOTES or (c == "$" and _char(text, i + 1) in _QUOTES and _char(text, i + 1))
        if opens:
            qlen = check_quote(text[i:])
            parts.append(text[i:i + qlen])
            i += qlen
        else:
            parts.append(c)
            i += 1
    return "".join(parts)


def assign_type(text: str) -> TokenType:
    """Classify a token's text."""
    if text.startswith("|"):
        return TokenType.PIPE
    if text.startswith("<>"):
        return TokenType.REDIR_RDWR
    if text.startswith(">>"):
        return TokenType.REDIR_APPEND
    if text.startswith(">"):
        return TokenType.REDIR_OUT
    if text.startswith("<<"):
        return TokenType.HEREDOC
    if text.startswith("<"):
        return TokenType.REDIR_IN
    return TokenType.WORD


def tokenize_line(line: str) -> list[Token]:
    """Split *line* into tokens; raises ``ShellSyntaxError`` on an unclosed quote."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(line):
        while pos < len(line) and is_whitespace(line[pos]):
            pos += 1
        if pos >= len(line):
            break
        rest = line[pos:]
        length = get_token_len(rest)
        value = extract_quoted(rest, length)
        tokens.append(Token(value, assign_type(value)))
        pos += length
    return tokens