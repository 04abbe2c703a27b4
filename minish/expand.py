"""Variable expansion and quote removal."""

from __future__ import annotations

from typing import Protocol


class _Lookup(Protocol):
    def get(self, name: str) -> str | None: ...


def _is_alpha(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_digit(c: str) -> bool:
    return c.isascii() and c.isdigit()


def _is_name_char(c: str) -> bool:
    return c == "_" or (c.isascii() and c.isalnum())


def _expand_var(text: str, i: int, env: _Lookup | None, status: int) -> tuple[str, int]:
    nxt = text[i + 1] if i + 1 < len(text) else ""
    if nxt == "?":
        return str(status), i + 2
    if nxt and _is_digit(nxt):
        return "", i + 2
    if not nxt or not (_is_alpha(nxt) or nxt == "_"):
        return "$", i + 1
    start = i + 1
    end = start
    while end < len(text) and _is_name_char(text[end]):
        end += 1
    value = env.get(text[start:end]) if env is not None else None
    return value or "", end


def _single_quoted(text: str, i: int) -> tuple[str, int]:
    start = i
    i += 2 if text[i] == "$" else 1
    close = text.find("'", i)
    end = len(text) if close < 0 else close + 1
    return text[start:end], end


def expand(text: str, env: _Lookup | None, status: int) -> str:
    """Expand ``$NAME`` and ``$?`` in *text*, leaving quotes in place.

    Single-quoted sections are copied untouched; ``\\$`` yields a literal ``$``.
    """
    out: list[str] = []
    in_dquote = False
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if c == '"':
            in_dquote = not in_dquote
            out.append(c)
            i += 1
        elif c == "\\" and nxt == "$":
            out.append("$")
            i += 2
        elif not in_dquote and (c == "'" or (c == "$" and nxt == "'")):
            piece, i = _single_quoted(text, i)
            out.append(piece)
        elif c == "$":
            if not in_dquote and nxt == '"':
                i += 1
            else:
                piece, i = _expand_var(text, i, env, status)
                out.append(piece)
        else:
            out.append(c)
            i += 1
    return "".join(out)


def remove_quotes(text: str) -> str:
    """Strip quoting characters, including the ``$`` of a ``$'...'`` section."""
    out: list[str] = []
    quote: str | None = None
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == "$" and quote is None and i + 1 < n and text[i + 1] == "'":
            quote = "'"
            i += 2
            continue
        if c in "'\"" and quote is None:
            quote = c
        elif c == quote:
            quote = None
        else:
            out.append(c)
        i += 1
    return "".join(out)


def has_quotes(text: str) -> bool:
    """True if *text* contains a single or double quote."""
    return "'" in text or '"' in text