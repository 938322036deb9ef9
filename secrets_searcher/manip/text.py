"""Small string utilities."""

from __future__ import annotations

import re

_LINE_BREAK_RE = re.compile(r"\r?\n")


def count_runes(text: str, char: str) -> int:
    """Count how many times a single character occurs in text."""
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    return text.count(char)


def truncate(text: str, length: int) -> str:
    """Cut text down to at most ``length`` characters."""
    if length < 0:
        raise ValueError(f"length must not be negative: {length}")
    return text[:length]


def make_one_line(text: str, repl: str) -> str:
    """Replace every line break (LF or CRLF) in text with ``repl``."""
    return _LINE_BREAK_RE.sub(lambda _match: repl, text)