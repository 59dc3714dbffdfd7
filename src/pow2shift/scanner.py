# src/pow2shift/scanner.py
"""
Find standalone integer literals in text.

A literal is a maximal run of ASCII digits, at least MIN_DIGITS long, with
no ASCII letter or digit directly before or after it. Anything else,
non-ASCII digits included, counts as a boundary.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

MIN_DIGITS = 3

_DIGIT_RUN_RE = re.compile(r"[0-9]+")
_ASCII_ALNUM = frozenset("0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


@dataclass(frozen=True)
class TokenSpan:
    start: int
    end: int
    text: str

    def __len__(self) -> int:
        return self.end - self.start


def _is_boundary(text: str, i: int) -> bool:
    """True if position i is outside the text or holds a non-ASCII-alnum char."""
    return i < 0 or i >= len(text) or text[i] not in _ASCII_ALNUM


def scan(text: str) -> Iterator[TokenSpan]:
    """
    Yield TokenSpans left to right. Each call starts over from offset 0.

    Runs are found maximal first, then accepted or rejected as a whole, so
    '1234abc' yields nothing rather than a shorter '123'.
    """
    for mt in _DIGIT_RUN_RE.finditer(text):
        start, end = mt.span()
        if end - start < MIN_DIGITS:
            continue
        if _is_boundary(text, start - 1) and _is_boundary(text, end):
            yield TokenSpan(start=start, end=end, text=mt.group())
