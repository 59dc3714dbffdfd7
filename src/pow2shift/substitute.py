# src/pow2shift/substitute.py
from __future__ import annotations

from dataclasses import dataclass, field

import gmpy2

from pow2shift.decompose import decompose
from pow2shift.fmt import format_expression
from pow2shift.scanner import TokenSpan, scan


class UnparsableToken(ValueError):
    """A scanned token could not be turned into an int."""

    def __init__(self, span: TokenSpan, reason: str = ""):
        self.span = span
        self.reason = reason
        digits = len(span)
        super().__init__(f"token at offset {span.start} ({digits} digits) is not parsable: {reason}")


@dataclass(frozen=True)
class Replacement:
    span: TokenSpan
    value: int
    expression: str


@dataclass
class SubstitutionReport:
    text: str
    replacements: list[Replacement] = field(default_factory=list)
    unparsable: list[UnparsableToken] = field(default_factory=list)
    candidates: int = 0      # tokens strictly above the threshold

    @property
    def changed(self) -> bool:
        return bool(self.replacements)


def _check_threshold(threshold: int) -> None:
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ValueError(f"threshold must be an integer, got {type(threshold).__name__}")
    if threshold < 0:
        raise ValueError(f"threshold must be >= 0, got {threshold}")


def _parse_token(span: TokenSpan) -> int:
    # mpz parses without the interpreter's int/str digit guard
    try:
        return int(gmpy2.mpz(span.text, 10))
    except ValueError as e:
        raise UnparsableToken(span, str(e)) from None


def substitute_with_report(text: str, threshold: int = 100) -> SubstitutionReport:
    """
    Rewrite every scanned literal above `threshold` that decomposes, and
    record what was done. Text between tokens is copied unchanged.
    """
    _check_threshold(threshold)

    parts: list[str] = []
    report = SubstitutionReport(text="")
    pos = 0

    for span in scan(text):
        parts.append(text[pos:span.start])
        pos = span.end

        try:
            value = _parse_token(span)
        except UnparsableToken as e:
            report.unparsable.append(e)
            parts.append(span.text)
            continue

        if value <= threshold:
            parts.append(span.text)
            continue

        report.candidates += 1
        expr = format_expression(decompose(value))
        if expr is None:
            parts.append(span.text)
            continue

        parts.append(expr)
        report.replacements.append(Replacement(span=span, value=value, expression=expr))

    parts.append(text[pos:])
    report.text = "".join(parts)
    return report


def substitute(text: str, threshold: int = 100) -> str:
    """Return `text` with qualifying integer literals rewritten as bit-shift expressions."""
    return substitute_with_report(text, threshold).text
