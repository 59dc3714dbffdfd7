# src/pow2shift/fmt.py
from __future__ import annotations

from typing import TYPE_CHECKING

from colorama import Fore, Style

from pow2shift.decompose import Decomposition, MinusOne, PlusOne, PureShift
from pow2shift.utility import dec_digits

if TYPE_CHECKING:
    from pow2shift.substitute import Replacement


def format_expression(result: Decomposition) -> str | None:
    """
    Render a decomposition as a bit-shift expression.

        MinusOne(20, 0)  -> "(1<<20 - 1)"
        PlusOne(16, 1)   -> "(1<<16 + 1) << 1"
        PureShift(10)    -> "1 << 10"
        PureShift(0)     -> "1"

    Returns None for None. The templates are fixed; callers may diff or
    re-parse the output.
    """
    if result is None:
        return None
    if isinstance(result, PureShift):
        return "1" if result.k == 0 else f"1 << {result.k}"
    if isinstance(result, MinusOne):
        head = f"(1<<{result.n} - 1)"
    elif isinstance(result, PlusOne):
        head = f"(1<<{result.n} + 1)"
    else:
        raise TypeError(f"not a decomposition: {result!r}")
    return head if result.m == 0 else f"{head} << {result.m}"


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if not isinstance(n, int):
        return str(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    first = a // (10 ** (d - head))
    last = a % (10 ** tail)
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def format_replacement(rep: Replacement, *, head: int = 10, tail: int = 10,
                       threshold: int = 35, ellipsis: str = "…") -> str:
    """One coloured trace line for --debug: '@offset value → expression'."""
    val = abbr_int_fast(rep.value, head, tail, threshold, ellipsis)
    return (
        f"@{rep.span.start:<8} {val} → "
        f"{Fore.GREEN}{Style.BRIGHT}{rep.expression}{Style.RESET_ALL}"
    )
