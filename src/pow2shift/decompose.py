# src/pow2shift/decompose.py
"""
Two-term power-of-two decomposition of big integers.

    x = (2^n - 1) << m     -> MinusOne(n, m)
    x = (2^n + 1) << m     -> PlusOne(n, m)
    x = 1 << k             -> PureShift(k)

Everything here is exact integer arithmetic; no floats, no log().
"""

from __future__ import annotations

from dataclasses import dataclass

import gmpy2


class InvalidInput(ValueError):
    """Raised when decompose() gets something other than a non-negative int."""
    pass


@dataclass(frozen=True)
class MinusOne:
    n: int
    m: int = 0

    def value(self) -> int:
        return ((1 << self.n) - 1) << self.m


@dataclass(frozen=True)
class PlusOne:
    n: int
    m: int = 0

    def value(self) -> int:
        return ((1 << self.n) + 1) << self.m


@dataclass(frozen=True)
class PureShift:
    k: int

    def value(self) -> int:
        return 1 << self.k


Decomposition = MinusOne | PlusOne | PureShift | None


def trailing_zeros(x: int) -> int:
    """Exponent of the largest power of two dividing x (x > 0)."""
    return int(gmpy2.bit_scan1(x))


def exact_log2(v: int) -> int | None:
    """Return k if v == 2^k exactly, else None."""
    if v <= 0 or v & (v - 1):
        return None
    return v.bit_length() - 1


def decompose(x: int) -> Decomposition:
    """
    Recover (n, m) such that x == (2^n ± 1) << m, or k such that x == 1 << k.

    Returns None when no such form exists (the common case) and for x == 0.
    Minus-one wins over plus-one when both fit (e.g. 3 = 2^2 - 1 = 2^1 + 1).
    """
    if isinstance(x, bool) or not isinstance(x, int):
        raise InvalidInput(f"expected a non-negative integer, got {type(x).__name__}")
    if x < 0:
        raise InvalidInput(f"cannot decompose negative value {x}")
    if x == 0:
        return None

    m0 = trailing_zeros(x)
    y = x >> m0  # odd, >= 1

    if y == 1:
        return PureShift(k=m0)

    n = exact_log2(y + 1)
    if n is not None and n >= 1:
        return MinusOne(n=n, m=m0)

    n = exact_log2(y - 1)
    if n is not None and n >= 1:
        return PlusOne(n=n, m=m0)

    return None
