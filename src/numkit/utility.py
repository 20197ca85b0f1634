# src/numkit/utility.py
from __future__ import annotations

from math import isqrt
from operator import index
from typing import Any

from numkit.errors import InvalidArgument


def as_int(x: Any, what: str = "value") -> int:
    """Coerce an integer-like value (int, mpz, sympy Integer, ...) to int."""
    if isinstance(x, bool):
        raise InvalidArgument(f"{what} must be an integer, got bool")
    try:
        return index(x)
    except TypeError:
        raise InvalidArgument(f"{what} must be an integer, got {type(x).__name__}: {x!r}") from None


def non_negative(x: Any, what: str = "value") -> int:
    v = as_int(x, what)
    if v < 0:
        raise InvalidArgument(f"{what} must be non-negative, got {v}")
    return v


def is_square(x: int) -> bool:
    if x < 0:
        return False
    r = isqrt(x)
    return r * r == x


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(int(n))
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    bl = n.bit_length()
    est = int((bl * 30103) // 100000)
    # bring into correct decade with at most a couple of steps
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        p10 *= 10
        while n >= p10:
            est += 1
            p10 *= 10
    return est + 1
