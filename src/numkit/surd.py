# src/numkit/surd.py
"""
Square roots as periodic continued fractions, and Pell's equation.

For a non-square n, sqrt(n) = [a0; a1, ..., ak, a1, ..., ak, ...] where the
period a1..ak ends with 2*a0. The expansion is computed exactly with integer
state (m, d, a), so it is safe for arbitrarily large n.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from math import isqrt

import gmpy2

from numkit.convergents import Convergent, convergents
from numkit.errors import InvalidArgument
from numkit.ring import BIG, IntegerRing
from numkit.runtime import debug_line
from numkit.utility import as_int, is_square


@dataclass(frozen=True)
class SurdExpansion:
    n: int
    root: int                 # a0 = isqrt(n)
    period: tuple[int, ...]   # a1..ak, last term is 2*a0

    @property
    def terms(self) -> list[int]:
        return [self.root, *self.period]

    @property
    def recurring(self) -> bool:
        return True

    @property
    def period_length(self) -> int:
        return len(self.period)

    def convergents(self, *, ring: IntegerRing = BIG, max_terms: int | None = None) -> Iterator[Convergent]:
        return convergents(self.terms, True, ring=ring, max_terms=max_terms)

    def __str__(self) -> str:
        return f"sqrt({self.n}) = [{self.root}; ({', '.join(map(str, self.period))})]"


def sqrt_cf(n: int) -> SurdExpansion | None:
    """
    Periodic continued fraction of sqrt(n), or None when n is a perfect square.

        >>> sqrt_cf(2).terms
        [1, 2]
        >>> sqrt_cf(16) is None
        True
    """
    n = as_int(n, "n")
    if n < 0:
        raise InvalidArgument(f"sqrt_cf needs n >= 0, got {n}")

    if is_square(n):
        return None
    a0 = isqrt(n)

    m, d, a = 0, 1, a0
    period: list[int] = []
    while True:
        m = d * a - m
        d = (n - m * m) // d
        a = (a0 + m) // d
        period.append(a)
        if d == 1:
            break

    debug_line(f"sqrt({n}): a0={a0}, period length {len(period)}", tag="surd")
    return SurdExpansion(n=n, root=a0, period=tuple(period))


def _require_surd(n: int) -> SurdExpansion:
    exp = sqrt_cf(n)
    if exp is None:
        raise InvalidArgument(f"x^2 - {n}*y^2 = 1 has no positive solution: {n} is a perfect square")
    return exp


def pell_fundamental(n: int) -> tuple[int, int]:
    """Smallest positive (x, y) with x^2 - n*y^2 == 1."""
    exp = _require_surd(n)
    for h, k in exp.convergents():
        if h * h - n * k * k == 1:
            return int(h), int(k)
    raise AssertionError("unreachable: recurring convergent stream ended")


def pell_solutions(n: int) -> Iterator[tuple[int, int]]:
    """Yield every positive solution of x^2 - n*y^2 == 1 in increasing order."""
    x1, y1 = pell_fundamental(n)
    x1, y1 = gmpy2.mpz(x1), gmpy2.mpz(y1)
    x, y = x1, y1
    while True:
        yield int(x), int(y)
        x, y = x1 * x + n * y1 * y, x1 * y + y1 * x


def pell_lucas(count: int) -> Iterator[Convergent]:
    """
    First `count` convergents of sqrt(2), built from the Pell numbers:
    (1, 1), (3, 2), (7, 5), (17, 12), ...
    """
    count = as_int(count, "count")
    if count < 0:
        raise InvalidArgument(f"count must be >= 0, got {count}")
    p0, p1 = gmpy2.mpz(0), gmpy2.mpz(1)
    for _ in range(count):
        yield Convergent(p0 + p1, p1)
        p0, p1 = p1, 2 * p1 + p0
