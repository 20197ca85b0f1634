# src/numkit/fraction.py
"""
Exact fractions with an explicit, in-place reduce().

Frac keeps numerator and denominator exactly as given; nothing is reduced
until reduce() is called. The integer part is truncated toward zero, so
Frac(-7, 2).integer_part == -3.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Union

from numkit.errors import DivideByZero, InvalidArgument, InvalidFraction
from numkit.utility import as_int

# Inputs accepted by Frac.from_decimal
DecimalLike = Union[int, float, str, Decimal, Fraction]


def _trunc_div(n: int, d: int) -> int:
    q = abs(n) // abs(d)
    return q if (n < 0) == (d < 0) else -q


def gcd_of(values: Iterable[int]) -> int:
    """
    Greatest common divisor of all values.

    Fewer than two values is a degenerate domain and returns 0.
    """
    vals = [int(v) for v in values]
    if len(vals) < 2:
        return 0
    return math.gcd(*vals)


class Frac:
    """A (possibly mixed) fraction numerator/denominator."""

    __slots__ = ("numerator", "denominator", "integer_part")

    def __init__(self, numerator: int, denominator: int = 1):
        n = as_int(numerator, "numerator")
        d = as_int(denominator, "denominator")
        if d == 0:
            raise InvalidFraction(f"zero denominator in {n}/0")
        self.numerator = n
        self.denominator = d
        self.integer_part = _trunc_div(n, d)

    # --- construction ---

    @classmethod
    def from_decimal(cls, x: DecimalLike) -> Frac:
        """
        Build a reduced Frac from a decimal value.

        Floats are read through their shortest repr, so 0.1 becomes 1/10
        rather than its binary expansion.

            >>> Frac.from_decimal("3.25")
            Frac(13, 4)
            >>> Frac.from_decimal(0.1)
            Frac(1, 10)
        """
        if isinstance(x, Frac):
            return cls(x.numerator, x.denominator).reduce()
        if isinstance(x, Fraction):
            return cls(x.numerator, x.denominator)
        if isinstance(x, bool):
            raise InvalidArgument("cannot build a fraction from a bool")
        if isinstance(x, int):
            return cls(x, 1)
        if isinstance(x, float):
            if not math.isfinite(x):
                raise InvalidArgument(f"cannot build a fraction from {x!r}")
            x = repr(x)
        try:
            dec = x if isinstance(x, Decimal) else Decimal(str(x).strip())
        except InvalidOperation:
            raise InvalidArgument(f"not a decimal number: {x!r}") from None
        if not dec.is_finite():
            raise InvalidArgument(f"cannot build a fraction from {x!r}")
        n, d = dec.as_integer_ratio()
        return cls(n, d)

    # --- core operations ---

    def gcd(self) -> int:
        """Greatest common divisor of numerator and denominator (non-negative)."""
        return gcd_of((self.numerator, self.denominator))

    def reduce(self) -> Frac:
        """Divide numerator and denominator by their gcd, in place; returns self."""
        g = self.gcd()
        if g == 0:
            raise DivideByZero(f"cannot reduce {self}: gcd is 0")
        if g != 1:
            self.numerator //= g
            self.denominator //= g
            self.integer_part = _trunc_div(self.numerator, self.denominator)
        return self

    def inverse(self) -> Frac:
        """Return denominator/numerator as a new Frac."""
        if self.numerator == 0:
            raise InvalidFraction(f"{self} has no inverse")
        return Frac(self.denominator, self.numerator)

    # --- views ---

    @property
    def value(self) -> float:
        """Decimal approximation; raises OverflowError beyond float range."""
        return self.numerator / self.denominator

    def mixed(self) -> tuple[int, Frac]:
        """Split into (integer_part, remainder) with the remainder sharing the sign of self."""
        rem = self.numerator - self.integer_part * self.denominator
        return self.integer_part, Frac(rem, self.denominator)

    def to_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __float__(self) -> float:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frac):
            return NotImplemented
        return (self.numerator, self.denominator) == (other.numerator, other.denominator)

    __hash__ = None  # mutable through reduce()

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def __repr__(self) -> str:
        return f"Frac({self.numerator}, {self.denominator})"


def farey(n: int) -> Iterator[Frac]:
    """
    Yield the Farey sequence of order n: reduced fractions in [0, 1] with
    denominators <= n, in increasing order.
    """
    n = as_int(n, "order")
    if n < 1:
        raise InvalidArgument(f"Farey order must be >= 1, got {n}")

    a, b, c, d = 0, 1, 1, n
    yield Frac(a, b)
    while c <= n:
        k = (n + b) // d
        a, b, c, d = c, d, k * c - a, k * d - b
        yield Frac(a, b)
