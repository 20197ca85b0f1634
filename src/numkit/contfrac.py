# src/numkit/contfrac.py
"""
Continued-fraction decomposition of exact rationals.

Only exact inputs are accepted. A float such as 0.1 or math.sqrt(2) carries
binary rounding error that the Euclidean algorithm faithfully expands into
garbage terms, so floats (and sympy Floats/irrationals) raise NotRational.
Use numkit.surd for square roots.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from decimal import Decimal
from fractions import Fraction
from typing import Any, NamedTuple

from sympy import Basic, Rational

from numkit.errors import DivideByZero, InvalidArgument, InvalidFraction, NotRational
from numkit.fraction import Frac
from numkit.ring import BIG, IntegerRing
from numkit.utility import as_int

_IRRATIONAL_HINT = "use numkit.surd.sqrt_cf() for square roots, or pass an exact p/q"


def _exact_int(x: Any, what: str) -> int:
    if isinstance(x, float):
        raise NotRational(x, _IRRATIONAL_HINT)
    return as_int(x, what)


def as_rational(x: Any, d: Any = None) -> tuple[int, int]:
    """
    Return x (or the pair x/d) as an exact (numerator, denominator) with d > 0.
    The pair is not reduced.
    """
    if d is not None:
        num, den = _exact_int(x, "numerator"), _exact_int(d, "denominator")
    elif isinstance(x, Frac):
        num, den = x.numerator, x.denominator
    elif isinstance(x, Fraction):
        num, den = x.numerator, x.denominator
    elif isinstance(x, Basic):
        if not isinstance(x, Rational):
            raise NotRational(x, _IRRATIONAL_HINT)
        num, den = int(x.p), int(x.q)
    elif isinstance(x, Decimal):
        if not x.is_finite():
            raise NotRational(x)
        num, den = x.as_integer_ratio()
    elif isinstance(x, (float, complex)):
        raise NotRational(x, _IRRATIONAL_HINT)
    else:
        num, den = _exact_int(x, "value"), 1

    if den == 0:
        raise InvalidFraction(f"zero denominator in {num}/0")
    if den < 0:
        num, den = -num, -den
    return num, den


class ContinuedFraction:
    """
    Lazy, restartable sequence of continued-fraction terms of num/den.

    Each iteration re-runs the Euclidean algorithm from the stored pair in
    the given ring (gmpy2.mpz terms by default):

        >>> [int(t) for t in ContinuedFraction(415, 93)]
        [4, 2, 6, 7]
    """

    __slots__ = ("numerator", "denominator", "ring")

    def __init__(self, numerator: int, denominator: int = 1, *, ring: IntegerRing = BIG):
        self.numerator, self.denominator = as_rational(numerator, denominator)
        self.ring = ring

    def __iter__(self) -> Iterator[Any]:
        ring = self.ring
        n, d = ring.coerce(self.numerator), ring.coerce(self.denominator)
        while not ring.is_zero(d):
            q = ring.floordiv(n, d)
            yield q
            n, d = d, ring.sub(n, ring.mul(q, d))

    def __repr__(self) -> str:
        return f"ContinuedFraction({self.numerator}, {self.denominator})"


def cf_terms(x: Any, d: Any = None, *, ring: IntegerRing = BIG) -> ContinuedFraction:
    """Continued-fraction terms of an exact rational x (or x/d)."""
    num, den = as_rational(x, d)
    return ContinuedFraction(num, den, ring=ring)


class CFStep(NamedTuple):
    term: int
    remainder: Fraction  # fractional part left after taking `term`


def cf_steps(x: Any, d: Any = None) -> Iterator[CFStep]:
    """
    Yield each expansion step as (term, remainder), where x_i = term + remainder
    and the next step expands 1/remainder. The final remainder is 0.
    """
    num, den = as_rational(x, d)
    while den != 0:
        q, r = divmod(num, den)
        yield CFStep(q, Fraction(r, den))
        num, den = den, r


def evaluate(terms: Iterable[int]) -> Fraction:
    """Fold a finite term list [a0; a1, ..., an] back into its exact value."""
    seq: Sequence[int] = [_exact_int(t, "term") for t in terms]
    if not seq:
        raise InvalidArgument("cannot evaluate an empty continued fraction")

    acc = Fraction(seq[-1])
    for t in reversed(seq[:-1]):
        if acc == 0:
            raise DivideByZero(f"zero term inside continued fraction {seq}")
        acc = t + 1 / acc
    return acc
