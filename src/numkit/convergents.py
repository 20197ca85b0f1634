# src/numkit/convergents.py
"""
Convergent streams of continued fractions.

Given terms [a0; a1, a2, ...] the convergents h/k follow

    h[n] = a[n] * h[n-1] + h[n-2]
    k[n] = a[n] * k[n-1] + k[n-2]

seeded with h = (0, 1) and k = (1, 0), so the first pair is (a0, 1).

Streams are plain generators: one pair is computed per next() and nothing is
precomputed. Closing a stream early just drops its local state.

Bounded streams use INT64 (signed 64-bit, checked). The first pair that would
leave that range ends the stream without an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import chain, cycle, islice
from typing import Any, NamedTuple

from numkit.errors import InvalidArgument, Overflow
from numkit.ring import BIG, INT64, IntegerRing
from numkit.runtime import CFG, debug_line

# Growth limit for recurring bounded streams (total terms consumed)
DEFAULT_BOUNDED_MAX_TERMS = 2**31 - 1


class Convergent(NamedTuple):
    h: Any  # numerator
    k: Any  # denominator

    def as_pair(self) -> tuple[int, int]:
        return int(self.h), int(self.k)


def _term_source(terms: tuple[Any, ...], recurring: bool, max_terms: int | None) -> Iterator[Any]:
    src: Iterator[Any] = iter(terms)
    if recurring:
        # after the supplied terms, repeat everything but the leading term
        src = chain(src, cycle(terms[1:]))
    if max_terms is not None:
        src = islice(src, max_terms)
    return src


def convergents(
    terms: Iterable[int],
    recurring: bool = False,
    *,
    ring: IntegerRing = BIG,
    max_terms: int | None = None,
) -> Iterator[Convergent]:
    """
    Stream the convergents of [a0; a1, a2, ...].

    terms      finite term list; snapshotted before the first pair is produced
    recurring  if True, terms[1:] repeat forever (e.g. the period of a surd)
    ring       arithmetic domain; a FixedWidthRing ends the stream on overflow
    max_terms  cap on the total number of terms consumed (None = no cap)

    Fewer than two terms yields nothing. A non-recurring list of t terms
    yields t pairs, the last being the value of the whole fraction.
    """
    snapshot = tuple(terms)
    if max_terms is not None and max_terms < 0:
        raise InvalidArgument(f"max_terms must be >= 0, got {max_terms}")
    return _stream(snapshot, recurring, ring, max_terms)


def _stream(
    snapshot: tuple[Any, ...],
    recurring: bool,
    ring: IntegerRing,
    max_terms: int | None,
) -> Iterator[Convergent]:
    if len(snapshot) < 2:
        return

    h2, h1 = ring.zero, ring.one
    k2, k1 = ring.one, ring.zero

    for pos, term in enumerate(_term_source(snapshot, recurring, max_terms)):
        try:
            a = ring.coerce(term)
            h = ring.add(ring.mul(a, h1), h2)
            k = ring.add(ring.mul(a, k1), k2)
        except Overflow:
            debug_line(f"convergents: {ring.name} overflow at term #{pos}, stream ends", tag="overflow")
            return

        yield Convergent(h, k)

        h2, h1 = h1, h
        k2, k1 = k1, k


def bounded_convergents(
    terms: Iterable[int],
    recurring: bool = False,
    *,
    max_terms: int | None = None,
) -> Iterator[Convergent]:
    """
    Convergents in signed 64-bit arithmetic; the stream ends at the first overflow.

    Overflow is detected by checked arithmetic, not by the sign of the result,
    so a negative rational keeps its negative convergents: [-4, 2] yields
    (-4, 1) then (-7, 2) instead of stopping at the first negative value.
    """
    if max_terms is None:
        max_terms = int(CFG("CONVERGENTS.MAX_TERMS", DEFAULT_BOUNDED_MAX_TERMS))
    return convergents(terms, recurring, ring=INT64, max_terms=max_terms)


def big_convergents(
    terms: Iterable[int],
    recurring: bool = False,
    *,
    max_terms: int | None = None,
) -> Iterator[Convergent]:
    """Convergents as gmpy2.mpz; never ends on its own when recurring."""
    return convergents(terms, recurring, ring=BIG, max_terms=max_terms)


def best_approximation(
    terms: Iterable[int],
    max_denominator: int,
    recurring: bool = False,
) -> Convergent | None:
    """Last convergent whose denominator does not exceed max_denominator."""
    if max_denominator < 1:
        raise InvalidArgument(f"max_denominator must be >= 1, got {max_denominator}")
    best = None
    for c in big_convergents(terms, recurring):
        if c.k > max_denominator:
            break
        best = c
    return best
