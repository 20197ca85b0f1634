"""
Tests for numkit.convergents (bounded and arbitrary-precision streams).

Run: pytest -v
"""

from __future__ import annotations

from fractions import Fraction
from itertools import islice

import gmpy2
import pytest
from sympy.ntheory.continued_fraction import continued_fraction_convergents

from numkit.contfrac import cf_terms
from numkit.convergents import (
    Convergent,
    best_approximation,
    big_convergents,
    bounded_convergents,
    convergents,
)
from numkit.errors import InvalidArgument
from numkit.ring import INT64
from numkit.runtime import APPLY

INT64_MAX = 2**63 - 1

# ---------- helpers -----------------------------------------------------------


def _pairs(stream) -> list[tuple[int, int]]:
    return [c.as_pair() for c in stream]


# ---------- finite streams ----------------------------------------------------


def test_415_over_93_round_trip():
    terms = list(cf_terms(415, 93))
    assert terms == [4, 2, 6, 7]
    got = _pairs(big_convergents(terms))
    assert got == [(4, 1), (9, 2), (58, 13), (415, 93)]


@pytest.mark.parametrize(
    "n,d",
    [(415, 93), (355, 113), (1, 7), (13, 1), (-415, 93), (10**30 + 1, 10**15 + 37)],
)
def test_final_convergent_reproduces_rational(n, d):
    terms = list(cf_terms(n, d))
    pairs = _pairs(big_convergents(terms))
    if len(terms) < 2:
        assert pairs == []
    else:
        assert len(pairs) == len(terms)
        g = gmpy2.gcd(n, d)
        assert pairs[-1] == (n // g, d // g)


def test_bounded_and_big_agree_in_range():
    terms = list(cf_terms(355, 113))
    assert _pairs(bounded_convergents(terms)) == _pairs(big_convergents(terms))


def test_matches_sympy_convergents():
    terms = [3, 7, 15, 1, 292, 1, 1, 1, 2]
    expected = [(int(c.p), int(c.q)) for c in continued_fraction_convergents(terms)]
    assert _pairs(convergents(terms)) == expected


@pytest.mark.parametrize("terms", [[], [7]], ids=["empty", "single"])
def test_degenerate_input_yields_nothing(terms):
    assert list(big_convergents(terms)) == []
    assert list(bounded_convergents(terms, recurring=True)) == []


def test_bounded_keeps_negative_convergents():
    assert _pairs(bounded_convergents([-4, 2])) == [(-4, 1), (-7, 2)]
    assert _pairs(bounded_convergents([-4, 2])) == _pairs(big_convergents([-4, 2]))


def test_value_types_follow_the_ring():
    big = next(big_convergents([1, 2]))
    small = next(bounded_convergents([1, 2]))
    assert isinstance(big.h, gmpy2.mpz)
    assert type(small.h) is int
    assert isinstance(big, Convergent)


# ---------- recurring streams -------------------------------------------------


def test_sqrt2_recurring():
    got = _pairs(islice(big_convergents([1, 2], recurring=True), 5))
    assert got == [(1, 1), (3, 2), (7, 5), (17, 12), (41, 29)]


def test_recurring_tail_excludes_leading_term():
    # sqrt(7) = [2; (1, 1, 1, 4)]
    terms = [2, 1, 1, 1, 4]
    got = _pairs(islice(big_convergents(terms, recurring=True), 9))
    expected = [
        (int(c.p), int(c.q))
        for c in islice(continued_fraction_convergents([2, [1, 1, 1, 4]]), 9)
    ]
    assert got == expected


def test_recurring_big_stream_keeps_going_past_int64():
    stream = big_convergents([1, 2], recurring=True)
    last = None
    for last in islice(stream, 200):
        pass
    assert last.h > INT64_MAX
    assert last.h * last.h - 2 * last.k * last.k in (1, -1)


def test_max_terms_caps_the_stream():
    assert len(list(big_convergents([1, 2], recurring=True, max_terms=3))) == 3
    assert len(list(big_convergents([4, 2, 6, 7], max_terms=10))) == 4
    with pytest.raises(InvalidArgument):
        convergents([1, 2], max_terms=-1)


# ---------- overflow termination ----------------------------------------------


def test_bounded_recurring_stream_stops_at_int64_overflow():
    # golden ratio [1; 1, 1, ...]: Fibonacci pairs
    bounded = _pairs(bounded_convergents([1, 1], recurring=True))
    assert bounded, "bounded stream produced nothing"
    assert all(0 < h <= INT64_MAX and 0 < k <= INT64_MAX for h, k in bounded)

    big = _pairs(islice(big_convergents([1, 1], recurring=True), len(bounded) + 1))
    assert big[:-1] == bounded
    assert max(big[-1]) > INT64_MAX


def test_bounded_stream_stops_on_huge_term():
    terms = [1, 2, 2**62, 5]
    assert _pairs(bounded_convergents(terms)) == [(1, 1), (3, 2)]


def test_bounded_term_outside_range_ends_stream():
    assert _pairs(convergents([2**64, 1], ring=INT64)) == []


def test_bounded_default_cap_comes_from_profile():
    APPLY({"CONVERGENTS": {"MAX_TERMS": 4}})
    assert len(list(bounded_convergents([1, 2], recurring=True))) == 4


# ---------- stream behaviour --------------------------------------------------


def test_terms_are_snapshotted():
    terms = [4, 2, 6, 7]
    stream = big_convergents(terms)
    terms.append(100)
    terms[0] = 0
    assert _pairs(stream)[-1] == (415, 93)


def test_independent_streams_interleave():
    a = big_convergents([1, 2], recurring=True)
    b = big_convergents([1, 1], recurring=True)
    mixed = [(next(a).as_pair(), next(b).as_pair()) for _ in range(4)]
    assert [p for p, _ in mixed] == [(1, 1), (3, 2), (7, 5), (17, 12)]
    assert [q for _, q in mixed] == [(1, 1), (2, 1), (3, 2), (5, 3)]


def test_early_close_is_clean():
    stream = big_convergents([1, 2], recurring=True)
    next(stream)
    stream.close()
    with pytest.raises(StopIteration):
        next(stream)


def test_best_approximation():
    terms = list(cf_terms(Fraction("3.14159265358979")))
    assert best_approximation(terms, 1000).as_pair() == (355, 113)
    assert best_approximation(terms, 7).as_pair() == (22, 7)
    assert best_approximation([1, 2], 100, recurring=True).as_pair() == (99, 70)
