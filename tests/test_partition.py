"""
Tests for numkit.partition (partitions of n into exactly m parts).

Run: pytest -v
"""

from __future__ import annotations

import gmpy2
import pytest
from sympy import npartitions
from sympy.functions.combinatorial.numbers import nT

from numkit.errors import InvalidArgument, MemoConflict, NumkitError, Overflow
from numkit.partition import (
    PartitionMemo,
    big_partition,
    bounded_partition,
    partition,
    partition_total,
    partitions_upto,
)
from numkit.ring import INT64

KNOWN = [
    ((5, 2), 2),
    ((10, 3), 8),
    ((7, 7), 1),
    ((8, 7), 1),
    ((9, 7), 2),
    ((20, 4), 64),
]

KNOWN_IDS = [f"p{n}_{m}" for (n, m), _ in KNOWN]


@pytest.mark.parametrize("args,expected", KNOWN, ids=KNOWN_IDS)
def test_known_values(args, expected):
    assert big_partition(*args) == expected
    assert bounded_partition(*args) == expected


@pytest.mark.parametrize("n", [1, 2, 5, 60, 1000])
def test_one_part(n):
    assert partition(n, 1) == 1


@pytest.mark.parametrize("n,m", [(3, 4), (4, 10), (0, 5), (1, 2)])
def test_fewer_units_than_parts(n, m):
    assert partition(n, m) == 0


@pytest.mark.parametrize("n", [0, 1, 9, 50])
def test_zero_parts_convention(n):
    assert partition(n, 0) == 0


def test_matches_sympy_table():
    for n in range(1, 41):
        for m in range(1, n + 3):
            assert int(partition(n, m)) == int(nT(n, m)), f"p({n}, {m})"


def test_results_independent_of_call_order():
    first = [partition(n, 5) for n in (30, 12, 45, 5, 30)]
    again = [partition(n, 5) for n in (5, 12, 30, 45, 30)]
    assert sorted(first) == sorted(again)
    assert first[0] == first[-1] == int(nT(30, 5))


@pytest.mark.parametrize("n,m", [(2400, 1200), (3000, 2990), (1500, 1497), (1300, 1100)])
def test_many_parts_match_sympy(n, m):
    # with n - m <= m every partition of n - m fits in m parts
    assert int(partition(n, m)) == int(npartitions(n - m))


def test_many_parts_bounded():
    # p(3000, 2990) == p(10) == 42
    assert bounded_partition(3000, 2990) == 42


def test_big_variant_returns_mpz():
    assert isinstance(big_partition(50, 7), gmpy2.mpz)
    assert type(bounded_partition(50, 7)) is int


def test_bounded_overflow_is_explicit():
    with pytest.raises(Overflow):
        bounded_partition(1000, 30)
    assert big_partition(1000, 30) > 2**63 - 1


def test_overflow_is_an_overflow_error():
    with pytest.raises(OverflowError):
        partition(1000, 30, ring=INT64)


def test_bounded_fine_around_sixty():
    assert bounded_partition(60, 10) == big_partition(60, 10) == int(nT(60, 10))


@pytest.mark.parametrize("n,m", [(-1, 2), (5, -1), (2.5, 1), ("5", 2)])
def test_invalid_arguments(n, m):
    with pytest.raises(InvalidArgument):
        partition(n, m)


# ---------- row / totals ------------------------------------------------------


def test_partitions_upto_row():
    assert partitions_upto(0) == []
    assert partitions_upto(1) == [1]
    assert partitions_upto(6) == [1, 3, 3, 2, 1, 1]
    row = partitions_upto(25)
    assert row == [int(nT(25, m)) for m in range(1, 26)]


@pytest.mark.parametrize("n", [0, 1, 2, 10, 50, 121, 1500])
def test_partition_total_matches_sympy(n):
    assert partition_total(n) == int(npartitions(n))


# ---------- memo table --------------------------------------------------------


def test_memo_table_shape_and_sentinel():
    memo = PartitionMemo(span=4, parts=5)
    assert len(memo.rows) == 5
    assert all(len(row) == 4 for row in memo.rows)
    assert memo.get(7, 3) is None
    memo.put(7, 3, 4)
    assert memo.get(7, 3) == 4
    assert memo.filled() == 1


def test_memo_refuses_conflicting_writes():
    memo = PartitionMemo(span=2, parts=3)
    memo.put(5, 3, 2)
    memo.put(5, 3, 2)
    with pytest.raises(MemoConflict) as exc:
        memo.put(5, 3, 3)
    assert isinstance(exc.value, NumkitError)
    assert memo.get(5, 3) == 2
