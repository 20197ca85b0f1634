# src/numkit/partition.py
"""
Partitions of n into exactly m positive parts.

Counting uses p(n, m) = p(n - 1, m - 1) + p(n - m, m), unrolled as

    p(n, m) = sum(p(n - 1 - j*m, m - 1) for j in range(n // m))

with a memo table keyed by (n - m, m - 2). The table belongs to one top-level
call and is dropped afterwards; results never leak between calls.

The table is filled one part count at a time before the top-level lookup, so
the recursion never descends more than one level below a memoized entry.
"""

from __future__ import annotations

from typing import Any

from numkit.errors import MemoConflict
from numkit.ring import BIG, INT64, IntegerRing
from numkit.runtime import debug_line
from numkit.utility import non_negative


class PartitionMemo:
    """
    Memo table for p(n, m), m >= 2, indexed [n - m][m - 2].

    Sized for every (n, m) reachable from p(top_n, top_m): n - m never grows
    and m never exceeds top_m. None marks an uncomputed slot.
    """

    __slots__ = ("rows",)

    def __init__(self, span: int, parts: int):
        self.rows: list[list[Any]] = [[None] * max(parts - 1, 0) for _ in range(span + 1)]

    def get(self, n: int, m: int) -> Any:
        return self.rows[n - m][m - 2]

    def put(self, n: int, m: int, value: Any) -> None:
        slot = self.rows[n - m]
        prev = slot[m - 2]
        if prev is not None and prev != value:
            raise MemoConflict(f"memo conflict at p({n}, {m}): {prev} != {value}")
        slot[m - 2] = value

    def filled(self) -> int:
        return sum(v is not None for row in self.rows for v in row)

    @property
    def size(self) -> int:
        return sum(len(row) for row in self.rows)


def _count(n: int, m: int, memo: PartitionMemo, ring: IntegerRing) -> Any:
    # caller guarantees n >= m >= 2
    if n <= m + 1:
        return ring.one
    if m == 2:
        return ring.coerce(n // 2)

    hit = memo.get(n, m)
    if hit is not None:
        return hit

    total = ring.zero
    rest = n
    for _ in range(n // m):
        total = ring.add(total, _count(rest - 1, m - 1, memo, ring))
        rest -= m

    memo.put(n, m, total)
    return total


def _fill_levels(memo: PartitionMemo, ring: IntegerRing, m: int, span: int, top: int) -> None:
    # p(k + gap, k) for 3 <= k < m, 2 <= gap <= span, k + gap <= top; lowest k first
    for k in range(3, m):
        for gap in range(2, min(span, top - k) + 1):
            _count(k + gap, k, memo, ring)


def partition(n: int, m: int, *, ring: IntegerRing = BIG) -> Any:
    """
    Number of partitions of n into exactly m positive parts.

    Conventions: m < 2 returns m itself (so p(n, 0) == 0 for every n) and
    n < m returns 0. With a FixedWidthRing a count outside its range raises
    Overflow; retry with the default BIG ring.

        >>> partition(5, 2), partition(10, 3)
        (mpz(2), mpz(8))
    """
    n = non_negative(n, "n")
    m = non_negative(m, "m")

    if m < 2:
        return ring.coerce(m)
    if n < m:
        return ring.zero
    if n <= m + 1:
        return ring.one
    if m == 2:
        return ring.coerce(n // m)

    memo = PartitionMemo(n - m, m)
    _fill_levels(memo, ring, m, n - m, n)
    result = _count(n, m, memo, ring)
    debug_line(f"partition({n}, {m}): {memo.filled()}/{memo.size} memo slots used ({ring.name})", tag="partition")
    return result


def bounded_partition(n: int, m: int) -> int:
    """partition() in signed 64-bit arithmetic; raises Overflow past the int64 range."""
    return partition(n, m, ring=INT64)


def big_partition(n: int, m: int) -> Any:
    """partition() as gmpy2.mpz; use this once n exceeds roughly 60."""
    return partition(n, m, ring=BIG)


def partitions_upto(n: int, *, ring: IntegerRing = BIG) -> list[Any]:
    """[p(n, 1), p(n, 2), ..., p(n, n)] computed against one shared memo table."""
    n = non_negative(n, "n")
    if n == 0:
        return []

    row = [ring.coerce(1)]
    if n >= 2:
        memo = PartitionMemo(n - 2, n)
        _fill_levels(memo, ring, n, n - 2, n)
        for m in range(2, n + 1):
            if n <= m + 1:
                row.append(ring.one)
            elif m == 2:
                row.append(ring.coerce(n // 2))
            else:
                row.append(_count(n, m, memo, ring))
    return row


def partition_total(n: int, *, ring: IntegerRing = BIG) -> Any:
    """Unrestricted partition number p(n) (p(0) == 1)."""
    n = non_negative(n, "n")
    if n == 0:
        return ring.one
    total = ring.zero
    for v in partitions_upto(n, ring=ring):
        total = ring.add(total, v)
    return total
