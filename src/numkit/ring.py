# src/numkit/ring.py
"""
Integer rings shared by the bounded and arbitrary-precision algorithms.

Every algorithm in numkit is written once against `IntegerRing`. Two concrete
rings exist:

  - FixedWidthRing(bits): signed two's-complement range, every operation is
    checked and raises Overflow instead of wrapping around.
  - BigIntRing: gmpy2.mpz, never overflows.

Rings are stateless; one instance can be shared between concurrent streams.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import gmpy2

from numkit.errors import DivideByZero, InvalidArgument, Overflow
from numkit.utility import as_int


@runtime_checkable
class IntegerRing(Protocol):
    name: str

    @property
    def zero(self) -> Any: ...

    @property
    def one(self) -> Any: ...

    def coerce(self, x: Any) -> Any: ...

    def add(self, a: Any, b: Any) -> Any: ...

    def sub(self, a: Any, b: Any) -> Any: ...

    def mul(self, a: Any, b: Any) -> Any: ...

    def floordiv(self, a: Any, b: Any) -> Any: ...

    def is_zero(self, a: Any) -> bool: ...


class FixedWidthRing:
    """Signed integers of a fixed bit width with checked arithmetic."""

    def __init__(self, bits: int = 64):
        if bits < 2:
            raise InvalidArgument(f"bit width must be >= 2, got {bits}")
        self.bits = bits
        self.min = -(1 << (bits - 1))
        self.max = (1 << (bits - 1)) - 1
        self.name = f"int{bits}"

    @property
    def zero(self) -> int:
        return 0

    @property
    def one(self) -> int:
        return 1

    def _check(self, v: int, op: str) -> int:
        if v < self.min or v > self.max:
            raise Overflow(f"{op} result exceeds {self.name} range", bits=self.bits)
        return v

    def coerce(self, x: Any) -> int:
        return self._check(as_int(x), "coerce")

    def add(self, a: int, b: int) -> int:
        return self._check(a + b, "add")

    def sub(self, a: int, b: int) -> int:
        return self._check(a - b, "sub")

    def mul(self, a: int, b: int) -> int:
        return self._check(a * b, "mul")

    def floordiv(self, a: int, b: int) -> int:
        if b == 0:
            raise DivideByZero(f"{self.name}: integer division by zero")
        # min // -1 is the one quotient that leaves the range
        return self._check(a // b, "floordiv")

    def is_zero(self, a: int) -> bool:
        return a == 0

    def __repr__(self) -> str:
        return f"FixedWidthRing(bits={self.bits})"


class BigIntRing:
    """Arbitrary-precision integers backed by gmpy2.mpz."""

    name = "mpz"

    @property
    def zero(self) -> Any:
        return gmpy2.mpz(0)

    @property
    def one(self) -> Any:
        return gmpy2.mpz(1)

    def coerce(self, x: Any) -> Any:
        if isinstance(x, gmpy2.mpz):
            return x
        return gmpy2.mpz(as_int(x))

    def add(self, a: Any, b: Any) -> Any:
        return a + b

    def sub(self, a: Any, b: Any) -> Any:
        return a - b

    def mul(self, a: Any, b: Any) -> Any:
        return a * b

    def floordiv(self, a: Any, b: Any) -> Any:
        if b == 0:
            raise DivideByZero("mpz: integer division by zero")
        return a // b

    def is_zero(self, a: Any) -> bool:
        return a == 0

    def __repr__(self) -> str:
        return "BigIntRing()"


INT64 = FixedWidthRing(64)
BIG = BigIntRing()
