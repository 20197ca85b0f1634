from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("numkit")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .contfrac import CFStep, ContinuedFraction, as_rational, cf_steps, cf_terms, evaluate
from .convergents import Convergent, best_approximation, big_convergents, bounded_convergents, convergents
from .errors import (
    DivideByZero,
    InvalidArgument,
    InvalidFraction,
    MemoConflict,
    NotRational,
    NumkitError,
    Overflow,
    UserInputError,
)
from .fraction import Frac, farey, gcd_of
from .partition import big_partition, bounded_partition, partition, partition_total, partitions_upto
from .ring import BIG, INT64, BigIntRing, FixedWidthRing, IntegerRing
from .runtime import APPLY, CFG
from .surd import SurdExpansion, pell_fundamental, pell_lucas, pell_solutions, sqrt_cf

__all__ = [
    "APPLY",
    "BIG",
    "CFG",
    "INT64",
    "BigIntRing",
    "CFStep",
    "ContinuedFraction",
    "Convergent",
    "DivideByZero",
    "FixedWidthRing",
    "Frac",
    "IntegerRing",
    "InvalidArgument",
    "InvalidFraction",
    "MemoConflict",
    "NotRational",
    "NumkitError",
    "Overflow",
    "SurdExpansion",
    "UserInputError",
    "__version__",
    "as_rational",
    "best_approximation",
    "big_convergents",
    "big_partition",
    "bounded_convergents",
    "bounded_partition",
    "cf_steps",
    "cf_terms",
    "convergents",
    "evaluate",
    "farey",
    "gcd_of",
    "partition",
    "partition_total",
    "partitions_upto",
    "pell_fundamental",
    "pell_lucas",
    "pell_solutions",
    "sqrt_cf",
]
