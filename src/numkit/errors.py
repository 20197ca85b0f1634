# src/numkit/errors.py
"""Exception hierarchy for numkit."""

from __future__ import annotations


class NumkitError(Exception):
    """Base class for all numkit exceptions."""
    pass


class InvalidFraction(NumkitError, ValueError):
    """Raised when a fraction would get a zero denominator."""
    pass


class NotRational(NumkitError, TypeError):
    """Raised when an inexact or irrational value reaches an exact-only operation."""

    def __init__(self, value: object, hint: str | None = None):
        msg = f"not an exact rational: {value!r} ({type(value).__name__})"
        if hint:
            msg += f"\n  Suggestion: {hint}"
        super().__init__(msg)
        self.value = value


class Overflow(NumkitError, OverflowError):
    """Raised when fixed-width arithmetic leaves its representable range."""

    def __init__(self, message: str, bits: int | None = None):
        super().__init__(message)
        self.bits = bits


class InvalidArgument(NumkitError, ValueError):
    """Raised for malformed arguments (negative counts, non-integers, ...)."""
    pass


class DivideByZero(NumkitError, ZeroDivisionError):
    pass


class UserInputError(NumkitError):
    """Friendly, one-line error for the command line and profile loading."""
    pass


class MemoConflict(NumkitError, RuntimeError):
    """Raised when a memo slot is written twice with different values."""
    pass
