# src/numkit/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from colorama import Fore, Style

from numkit.fraction import Frac
from numkit.runtime import CFG
from numkit.utility import dec_digits

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    return ANSI_RE.sub("", s or "")


def abbr_int_fast(n: Any, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    try:
        a = int(n)
    except (TypeError, ValueError):
        return str(n)
    if a == 0:
        return "0"

    sign = "-" if a < 0 else ""
    a = -a if a < 0 else a

    # If not long enough, fall back to normal str()
    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    # compute first/last blocks exactly
    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    # zero-pad last block to width 'tail'
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def abbr(n: Any) -> str:
    """abbr_int_fast() with the FORMATTING.NUM_ABBR_* settings of the active profile."""
    return abbr_int_fast(
        n,
        head=int(CFG("FORMATTING.NUM_ABBR_HEAD", 10)),
        tail=int(CFG("FORMATTING.NUM_ABBR_TAIL", 10)),
        threshold=int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 35)),
    )


def format_terms(terms: Iterable[Any], *, period: Iterable[Any] | None = None) -> str:
    """
    Render continued-fraction terms in bracket notation.

        [4; 2, 6, 7]          finite
        [1; (2)]              period in parentheses
    """
    seq = [abbr(t) for t in terms]
    if not seq:
        return "[]"
    head, rest = seq[0], seq[1:]
    if period is not None:
        rest.append("(" + ", ".join(abbr(t) for t in period) + ")")
    if not rest:
        return f"[{head}]"
    return f"[{head}; {', '.join(rest)}]"


def format_frac(f: Frac, *, mixed: bool = False) -> str:
    if not mixed or f.integer_part == 0:
        return f"{abbr(f.numerator)}/{abbr(f.denominator)}"
    ip, rem = f.mixed()
    if rem.numerator == 0:
        return abbr(ip)
    return f"{abbr(ip)} {abbr(abs(rem.numerator))}/{abbr(abs(rem.denominator))}"


def format_convergent(idx: int, h: Any, k: Any) -> str:
    """One numbered convergent line: '  3  17/12  ≈ 1.4166666667'."""
    try:
        approx = f"{Style.DIM}≈ {int(h) / int(k):.10g}{Style.RESET_ALL}"
    except (OverflowError, ZeroDivisionError):
        approx = ""
    return f"{Fore.YELLOW}{idx:>4}{Style.RESET_ALL}  {abbr(h)}/{abbr(k)}  {approx}".rstrip()
