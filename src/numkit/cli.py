# src/numkit/cli.py
"""
numkit - exact rational approximation and partition counting

usage: numkit -h
"""

from __future__ import annotations

import argparse
import sys
import textwrap
from itertools import islice

from colorama import Fore, Style
from colorama import init as colorama_init

from numkit import __version__ as _ver
from numkit.config import default_settings, list_profiles_with_descriptions, load_settings
from numkit.contfrac import cf_steps, cf_terms
from numkit.convergents import big_convergents, bounded_convergents
from numkit.errors import NumkitError, UserInputError
from numkit.fmt import abbr, format_convergent, format_frac, format_terms
from numkit.fraction import Frac, farey
from numkit.partition import big_partition, bounded_partition
from numkit.runtime import APPLY, CFG
from numkit.runtime import current as _rt_current
from numkit.surd import pell_fundamental, sqrt_cf


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    print(f"{Fore.RED}Error:{Style.RESET_ALL} {msg}", file=sys.stderr)


def _label(text: str) -> str:
    return f"{Fore.CYAN}{text}:{Style.RESET_ALL}"


# ---- input parsing ----

def _parse_int(s: str) -> int:
    try:
        return int(s.replace("_", ""))
    except ValueError:
        raise UserInputError(f"not an integer: {s!r}") from None


def _parse_frac(s: str) -> Frac:
    """'p/q' keeps p and q as typed; decimals and integers come back reduced."""
    s = s.strip()
    if "/" in s:
        num, _, den = s.partition("/")
        return Frac(_parse_int(num.strip()), _parse_int(den.strip()))
    return Frac.from_decimal(s)


def _count(args: argparse.Namespace) -> int:
    if args.count is not None:
        return max(0, args.count)
    return int(CFG("CONVERGENTS.DEFAULT_COUNT", 10))


# ---- commands ----

def cmd_frac(args: argparse.Namespace) -> int:
    f = _parse_frac(args.value)
    print(f"{_label('fraction')} {format_frac(f)}")
    print(f"{_label('gcd')} {abbr(f.gcd())}")
    red = Frac(f.numerator, f.denominator).reduce()
    print(f"{_label('reduced')} {format_frac(red)}")
    print(f"{_label('mixed')} {format_frac(red, mixed=True)}")
    try:
        print(f"{_label('decimal')} {red.value:.15g}")
    except OverflowError:
        print(f"{_label('decimal')} {Style.DIM}(out of float range){Style.RESET_ALL}")
    if red.numerator != 0:
        print(f"{_label('inverse')} {format_frac(red.inverse())}")
    return 0


def cmd_cf(args: argparse.Namespace) -> int:
    f = _parse_frac(args.value)
    terms = list(cf_terms(f))
    print(f"{_label(str(f))} {format_terms(terms)}")
    if args.steps:
        for i, (term, rem) in enumerate(cf_steps(f)):
            print(f"  {Fore.YELLOW}{i:>3}{Style.RESET_ALL}  {abbr(term)}  + {rem}")
    return 0


def cmd_conv(args: argparse.Namespace) -> int:
    f = _parse_frac(args.value)
    terms = list(cf_terms(f))
    stream = bounded_convergents(terms) if args.bounded else big_convergents(terms)
    print(f"{_label(str(f))} {format_terms(terms)}")
    for i, (h, k) in enumerate(stream):
        print(format_convergent(i, h, k))
    return 0


def cmd_sqrt(args: argparse.Namespace) -> int:
    n = _parse_int(args.n)
    exp = sqrt_cf(n)
    if exp is None:
        print(f"{_label(f'sqrt({n})')} perfect square, no periodic part")
        return 0
    print(f"{_label(f'sqrt({n})')} {format_terms([exp.root], period=exp.period)}"
          f"  {Style.DIM}(period {exp.period_length}){Style.RESET_ALL}")
    stream = (bounded_convergents(exp.terms, True) if args.bounded
              else big_convergents(exp.terms, True))
    shown = 0
    for i, (h, k) in enumerate(islice(stream, _count(args))):
        print(format_convergent(i, h, k))
        shown += 1
    if args.bounded and shown < _count(args):
        print(f"{Style.DIM}(int64 range exhausted after {shown} convergents){Style.RESET_ALL}")
    return 0


def cmd_pell(args: argparse.Namespace) -> int:
    n = _parse_int(args.n)
    x, y = pell_fundamental(n)
    print(f"{_label(f'x² - {n}·y² = 1')} x = {abbr(x)}, y = {abbr(y)}")
    return 0


def cmd_partition(args: argparse.Namespace) -> int:
    n, m = _parse_int(args.n), _parse_int(args.m)
    count = bounded_partition(n, m) if args.bounded else big_partition(n, m)
    print(f"{_label(f'p({n}, {m})')} {abbr(count)}")
    return 0


def cmd_farey(args: argparse.Namespace) -> int:
    n = _parse_int(args.n)
    print(f"{_label(f'F{n}')} " + ", ".join(str(f) for f in farey(n)))
    return 0


def cmd_profiles(_args: argparse.Namespace) -> int:
    for name, desc in list_profiles_with_descriptions():
        print(f"  {Fore.GREEN}{name:<16}{Style.RESET_ALL} {desc}")
    return 0


# ---- argparse ----

def _build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent("""\
    values:
      X accepts p/q (kept as typed), a decimal such as 3.245, or an integer.

    examples:
      numkit cf 415/93
      numkit sqrt 2 --count 5
      numkit partition 10 3
    """)

    p = argparse.ArgumentParser(
        prog="numkit",
        description="Exact rational approximation and partition counting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--version", action="version", version=f"numkit {_ver}")
    p.add_argument("--profile", default=None, help="Workspace profile to load (default: built-in settings)")
    p.add_argument("--debug", action="store_true", help="Show internal trace lines and full tracebacks")

    sub = p.add_subparsers(dest="command", required=True, metavar="command")

    s = sub.add_parser("frac", help="reduce a fraction, show mixed form and inverse")
    s.add_argument("value", metavar="X")
    s.set_defaults(func=cmd_frac)

    s = sub.add_parser("cf", help="continued-fraction terms of a rational")
    s.add_argument("value", metavar="X")
    s.add_argument("--steps", action="store_true", help="also list term and remainder per step")
    s.set_defaults(func=cmd_cf)

    s = sub.add_parser("conv", help="convergents of a rational")
    s.add_argument("value", metavar="X")
    s.add_argument("--bounded", action="store_true", help="use int64 arithmetic (stops on overflow)")
    s.set_defaults(func=cmd_conv)

    s = sub.add_parser("sqrt", help="periodic continued fraction and convergents of sqrt(N)")
    s.add_argument("n", metavar="N")
    s.add_argument("--count", type=int, default=None, help="number of convergents (profile default)")
    s.add_argument("--bounded", action="store_true", help="use int64 arithmetic (stops on overflow)")
    s.set_defaults(func=cmd_sqrt)

    s = sub.add_parser("pell", help="fundamental solution of x² - N·y² = 1")
    s.add_argument("n", metavar="N")
    s.set_defaults(func=cmd_pell)

    s = sub.add_parser("partition", help="partitions of N into exactly M parts")
    s.add_argument("n", metavar="N")
    s.add_argument("m", metavar="M")
    s.add_argument("--bounded", action="store_true", help="use int64 arithmetic (errors on overflow)")
    s.set_defaults(func=cmd_partition)

    s = sub.add_parser("farey", help="Farey sequence of order N")
    s.add_argument("n", metavar="N")
    s.set_defaults(func=cmd_farey)

    s = sub.add_parser("profiles", help="list workspace profiles")
    s.set_defaults(func=cmd_profiles)

    return p


def main(argv: list[str] | None = None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    args_list = sys.argv[1:] if argv is None else argv
    try:
        return _main_impl(args_list)
    except NumkitError as e:
        if "--debug" in args_list:
            raise
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if "--debug" in args_list:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _main_impl(argv: list[str]) -> int:
    colorama_init()

    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.profile) if args.profile else default_settings()
    APPLY(settings)
    if args.debug:
        _rt_current().debug = True

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
