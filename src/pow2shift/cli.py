# src/pow2shift/cli.py

"""
pow2shift - rewrite integer literals as bit-shift expressions

Description:
    Reads a text file, finds standalone integer literals of three or more
    digits and replaces each one greater than the threshold that can be
    written as (2^n - 1) << m, (2^n + 1) << m or 1 << k with that
    expression, e.g. 1048575 -> (1<<20 - 1).

usage: pow2shift -i INPUT [-o OUTPUT] [-t THRESHOLD]
"""

from __future__ import annotations

import argparse
import sys
import textwrap

from colorama import Fore, Style, just_fix_windows_console

from pow2shift import __version__ as _ver
from pow2shift.config import load_settings
from pow2shift.fmt import format_replacement
from pow2shift.output_manager import OutputManager, read_text
from pow2shift.runtime import APPLY, CFG, DEFAULT_THRESHOLD
from pow2shift.runtime import reset as _rt_reset
from pow2shift.substitute import SubstitutionReport, substitute_with_report
from pow2shift.utility import (
    UserInputError,
    flatten_dotted,
    typename,
    validate_output_setting,
)
from pow2shift.workspace import seed_workspace


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _print_warning(msg: str) -> None:
    print(f"{Fore.YELLOW}Warning:{Style.RESET_ALL} {msg}", file=sys.stderr)


def _debug(msg: str) -> None:
    print(f"[debug] {msg}", file=sys.stderr)


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent(f"""\
    examples:
      pow2shift -i limits.h
          MAX = 1048575;   ->   MAX = (1<<20 - 1);

      pow2shift -i limits.h -o limits_shift.h -t 1000
          only literals greater than 1000 are considered

    settings are taken from the CLI first, then from the profile
    (BEHAVIOUR.THRESHOLD, OUTPUT.OUTPUT_FILE), then built-in defaults
    (threshold {DEFAULT_THRESHOLD}, standard output).
    """)

    p = argparse.ArgumentParser(
        prog="pow2shift",
        description="Rewrite integer literals as (1<<n ± 1) << m bit-shift expressions",
        usage=(
            "pow2shift -i INPUT [-o OUTPUT] [-t THRESHOLD] [--profile NAME] [--quiet] [--debug]\n"
            "       pow2shift --init\n"
            "       pow2shift -h | --help"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("-i", "--input", default=None, help="Input file path (required)")
    p.add_argument("-o", "--output", default=None,
                   help="Output file path (optional, prints to stdout if not provided)")
    p.add_argument("-t", "--threshold", type=int, default=None,
                   help=f"Process numbers strictly greater than this threshold (default {DEFAULT_THRESHOLD})")
    p.add_argument("--profile", default=None, help="Settings profile to load (default 'default')")
    p.add_argument("--quiet", action="store_true", help="Suppress the success message")
    p.add_argument("--debug", action="store_true", help="Trace every rewrite and show applied settings")
    p.add_argument("--init", action="store_true", help="Copy the packaged profiles into the workspace and exit")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def _resolve_threshold(cli_value: int | None) -> int:
    """CLI -t wins, then BEHAVIOUR.THRESHOLD, then the built-in default."""
    if cli_value is not None:
        value, where = cli_value, "-t"
    else:
        value, where = CFG("BEHAVIOUR.THRESHOLD", DEFAULT_THRESHOLD), "BEHAVIOUR.THRESHOLD"
    if isinstance(value, bool) or not isinstance(value, int):
        raise UserInputError(f"{where} must be an integer, got {typename(value)}.")
    if value < 0:
        raise UserInputError(f"{where} must be >= 0, got {value}.")
    return value


def _resolve_output(cli_value: str | None) -> str | None:
    """CLI -o wins over OUTPUT.OUTPUT_FILE; empty means stdout."""
    target = cli_value if cli_value is not None else CFG("OUTPUT.OUTPUT_FILE", None)
    if target is not None and not isinstance(target, str):
        raise UserInputError(f"OUTPUT.OUTPUT_FILE must be a string, got {typename(target)}.")
    try:
        return validate_output_setting(target)
    except ValueError as e:
        raise UserInputError(f"invalid output path: {e}") from None


def _debug_settings(selected) -> None:
    _debug(f"active profile: {selected.name}")
    if selected._source:
        _debug(f"profile file: {selected._source}")
    flat = flatten_dotted(selected.as_dict())
    if flat:
        _debug("profile keys (runtime value/type):")
        for k in sorted(flat, key=str.lower):
            v = CFG(k, None)
            print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)


def _debug_report(report: SubstitutionReport) -> None:
    head = int(CFG("FORMATTING.NUM_ABBR_HEAD", 10))
    tail = int(CFG("FORMATTING.NUM_ABBR_TAIL", 10))
    thr = int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 35))
    ell = str(CFG("FORMATTING.ELLIPSIS", "…"))
    for rep in report.replacements:
        print(format_replacement(rep, head=head, tail=tail, threshold=thr, ellipsis=ell), file=sys.stderr)
    _debug(
        f"{len(report.replacements)} rewritten, "
        f"{report.candidates - len(report.replacements)} above threshold kept, "
        f"{len(report.unparsable)} unparsable"
    )


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (sys.argv if argv is None else argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- main ----
def _main_impl(argv=None) -> int:

    just_fix_windows_console()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_reset()

    if args.init:
        ws, copied = seed_workspace(overwrite=False)
        print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}")
        return 0

    if not args.input:
        _print_user_error("Input file path (-i) is required.")
        parser.print_usage(sys.stderr)
        return 2

    selected = load_settings(args.profile)
    APPLY(selected)
    if args.debug:
        rt.debug = True

    threshold = _resolve_threshold(args.threshold)
    output = _resolve_output(args.output)

    if rt.debug:
        _debug_settings(selected)
        _debug(f"threshold: {threshold}")
        _debug(f"output: {output or 'stdout'}")

    try:
        content = read_text(args.input)
    except OSError as e:
        _print_user_error(f"Failed to read file {args.input}: {e.strerror or e}")
        return 1

    report = substitute_with_report(content, threshold)

    for bad in report.unparsable:
        digits = len(bad.span)
        _print_warning(
            f"could not parse {digits}-digit number at offset {bad.span.start} "
            f"(starts {bad.span.text[:10]}…); written unchanged."
        )

    if rt.debug:
        _debug_report(report)

    om = OutputManager(output_file=output)
    om.write(report.text)
    try:
        om.close()
    except OSError as e:
        _print_user_error(f"Failed to write output {om.path or 'stdout'}: {e.strerror or e}")
        return 1

    if om.to_file and not args.quiet:
        shown = args.output or output
        print(
            f"{Fore.GREEN}Successfully processed {args.input} and wrote output to {shown}{Style.RESET_ALL}",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
