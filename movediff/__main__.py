#!/usr/bin/env python3
"""CLI entry point for movediff.

Usage:
    movediff [OPTIONS] FILE1 FILE2
    python -m movediff [OPTIONS] FILE1 FILE2
"""

from __future__ import annotations

import argparse
import re
import sys

from movediff.commands.diff import PROG, cmd_diff
from movediff.domain.moved import MovedMode, MovedWsMode
from movediff.domain.options import DEFAULT_CONTEXT_LINES, DiffAlgorithm
from movediff.infrastructure.config import ConfigError, MovediffConfig
from movediff.infrastructure.diff_engine import DiffEngineKind

CONTEXT_OPTIONS = ("-u", "-c", "--unified", "--context")
# Short flags that take no value and may be bundled in front of -u or -c
_FLAG_CLUSTER_RE = re.compile(r"^-([qwbBph]+)([uc])$")
MOVED_WS_CHOICES = [m.value for m in MovedWsMode if m != MovedWsMode.NONE]


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: {message}\n")


def _is_integer(token: str) -> bool:
    try:
        int(token)
    except ValueError:
        return False
    return True


def normalize_argv(argv: list[str]) -> list[str]:
    """Rewrite options whose value is optional into explicit option=value form.

    ``-u``/``-c`` (and their long forms) consume a following token only if it
    is an integer; otherwise the default context length applies. This also
    holds when they end a bundle of flags, as in ``-qu``. A bare ``--moved``
    means ``--moved=plain``.
    """
    normalized: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            normalized.extend(argv[i:])
            break
        cluster = _FLAG_CLUSTER_RE.match(arg)
        if cluster:
            normalized.extend(f"-{flag}" for flag in cluster.group(1))
            arg = f"-{cluster.group(2)}"
        if arg in CONTEXT_OPTIONS:
            value = str(DEFAULT_CONTEXT_LINES)
            if i + 1 < len(argv) and _is_integer(argv[i + 1]):
                value = argv[i + 1]
                i += 1
            normalized.append(f"{arg}={value}" if arg.startswith("--") else f"{arg}{value}")
        elif arg == "--moved":
            normalized.append(f"--moved={MovedMode.PLAIN.value}")
        else:
            normalized.append(arg)
        i += 1
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        usage=f"{PROG} [OPTIONS] FILE1 FILE2",
        description="Compare two files line by line and mark blocks that were moved.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Moved lines are shown with '<' (moved from) and '>' (moved to) instead of
'-' and '+'.

Examples:
  movediff old.py new.py
  movediff -u 5 --histogram old.py new.py
  movediff --moved=zebra --moved-ws=ignore-change old.py new.py
  movediff -q old.py new.py
        """,
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Files to compare")
    parser.add_argument(
        "-u",
        "--unified",
        dest="context_lines",
        type=int,
        metavar="N",
        help=f"Output unified diff format (default: {DEFAULT_CONTEXT_LINES} context lines)",
    )
    parser.add_argument(
        "-c",
        "--context",
        dest="context_lines",
        type=int,
        metavar="N",
        help="Same as -u; output is always unified",
    )
    parser.add_argument("-q", "--brief", action="store_true", help="Output only whether files differ")
    parser.add_argument("-w", "--ignore-all-space", action="store_true", help="Ignore all whitespace")
    parser.add_argument(
        "-b", "--ignore-space-change", action="store_true", help="Ignore whitespace changes"
    )
    parser.add_argument("-B", "--ignore-blank-lines", action="store_true", help="Ignore blank lines")
    parser.add_argument("--minimal", action="store_true", help="Produce minimal diff")
    parser.add_argument("--patience", action="store_true", help="Use patience diff algorithm")
    parser.add_argument("--histogram", action="store_true", help="Use histogram diff algorithm")
    parser.add_argument(
        "-p",
        "--show-function",
        action="store_true",
        help="Show the nearest preceding function line in each hunk header",
    )
    parser.add_argument(
        "--moved",
        choices=[m.value for m in MovedMode],
        metavar="MODE",
        help="Detect moved blocks (no, plain, blocks, zebra, dimmed-zebra; default: plain)",
    )
    parser.add_argument(
        "--moved-ws",
        choices=MOVED_WS_CHOICES,
        metavar="MODE",
        help="Whitespace handling for moved blocks (ignore-all, ignore-change, ignore-at-eol)",
    )
    parser.add_argument(
        "--moved-report",
        metavar="FILE",
        help="Write a JSON report of detected moves to FILE",
    )
    parser.add_argument(
        "--diff-engine",
        choices=[k.value for k in DiffEngineKind],
        help="Alignment engine (default: auto - git if available, else difflib)",
    )
    parser.add_argument("--config", metavar="FILE", help="Read option defaults from a YAML file")
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_intermixed_args(normalize_argv(argv))

    if args.context_lines is not None and args.context_lines < 0:
        print(f"{PROG}: invalid number of context lines", file=sys.stderr)
        return 1

    if args.patience and args.histogram:
        print(f"{PROG}: only one diff algorithm can be specified", file=sys.stderr)
        return 1

    if len(args.files) != 2:
        print(f"{PROG}: exactly two file arguments required", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = MovediffConfig.from_file(args.config) if args.config else MovediffConfig()
    except ConfigError as e:
        print(f"{PROG}: invalid config: {e}", file=sys.stderr)
        return 1

    # Command-line flags override config values
    options = config.options
    if args.context_lines is not None:
        options.context_lines = args.context_lines
    options.ignore_all_space = options.ignore_all_space or args.ignore_all_space
    options.ignore_space_change = options.ignore_space_change or args.ignore_space_change
    options.ignore_blank_lines = options.ignore_blank_lines or args.ignore_blank_lines
    options.minimal = options.minimal or args.minimal
    options.show_function = options.show_function or args.show_function
    if args.patience:
        options.algorithm = DiffAlgorithm.PATIENCE
    elif args.histogram:
        options.algorithm = DiffAlgorithm.HISTOGRAM

    moved_mode = MovedMode.from_string(args.moved) if args.moved else config.moved_mode
    moved_ws = MovedWsMode.from_string(args.moved_ws) if args.moved_ws else config.moved_ws
    engine_kind = (
        DiffEngineKind.from_string(args.diff_engine) if args.diff_engine else config.diff_engine
    )

    file1, file2 = args.files
    return cmd_diff(
        file1,
        file2,
        options,
        moved_mode=moved_mode,
        moved_ws=moved_ws,
        engine_kind=engine_kind,
        brief=args.brief,
        moved_report=args.moved_report,
    )


if __name__ == "__main__":
    sys.exit(main())
