"""Whitespace normalization for line records.

All helpers work on raw bytes and treat only ASCII whitespace (space, tab,
newline, vertical tab, form feed, carriage return) as whitespace, so the
result never depends on the input's encoding.
"""

from __future__ import annotations

import re

from movediff.domain.moved import MovedWsMode

_WHITESPACE_RUN = re.compile(rb"\s+")
_ALNUM = re.compile(rb"[A-Za-z0-9]")


def normalize_line(line: bytes, mode: MovedWsMode) -> bytes:
    """Normalize a line's whitespace according to mode.

    Args:
        line: Raw line bytes, including the terminator if present
        mode: Whitespace policy

    Returns:
        Normalized bytes. Byte-identical input and mode always give
        byte-identical output.
    """
    if mode == MovedWsMode.IGNORE_ALL:
        return _WHITESPACE_RUN.sub(b"", line)
    if mode == MovedWsMode.IGNORE_CHANGE:
        return _WHITESPACE_RUN.sub(b" ", line)
    if mode == MovedWsMode.IGNORE_AT_EOL:
        return line.rstrip()
    return line


def comparison_key(line: bytes, ignore_all_space: bool, ignore_space_change: bool) -> bytes:
    """Key under which two lines compare equal for the -w/-b diff options.

    -b also ignores whitespace at end of line.
    """
    if ignore_all_space:
        return normalize_line(line, MovedWsMode.IGNORE_ALL)
    if ignore_space_change:
        return normalize_line(line, MovedWsMode.IGNORE_CHANGE).rstrip(b" ")
    return line


def count_alnum(line: bytes) -> int:
    """Count ASCII letters and digits in a line."""
    return len(_ALNUM.findall(line))


def is_blank(line: bytes) -> bool:
    """Check if a line holds nothing but whitespace."""
    return not line.strip()
