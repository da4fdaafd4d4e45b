"""Hunk layout service.

Turns a change script into the context hunks that are printed, following
xdiff's grouping. Changes separated by at most twice the context length
share a hunk. An ignored change joins a hunk when it lies within the
context length of a change already in it, and is otherwise dropped; a
hunk never consists of ignored changes alone.
"""

from __future__ import annotations

import re

from movediff.domain.diff import ChangeHunk, DiffLine, DiffLineType, DiffResult, Hunk

_FUNCTION_LINE_RE = re.compile(rb"^[A-Za-z_$]")
MAX_SECTION_LENGTH = 80


def build_hunks(result: DiffResult, context_lines: int, show_function: bool = False) -> list[Hunk]:
    """Group a diff result's changes into context hunks.

    Args:
        result: Output of the alignment engine
        context_lines: Unchanged lines to show around changes
        show_function: Label each hunk with the nearest preceding function line

    Returns:
        Hunks in file order; empty when there are no non-ignored changes
    """
    if result.script.is_empty:
        return []

    changes = result.script.changes
    return [
        _build_hunk(result, changes, first, last, context_lines, show_function)
        for first, last in group_changes(changes, context_lines)
    ]


def group_changes(changes: list[ChangeHunk], context_lines: int) -> list[tuple[int, int]]:
    """Split a change script into (first, last) index ranges, one per hunk.

    Every change between first and last is part of the hunk, ignored or
    not. Ignored changes outside all ranges are not shown.
    """
    max_common = 2 * context_lines
    groups: list[tuple[int, int]] = []
    start = 0
    while start < len(changes):
        # Leading ignored changes survive only if chained to what follows
        first = start
        index = start
        while index < len(changes) and changes[index].ignore:
            is_last = index + 1 == len(changes)
            if is_last or _distance(changes[index], changes[index + 1]) >= context_lines:
                first = index + 1
            index += 1
        if first >= len(changes):
            break

        last = first
        ignored = 0
        for index in range(first + 1, len(changes)):
            change = changes[index]
            distance = _distance(changes[index - 1], change)
            if distance > max_common:
                break
            if distance < context_lines and (not change.ignore or last == index - 1):
                last = index
                ignored = 0
            elif distance < context_lines:
                ignored += change.new_count
            elif last != index - 1 and change.old_index + ignored - changes[last].old_end > max_common:
                break
            elif not change.ignore:
                last = index
                ignored = 0
            else:
                ignored += change.new_count

        groups.append((first, last))
        start = last + 1
    return groups


def find_function_line(old_lines: list[bytes], before_index: int) -> str:
    """Find the nearest line above before_index that looks like a function header.

    A candidate line starts with an ASCII letter, underscore or dollar sign.

    Returns:
        The line without trailing whitespace, truncated, or "" if none
    """
    for index in range(min(before_index, len(old_lines)) - 1, -1, -1):
        line = old_lines[index]
        if _FUNCTION_LINE_RE.match(line):
            return line.rstrip()[:MAX_SECTION_LENGTH].decode("utf-8", errors="replace")
    return ""


def _build_hunk(
    result: DiffResult,
    changes: list[ChangeHunk],
    first: int,
    last: int,
    context_lines: int,
    show_function: bool,
) -> Hunk:
    first_change = changes[first]
    last_change = changes[last]

    # Common runs have the same length on both sides, so the old side alone
    # bounds the context.
    prev_end = changes[first - 1].old_end if first > 0 else 0
    next_start = changes[last + 1].old_index if last + 1 < len(changes) else len(result.old_lines)
    leading = min(context_lines, first_change.old_index - prev_end)
    trailing = min(context_lines, next_start - last_change.old_end)

    old_pos = old_start = first_change.old_index - leading
    new_pos = new_start = first_change.new_index - leading
    lines: list[DiffLine] = []

    for change in changes[first : last + 1]:
        while old_pos < change.old_index:
            lines.append(_context_line(result, old_pos, new_pos))
            old_pos += 1
            new_pos += 1
        for index in range(change.old_index, change.old_end):
            lines.append(
                DiffLine(
                    content=result.old_lines[index],
                    line_type=DiffLineType.REMOVED,
                    old_line_number=index + 1,
                )
            )
        for index in range(change.new_index, change.new_end):
            lines.append(
                DiffLine(
                    content=result.new_lines[index],
                    line_type=DiffLineType.ADDED,
                    new_line_number=index + 1,
                )
            )
        old_pos = change.old_end
        new_pos = change.new_end

    for _ in range(trailing):
        lines.append(_context_line(result, old_pos, new_pos))
        old_pos += 1
        new_pos += 1

    old_count = old_pos - old_start
    new_count = new_pos - new_start
    return Hunk(
        old_start=_header_start(old_start, old_count),
        old_count=old_count,
        new_start=_header_start(new_start, new_count),
        new_count=new_count,
        lines=lines,
        section=find_function_line(result.old_lines, old_start) if show_function else "",
    )


def _header_start(index: int, count: int) -> int:
    # An empty range is named by the line before it
    return index + 1 if count else index


def _distance(before: ChangeHunk, after: ChangeHunk) -> int:
    """Unchanged old-side lines between two consecutive changes."""
    return after.old_index - before.old_end


def _context_line(result: DiffResult, old_index: int, new_index: int) -> DiffLine:
    # Context shows the new side's text, which can differ from the old
    # side's in whitespace under -w/-b.
    return DiffLine(
        content=result.new_lines[new_index],
        line_type=DiffLineType.CONTEXT,
        old_line_number=old_index + 1,
        new_line_number=new_index + 1,
    )
