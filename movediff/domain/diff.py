"""Domain models for line diffs.

Parse-once pattern: the alignment engine's raw output is parsed into a
ChangeScript at the boundary. Provides the per-side inputs, the change
script consumed by move detection, and the context hunks emitted for
presentation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def split_lines(data: bytes) -> list[bytes]:
    """Split raw input into line records, keeping each line's terminator.

    Only ``\\n`` terminates a line. A final line without a terminator is
    kept as its own record.
    """
    if not data:
        return []
    lines = data.split(b"\n")
    records = [line + b"\n" for line in lines[:-1]]
    if lines[-1]:
        records.append(lines[-1])
    return records


# ============================================================
# Domain Models
# ============================================================


class DiffLineType(Enum):
    """Type of line in an emitted hunk."""

    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]


_PREFIXES = {
    DiffLineType.ADDED: "+",
    DiffLineType.REMOVED: "-",
    DiffLineType.CONTEXT: " ",
}


@dataclass(frozen=True)
class DiffInput:
    """One side of a comparison: a display label and its raw bytes."""

    label: str
    data: bytes

    @property
    def lines(self) -> list[bytes]:
        return split_lines(self.data)


@dataclass(frozen=True)
class ChangeHunk:
    """One region of difference in the change script.

    Indices are 0-based positions into the per-side line records. Either
    count may be zero. ``ignore`` marks changes that only touch lines the
    active whitespace/blank-line policy says to disregard.
    """

    old_index: int
    old_count: int
    new_index: int
    new_count: int
    ignore: bool = False

    @property
    def old_end(self) -> int:
        """Exclusive end index on the old side."""
        return self.old_index + self.old_count

    @property
    def new_end(self) -> int:
        """Exclusive end index on the new side."""
        return self.new_index + self.new_count


@dataclass
class ChangeScript:
    """Ordered list of changes between two inputs, in file order."""

    changes: list[ChangeHunk] = field(default_factory=list)

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_unified_diff(cls, diff_content: str) -> ChangeScript:
        """Parse zero-context unified diff output into a change script.

        Only ``@@`` header lines are read. For an empty range the header's
        start names the line before the insertion point, so the 0-based
        index equals the start; otherwise it is start - 1.

        Args:
            diff_content: Output of a ``-U0`` unified diff

        Returns:
            ChangeScript with one ChangeHunk per hunk header
        """
        changes: list[ChangeHunk] = []
        for line in diff_content.split("\n"):
            if not line.startswith("@@"):
                continue
            match = HUNK_HEADER_RE.match(line)
            if not match:
                continue
            old_start = int(match.group(1))
            old_count = int(match.group(2)) if match.group(2) else 1
            new_start = int(match.group(3))
            new_count = int(match.group(4)) if match.group(4) else 1
            changes.append(
                ChangeHunk(
                    old_index=old_start if old_count == 0 else old_start - 1,
                    old_count=old_count,
                    new_index=new_start if new_count == 0 else new_start - 1,
                    new_count=new_count,
                )
            )
        return cls(changes=changes)

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        """Check if the script has no changes that count as differences."""
        return not any(not change.ignore for change in self.changes)

    def __iter__(self):
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)


@dataclass
class DiffResult:
    """Output of one alignment call: per-side line records plus the script."""

    old_lines: list[bytes]
    new_lines: list[bytes]
    script: ChangeScript


@dataclass(frozen=True)
class DiffLine:
    """A single emitted line with its absolute position(s).

    Attributes:
        content: Raw line bytes including the terminator, if any
        line_type: Whether this is an added, removed, or context line
        old_line_number: 1-based line in the old input (None for added lines)
        new_line_number: 1-based line in the new input (None for removed lines)
    """

    content: bytes
    line_type: DiffLineType
    old_line_number: int | None = None
    new_line_number: int | None = None

    @property
    def prefix(self) -> str:
        return self.line_type.prefix


@dataclass
class Hunk:
    """A hunk of emitted output: changed lines plus surrounding context.

    Starts are 1-based. For an empty range the start names the line before
    the range, so an insertion at the top of a file has start 0.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: list[DiffLine] = field(default_factory=list)
    section: str = ""

    @property
    def header(self) -> str:
        header = f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"
        if self.section:
            header += f" {self.section}"
        return header
