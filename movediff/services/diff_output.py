"""Unified diff output service.

Receives hunk and line callbacks and writes unified diff text. Like any
presentation layer it keeps its own running old/new line counters to map
each emitted line back to an absolute position, and asks the MoveContext
whether that position is part of a moved block. Moved lines are written
with ``<`` (moved from) and ``>`` (moved to) instead of ``-`` and ``+``.
"""

from __future__ import annotations

from typing import BinaryIO

from movediff.domain.diff import Hunk
from movediff.domain.moved import BlockSide, MovedMode
from movediff.infrastructure.moved_blocks import MoveContext

NO_NEWLINE_MARKER = b"\\ No newline at end of file\n"
MOVED_PREFIXES = {"-": b"<", "+": b">"}


class UnifiedDiffWriter:
    """Writes hunks as unified diff text, marking moved lines.

    Attributes:
        has_differences: True once any hunk has been received
    """

    def __init__(
        self,
        out: BinaryIO,
        old_label: str,
        new_label: str,
        brief: bool = False,
        move_context: MoveContext | None = None,
    ):
        """Initialize the writer.

        Args:
            out: Binary stream to write to
            old_label: Name printed on the --- line
            new_label: Name printed on the +++ line
            brief: Only record whether differences exist, write nothing
            move_context: Moved-block queries; None disables markers
        """
        self.out = out
        self.old_label = old_label
        self.new_label = new_label
        self.brief = brief
        self.move_context = move_context
        self.has_differences = False
        self._first_hunk = True
        self._old_line = 0
        self._new_line = 0

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def write_hunks(self, hunks: list[Hunk]) -> None:
        """Stream every hunk and its lines through the callbacks."""
        for hunk in hunks:
            self.out_hunk(hunk)
            for line in hunk.lines:
                self.out_line(line.prefix, line.content)

    def out_hunk(self, hunk: Hunk) -> None:
        """Hunk-boundary callback: writes file headers once, then the @@ line."""
        self.has_differences = True
        if self.brief:
            return

        if self._first_hunk:
            self.out.write(f"--- {self.old_label}\n".encode())
            self.out.write(f"+++ {self.new_label}\n".encode())
            self._first_hunk = False

        self._old_line = hunk.old_start
        self._new_line = hunk.new_start
        self.out.write(f"{hunk.header}\n".encode())

    def out_line(self, prefix: str, content: bytes) -> None:
        """Line callback: advances the counters and writes one diff line."""
        if self.brief:
            return

        marker = prefix.encode()
        if prefix == "-":
            if self._is_moved(self._old_line, BlockSide.DELETED):
                marker = MOVED_PREFIXES[prefix]
            self._old_line += 1
        elif prefix == "+":
            if self._is_moved(self._new_line, BlockSide.INSERTED):
                marker = MOVED_PREFIXES[prefix]
            self._new_line += 1
        else:
            self._old_line += 1
            self._new_line += 1

        self.out.write(marker + content)
        if not content.endswith(b"\n"):
            self.out.write(b"\n" + NO_NEWLINE_MARKER)

    # --------------------------------------------------------
    # Private Methods
    # --------------------------------------------------------

    def _is_moved(self, line: int, side: BlockSide) -> bool:
        if self.move_context is None or self.move_context.mode == MovedMode.NO:
            return False
        return self.move_context.is_moved(line, side)
