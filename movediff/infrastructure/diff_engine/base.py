"""Abstract interface for line-alignment engines.

An engine turns two inputs into a DiffResult: the per-side line records and
the change script. Everything downstream (move detection, hunk layout,
output) works from that one result.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace

from movediff.domain.diff import ChangeScript, DiffInput, DiffResult
from movediff.domain.options import DiffOptions
from movediff.infrastructure.whitespace import is_blank


class DiffEngineError(Exception):
    """Raised when the alignment computation fails."""

    pass


def flag_blank_changes(
    script: ChangeScript, old_lines: list[bytes], new_lines: list[bytes]
) -> ChangeScript:
    """Mark changes whose deleted and inserted lines are all blank as ignored."""
    return ChangeScript(
        changes=[
            replace(change, ignore=True)
            if all(
                is_blank(line)
                for line in old_lines[change.old_index : change.old_end]
                + new_lines[change.new_index : change.new_end]
            )
            else change
            for change in script
        ]
    )


class DiffEngine(ABC):
    """Abstract line-alignment engine."""

    name: str = ""

    @abstractmethod
    def compute(self, old: DiffInput, new: DiffInput, options: DiffOptions) -> DiffResult:
        """Align old against new.

        Args:
            old: Old-side input
            new: New-side input
            options: Whitespace, minimality and algorithm options

        Returns:
            DiffResult whose script lists changes in file order

        Raises:
            DiffEngineError: If the alignment cannot be computed
        """
        pass
