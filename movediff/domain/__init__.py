"""Domain models for movediff."""

from movediff.domain.diff import (
    ChangeHunk,
    ChangeScript,
    DiffInput,
    DiffLine,
    DiffLineType,
    DiffResult,
    Hunk,
    split_lines,
)
from movediff.domain.moved import BlockSide, MovedBlock, MovedMode, MovedWsMode
from movediff.domain.options import DEFAULT_CONTEXT_LINES, DiffAlgorithm, DiffOptions

__all__ = [
    "BlockSide",
    "ChangeHunk",
    "ChangeScript",
    "DEFAULT_CONTEXT_LINES",
    "DiffAlgorithm",
    "DiffInput",
    "DiffLine",
    "DiffLineType",
    "DiffOptions",
    "DiffResult",
    "Hunk",
    "MovedBlock",
    "MovedMode",
    "MovedWsMode",
    "split_lines",
]
