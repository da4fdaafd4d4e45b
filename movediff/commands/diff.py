"""Diff command - compare two files and mark moved blocks.

Thin command that wires the input loader, the alignment engine, moved-block
detection and the unified diff writer together, and maps failures to exit
codes. The alignment is computed once; its result feeds both move
detection and hunk layout.

Exit codes:
    0 - Success (or identical files in brief mode)
    1 - Files differ in brief mode, or any error
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import BinaryIO

from movediff.domain.moved import MovedMode, MovedWsMode
from movediff.domain.options import DiffOptions
from movediff.infrastructure.diff_engine import DiffEngineError, DiffEngineKind, create_diff_engine
from movediff.infrastructure.file_loader import InputUnreadableError, read_input
from movediff.infrastructure.moved_blocks import (
    BlockCollectionError,
    build_move_report,
    detect_moved_blocks,
)
from movediff.services.diff_output import UnifiedDiffWriter
from movediff.services.hunk_builder import build_hunks

PROG = "movediff"


def cmd_diff(
    file1: str,
    file2: str,
    options: DiffOptions,
    moved_mode: MovedMode = MovedMode.PLAIN,
    moved_ws: MovedWsMode = MovedWsMode.NONE,
    engine_kind: DiffEngineKind = DiffEngineKind.AUTO,
    brief: bool = False,
    moved_report: str | None = None,
    out: BinaryIO | None = None,
) -> int:
    """Execute the diff command.

    Args:
        file1: Path to the old file
        file2: Path to the new file
        options: Alignment and hunk layout options
        moved_mode: Moved-block detection mode
        moved_ws: Whitespace normalization for move fingerprints
        engine_kind: Which alignment engine to use
        brief: Only report whether the files differ
        moved_report: Optional path for a JSON report of detected moves
        out: Binary stream for diff output (default: stdout)

    Returns:
        Exit code (0 for success, 1 for difference in brief mode or error)
    """
    if out is None:
        out = sys.stdout.buffer

    # --------------------------------------------------------
    # 1. Load inputs
    # --------------------------------------------------------
    try:
        old = read_input(file1)
        new = read_input(file2)
    except InputUnreadableError as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return 1

    # --------------------------------------------------------
    # 2. Align
    # --------------------------------------------------------
    engine = create_diff_engine(engine_kind)
    try:
        result = engine.compute(old, new, options)
    except DiffEngineError as e:
        print(f"{PROG}: diff computation failed: {e}", file=sys.stderr)
        return 1

    # --------------------------------------------------------
    # 3. Detect moves, then emit
    # --------------------------------------------------------
    try:
        move_context = detect_moved_blocks(result, moved_mode, moved_ws)
    except BlockCollectionError as e:
        print(f"{PROG}: failed to collect blocks for move detection: {e}", file=sys.stderr)
        return 1

    with move_context:
        hunks = build_hunks(result, options.context_lines, options.show_function)
        writer = UnifiedDiffWriter(
            out,
            old_label=file1,
            new_label=file2,
            brief=brief,
            move_context=move_context,
        )
        writer.write_hunks(hunks)

        if moved_report:
            report = build_move_report(move_context)
            try:
                Path(moved_report).write_text(json.dumps(report.to_dict(), indent=2) + "\n")
            except OSError as e:
                print(f"{PROG}: cannot write move report '{moved_report}': {e.strerror or e}", file=sys.stderr)
                return 1

    if brief:
        if writer.has_differences:
            out.write(f"Files {file1} and {file2} differ\n".encode())
            return 1
        return 0

    return 0
