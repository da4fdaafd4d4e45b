"""Pure-Python alignment engine built on difflib.SequenceMatcher.

Lines are compared through whitespace-normalized keys so -w/-b behave like
their git counterparts. Under -B, changes whose lines are all blank are
flagged as ignored rather than dropped.
"""

from __future__ import annotations

import difflib
import sys

from movediff.domain.diff import ChangeHunk, ChangeScript, DiffInput, DiffResult
from movediff.domain.options import DiffAlgorithm, DiffOptions
from movediff.infrastructure.whitespace import comparison_key

from .base import DiffEngine, flag_blank_changes


class SequenceMatcherEngine(DiffEngine):
    """Alignment engine using the standard library's SequenceMatcher.

    Only the default algorithm is available; patience and histogram
    requests fall back to it with a warning. --minimal has no effect.
    """

    name = "difflib"

    def compute(self, old: DiffInput, new: DiffInput, options: DiffOptions) -> DiffResult:
        if options.algorithm != DiffAlgorithm.MYERS:
            print(
                f"Warning: {options.algorithm.value} algorithm is not supported by the "
                f"difflib engine, using the default algorithm",
                file=sys.stderr,
            )

        old_lines = old.lines
        new_lines = new.lines
        old_keys = [
            comparison_key(line, options.ignore_all_space, options.ignore_space_change)
            for line in old_lines
        ]
        new_keys = [
            comparison_key(line, options.ignore_all_space, options.ignore_space_change)
            for line in new_lines
        ]

        matcher = difflib.SequenceMatcher(None, old_keys, new_keys, autojunk=False)
        script = ChangeScript(
            changes=[
                ChangeHunk(old_index=i1, old_count=i2 - i1, new_index=j1, new_count=j2 - j1)
                for tag, i1, i2, j1, j2 in matcher.get_opcodes()
                if tag != "equal"
            ]
        )
        if options.ignore_blank_lines:
            script = flag_blank_changes(script, old_lines, new_lines)

        return DiffResult(old_lines=old_lines, new_lines=new_lines, script=script)
