"""Services for movediff.

Services turn a diff result into presentable output: hunk layout and the
unified diff writer that consults the moved-block queries.
"""

from movediff.services.diff_output import UnifiedDiffWriter
from movediff.services.hunk_builder import build_hunks, find_function_line

__all__ = [
    "UnifiedDiffWriter",
    "build_hunks",
    "find_function_line",
]
