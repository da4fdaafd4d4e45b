"""Git-backed alignment engine.

Writes both inputs to a temporary directory and runs
``git diff --no-index -U0`` on them; the zero-context hunk headers are the
change script.

Under -B, blank-line changes are flagged as ignored after parsing;
--ignore-blank-lines is never passed to git.
"""

from __future__ import annotations

import subprocess
import tempfile
from pathlib import Path

from movediff.domain.diff import ChangeScript, DiffInput, DiffResult
from movediff.domain.options import DiffAlgorithm, DiffOptions

from .base import DiffEngine, DiffEngineError, flag_blank_changes


class GitDiffEngine(DiffEngine):
    """Alignment engine that delegates to the git executable."""

    name = "git"

    def __init__(self, git_executable: str = "git"):
        self.git_executable = git_executable

    def build_command(self, old_path: Path, new_path: Path, options: DiffOptions) -> list[str]:
        """Build the git diff argument list for the given options."""
        cmd = [
            self.git_executable,
            "diff",
            "--no-index",
            "--no-color",
            "--no-ext-diff",
            "--text",
            "-U0",
            f"--diff-algorithm={options.algorithm.value}",
        ]
        if options.minimal and options.algorithm == DiffAlgorithm.MYERS:
            cmd.append("--minimal")
        if options.ignore_all_space:
            cmd.append("--ignore-all-space")
        if options.ignore_space_change:
            cmd.append("--ignore-space-change")
        cmd.extend(["--", str(old_path), str(new_path)])
        return cmd

    def compute(self, old: DiffInput, new: DiffInput, options: DiffOptions) -> DiffResult:
        with tempfile.TemporaryDirectory() as tmpdir:
            old_path = Path(tmpdir) / "old"
            new_path = Path(tmpdir) / "new"
            old_path.write_bytes(old.data)
            new_path.write_bytes(new.data)

            try:
                result = subprocess.run(
                    self.build_command(old_path, new_path, options),
                    capture_output=True,
                )
            except OSError as e:
                raise DiffEngineError(f"Failed to run {self.git_executable}: {e}") from e

        # --no-index implies --exit-code: 1 means "differences found"
        if result.returncode not in (0, 1):
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise DiffEngineError(f"git diff exited with status {result.returncode}: {stderr}")

        raw = result.stdout.decode("utf-8", errors="replace")
        old_lines = old.lines
        new_lines = new.lines
        script = ChangeScript.from_unified_diff(raw)
        if options.ignore_blank_lines:
            script = flag_blank_changes(script, old_lines, new_lines)
        return DiffResult(old_lines=old_lines, new_lines=new_lines, script=script)
