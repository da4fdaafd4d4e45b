"""Input loading.

Reads each input file fully into memory as bytes; nothing is decoded.
"""

from __future__ import annotations

from pathlib import Path

from movediff.domain.diff import DiffInput


class InputUnreadableError(Exception):
    """Raised when an input file cannot be opened or read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read file '{path}': {reason}")
        self.path = path
        self.reason = reason


def read_input(path: str) -> DiffInput:
    """Read a file into a DiffInput labelled with the path as given.

    Raises:
        InputUnreadableError: If the file cannot be read
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise InputUnreadableError(path, e.strerror or str(e)) from e
    return DiffInput(label=path, data=data)
