"""Factory for creating diff engines.

This module provides the engine selector enum and the factory that maps it
to a concrete DiffEngine.
"""

from __future__ import annotations

import shutil
from enum import Enum

from .base import DiffEngine
from .git_engine import GitDiffEngine
from .sequence_engine import SequenceMatcherEngine


class DiffEngineKind(Enum):
    """Which alignment engine to use.

    Attributes:
        AUTO: git when available on PATH, otherwise difflib
        GIT: Always run git diff --no-index
        DIFFLIB: Always use difflib.SequenceMatcher
    """

    AUTO = "auto"
    GIT = "git"
    DIFFLIB = "difflib"

    @classmethod
    def from_string(cls, value: str) -> DiffEngineKind:
        """Parse DiffEngineKind from string value.

        Raises:
            ValueError: If value is not a valid engine kind
        """
        value_lower = value.lower()
        for member in cls:
            if member.value == value_lower:
                return member
        valid_values = [m.value for m in cls]
        raise ValueError(
            f"Invalid diff engine: {value}. Must be one of: {', '.join(valid_values)}"
        )


def create_diff_engine(kind: DiffEngineKind = DiffEngineKind.AUTO) -> DiffEngine:
    """Create a diff engine for the requested kind.

    Args:
        kind: AUTO, GIT or DIFFLIB

    Returns:
        DiffEngine implementation

    Examples:
        >>> create_diff_engine(DiffEngineKind.DIFFLIB).name
        'difflib'
    """
    if kind == DiffEngineKind.GIT:
        return GitDiffEngine()
    elif kind == DiffEngineKind.DIFFLIB:
        return SequenceMatcherEngine()
    elif kind == DiffEngineKind.AUTO:
        git = shutil.which("git")
        if git:
            return GitDiffEngine(git)
        return SequenceMatcherEngine()
    else:
        raise ValueError(f"Unknown diff engine: {kind}")
