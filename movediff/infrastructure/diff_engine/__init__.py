"""Line-alignment engines (git subprocess or difflib)."""

from .base import DiffEngine, DiffEngineError
from .factory import DiffEngineKind, create_diff_engine
from .git_engine import GitDiffEngine
from .sequence_engine import SequenceMatcherEngine

__all__ = [
    "create_diff_engine",
    "DiffEngine",
    "DiffEngineError",
    "DiffEngineKind",
    "GitDiffEngine",
    "SequenceMatcherEngine",
]
