"""Infrastructure components for movediff.

This layer handles external system interactions and the core detection
pipeline:
- diff_engine/ - Line-alignment engines (git subprocess, difflib)
- file_loader - Reading inputs from disk
- config - YAML config file
- whitespace - Whitespace normalization of line records
- moved_blocks - Moved-block detection and point queries
"""

from .config import ConfigError, MovediffConfig
from .diff_engine import (
    DiffEngine,
    DiffEngineError,
    DiffEngineKind,
    GitDiffEngine,
    SequenceMatcherEngine,
    create_diff_engine,
)
from .file_loader import InputUnreadableError, read_input
from .moved_blocks import (
    MIN_BLOCK_SIZE,
    BlockCollectionError,
    MoveContext,
    MoveContextError,
    MoveReport,
    build_move_report,
    collect_blocks_from_diff,
    detect_moved_blocks,
)

__all__ = [
    # Config
    "ConfigError",
    "MovediffConfig",
    # Diff engines
    "create_diff_engine",
    "DiffEngine",
    "DiffEngineError",
    "DiffEngineKind",
    "GitDiffEngine",
    "SequenceMatcherEngine",
    # Inputs
    "InputUnreadableError",
    "read_input",
    # Move detection
    "MIN_BLOCK_SIZE",
    "BlockCollectionError",
    "MoveContext",
    "MoveContextError",
    "MoveReport",
    "build_move_report",
    "collect_blocks_from_diff",
    "detect_moved_blocks",
]
