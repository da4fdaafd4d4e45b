"""movediff - line diff with moved-block detection.

A CLI package following:
- CLI Architecture: Single entry point dispatcher with explicit parameters
- Domain Modeling: Parse-once pattern with type-safe models
- Services Pattern: Presentation services fed by one diff result
- Python Code Style: Organized methods, section headers, modern annotations

Usage:
    python -m movediff [OPTIONS] FILE1 FILE2
    movediff [OPTIONS] FILE1 FILE2

Structure:
    movediff/
    ├── __main__.py          # Entry point (argparse)
    ├── domain/              # Domain models (parse-once pattern)
    │   ├── diff.py          # ChangeScript, Hunk, DiffLine
    │   ├── moved.py         # MovedMode, MovedWsMode, MovedBlock
    │   └── options.py       # DiffOptions, DiffAlgorithm
    ├── infrastructure/      # Engines, inputs, config, move detection
    │   ├── diff_engine/     # git subprocess and difflib engines
    │   ├── moved_blocks.py  # MoveContext and the detection pipeline
    │   ├── whitespace.py
    │   ├── file_loader.py
    │   └── config.py
    ├── services/            # Hunk layout and unified output
    └── commands/            # Thin command orchestrators
        └── diff.py
"""

__version__ = "0.1.0"
