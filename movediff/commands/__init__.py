"""CLI command implementations."""

from movediff.commands.diff import cmd_diff

__all__ = ["cmd_diff"]
