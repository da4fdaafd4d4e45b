"""Domain models for moved-block detection.

Defines the detection and whitespace modes selected on the command line and
the MovedBlock record shared by the collector, matcher and point queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


def _parse_enum_value(enum_cls, value: str, label: str):
    value_lower = value.lower()
    for member in enum_cls:
        if member.value == value_lower:
            return member
    valid_values = [m.value for m in enum_cls]
    raise ValueError(
        f"Invalid {label}: {value}. Must be one of: {', '.join(valid_values)}"
    )


class MovedMode(Enum):
    """Moved-block detection mode.

    Attributes:
        NO: Detection disabled, nothing is collected
        PLAIN: Match blocks only
        BLOCKS: Match, then drop matches with too little content
        ZEBRA: BLOCKS plus a group index per matched pair
        DIMMED_ZEBRA: ZEBRA plus interior-line dimming
    """

    NO = "no"
    PLAIN = "plain"
    BLOCKS = "blocks"
    ZEBRA = "zebra"
    DIMMED_ZEBRA = "dimmed-zebra"

    @classmethod
    def from_string(cls, value: str) -> MovedMode:
        """Parse MovedMode from its command-line keyword.

        Raises:
            ValueError: If value is not a valid mode

        Examples:
            >>> MovedMode.from_string("dimmed-zebra")
            <MovedMode.DIMMED_ZEBRA: 'dimmed-zebra'>
        """
        return _parse_enum_value(cls, value, "moved mode")

    @property
    def filters_small_blocks(self) -> bool:
        return self in (MovedMode.BLOCKS, MovedMode.ZEBRA, MovedMode.DIMMED_ZEBRA)

    @property
    def uses_groups(self) -> bool:
        return self in (MovedMode.ZEBRA, MovedMode.DIMMED_ZEBRA)

    @property
    def dims_interior(self) -> bool:
        return self == MovedMode.DIMMED_ZEBRA


class MovedWsMode(Enum):
    """Whitespace normalization applied before fingerprinting."""

    NONE = "none"
    IGNORE_ALL = "ignore-all"
    IGNORE_CHANGE = "ignore-change"
    IGNORE_AT_EOL = "ignore-at-eol"

    @classmethod
    def from_string(cls, value: str) -> MovedWsMode:
        """Parse MovedWsMode from its command-line keyword.

        Raises:
            ValueError: If value is not a valid whitespace mode
        """
        return _parse_enum_value(cls, value, "moved-ws mode")


class BlockSide(Enum):
    DELETED = "deleted"
    INSERTED = "inserted"


@dataclass
class MovedBlock:
    """A maximal run of deleted or inserted lines from one change.

    Attributes:
        start: First line (1-based, inclusive)
        end: Last line (1-based, inclusive)
        side: Whether the lines were deleted (old file) or inserted (new file)
        fingerprint: Hash of the block's normalized content
        matched: True when paired with a block on the opposite side
        partner_start: Start line of the paired block (None if unmatched)
        partner_index: Position of the paired block in the opposite list
        group: Presentation group index (zebra modes only)
    """

    start: int
    end: int
    side: BlockSide
    fingerprint: int
    matched: bool = False
    partner_start: int | None = None
    partner_index: int | None = None
    group: int | None = None

    @property
    def line_count(self) -> int:
        return self.end - self.start + 1

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end

    def is_interior(self, line: int) -> bool:
        """Check if line lies strictly between the first and last line."""
        return self.start < line < self.end
