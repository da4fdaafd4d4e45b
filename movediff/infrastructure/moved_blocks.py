"""Moved-block detection: flags deleted and inserted blocks that are relocations.

Phase 1: Fingerprinting. Each line is whitespace-normalized and hashed with
djb2; a block's fingerprint folds its line hashes in order.

Phase 2: Block collection. Every non-ignored change in the change script
contributes one deleted block (old side) and/or one inserted block (new
side), kept in file order.

Phase 3: Matching, size filtering and group assignment. Deleted blocks are
paired with the first unmatched inserted block of equal fingerprint; in the
block modes pairs with too little alphanumeric content are dropped; in the
zebra modes each surviving pair gets a group index.

Phase 4: Point queries. The output writer asks, per emitted line, whether it
is moved, which group it belongs to and whether it is an interior line.

Fingerprints are compared, contents are not: two different blocks that hash
alike are treated as a move, and among several identical candidates the
first one in file order wins.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from movediff.domain.diff import DiffInput, DiffResult
from movediff.domain.moved import BlockSide, MovedBlock, MovedMode, MovedWsMode
from movediff.domain.options import DiffOptions
from movediff.infrastructure.diff_engine.base import DiffEngine, DiffEngineError
from movediff.infrastructure.whitespace import count_alnum, normalize_line

MIN_BLOCK_SIZE = 20
HASH_SEED = 5381
HASH_MASK = 0xFFFFFFFFFFFFFFFF


class BlockCollectionError(Exception):
    """Raised when blocks cannot be collected for move detection."""

    pass


class MoveContextError(Exception):
    """Raised when a released MoveContext is used."""

    pass


# ------------------------------------------------------------------
# Phase 1: Fingerprinting
# ------------------------------------------------------------------


def hash_line(data: bytes) -> int:
    """djb2 hash of a line's bytes, wrapped to 64 bits."""
    acc = HASH_SEED
    for byte in data:
        acc = ((acc << 5) + acc + byte) & HASH_MASK
    return acc


def hash_block(line_hashes: Iterable[int]) -> int:
    """Fold line hashes into a block hash with the same djb2 step."""
    acc = HASH_SEED
    for line_hash in line_hashes:
        acc = ((acc << 5) + acc + line_hash) & HASH_MASK
    return acc


def block_fingerprint(lines: Iterable[bytes], ws_mode: MovedWsMode) -> int:
    """Fingerprint a run of raw lines after whitespace normalization."""
    return hash_block(hash_line(normalize_line(line, ws_mode)) for line in lines)


def count_block_alnum(lines: Iterable[bytes]) -> int:
    """Count alphanumeric bytes across raw (non-normalized) lines."""
    return sum(count_alnum(line) for line in lines)


# ------------------------------------------------------------------
# Move Context
# ------------------------------------------------------------------


class MoveContext:
    """Deleted/inserted block lists plus the state of their pairing.

    Created once per diff invocation, filled by collect(), mutated by the
    matching phases, then only queried. close() releases the blocks; it is
    also called when the context is used as a context manager.

    Match state is written only by _link() and _unlink(), which always
    update both sides of a pair together.
    """

    def __init__(
        self,
        mode: MovedMode,
        ws_mode: MovedWsMode = MovedWsMode.NONE,
        min_block_size: int = MIN_BLOCK_SIZE,
    ):
        self.mode = mode
        self.ws_mode = ws_mode
        self.min_block_size = min_block_size
        self.deleted: list[MovedBlock] = []
        self.inserted: list[MovedBlock] = []
        self.group_counter = 0
        self._closed = False

    def __enter__(self) -> MoveContext:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the block lists. Safe to call more than once."""
        self.deleted = []
        self.inserted = []
        self._closed = True

    # --------------------------------------------------------
    # Phase 2: Block Collection
    # --------------------------------------------------------

    def collect(self, result: DiffResult) -> None:
        """Build deleted and inserted blocks from a diff result.

        Raises:
            BlockCollectionError: If a change lies outside the line records
        """
        self._ensure_open()
        for change in result.script:
            if change.ignore:
                continue

            if change.old_end > len(result.old_lines) or change.new_end > len(result.new_lines):
                raise BlockCollectionError(
                    f"Change {change} lies outside the inputs "
                    f"({len(result.old_lines)} old lines, {len(result.new_lines)} new lines)"
                )

            if change.old_count > 0:
                self.deleted.append(
                    MovedBlock(
                        start=change.old_index + 1,
                        end=change.old_end,
                        side=BlockSide.DELETED,
                        fingerprint=block_fingerprint(
                            result.old_lines[change.old_index : change.old_end], self.ws_mode
                        ),
                    )
                )

            if change.new_count > 0:
                self.inserted.append(
                    MovedBlock(
                        start=change.new_index + 1,
                        end=change.new_end,
                        side=BlockSide.INSERTED,
                        fingerprint=block_fingerprint(
                            result.new_lines[change.new_index : change.new_end], self.ws_mode
                        ),
                    )
                )

    # --------------------------------------------------------
    # Phase 3: Matching, Filtering, Grouping
    # --------------------------------------------------------

    def match_blocks(self) -> None:
        """Pair each deleted block with the first free inserted block of equal fingerprint."""
        self._ensure_open()
        candidates: dict[int, list[int]] = {}
        for index, block in enumerate(self.inserted):
            if not block.matched:
                candidates.setdefault(block.fingerprint, []).append(index)

        for deleted_index, deleted in enumerate(self.deleted):
            if deleted.matched:
                continue
            for inserted_index in candidates.get(deleted.fingerprint, []):
                if self.inserted[inserted_index].matched:
                    continue
                self._link(deleted_index, inserted_index)
                break

    def filter_small_blocks(self, old_lines: list[bytes]) -> None:
        """Unmatch pairs whose deleted side has fewer than min_block_size alphanumerics.

        Args:
            old_lines: Raw old-side line records the deleted blocks index into
        """
        self._ensure_open()
        for deleted_index, deleted in enumerate(self.deleted):
            if not deleted.matched:
                continue
            alnum = count_block_alnum(old_lines[deleted.start - 1 : deleted.end])
            if alnum < self.min_block_size:
                self._unlink(deleted_index)

    def assign_groups(self) -> None:
        """Give each matched pair the next group index, in deleted-side order."""
        self._ensure_open()
        self.group_counter = 0
        for deleted in self.deleted:
            if not deleted.matched:
                continue
            deleted.group = self.group_counter
            self.inserted[deleted.partner_index].group = self.group_counter
            self.group_counter += 1

    def matched_pairs(self) -> list[tuple[MovedBlock, MovedBlock]]:
        """Return (deleted, inserted) pairs in deleted-side order."""
        self._ensure_open()
        return [
            (deleted, self.inserted[deleted.partner_index])
            for deleted in self.deleted
            if deleted.matched
        ]

    def _link(self, deleted_index: int, inserted_index: int) -> None:
        deleted = self.deleted[deleted_index]
        inserted = self.inserted[inserted_index]
        deleted.matched = True
        deleted.partner_start = inserted.start
        deleted.partner_index = inserted_index
        inserted.matched = True
        inserted.partner_start = deleted.start
        inserted.partner_index = deleted_index

    def _unlink(self, deleted_index: int) -> None:
        deleted = self.deleted[deleted_index]
        inserted = self.inserted[deleted.partner_index]
        for block in (deleted, inserted):
            block.matched = False
            block.partner_start = None
            block.partner_index = None
            block.group = None

    # --------------------------------------------------------
    # Phase 4: Point Queries
    # --------------------------------------------------------

    def is_moved(self, line: int, side: BlockSide) -> bool:
        """Check if line on side belongs to a matched block."""
        self._ensure_open()
        if self.mode == MovedMode.NO:
            return False
        return self._containing_block(line, side) is not None

    def group_of(self, line: int, side: BlockSide) -> int | None:
        """Group index of the matched block containing line (zebra modes only)."""
        self._ensure_open()
        if not self.mode.uses_groups:
            return None
        block = self._containing_block(line, side)
        return block.group if block else None

    def is_interior(self, line: int, side: BlockSide) -> bool:
        """Check if line is strictly inside a matched block (dimmed-zebra only)."""
        self._ensure_open()
        if not self.mode.dims_interior:
            return False
        block = self._containing_block(line, side)
        return block is not None and block.is_interior(line)

    def _blocks_for(self, side: BlockSide) -> list[MovedBlock]:
        return self.deleted if side == BlockSide.DELETED else self.inserted

    def _containing_block(self, line: int, side: BlockSide) -> MovedBlock | None:
        for block in self._blocks_for(side):
            if block.matched and block.contains(line):
                return block
        return None

    def _ensure_open(self) -> None:
        if self._closed:
            raise MoveContextError("MoveContext has already been released")


# ------------------------------------------------------------------
# Pipeline Entry Points
# ------------------------------------------------------------------


def detect_moved_blocks(
    result: DiffResult,
    mode: MovedMode,
    ws_mode: MovedWsMode = MovedWsMode.NONE,
    min_block_size: int = MIN_BLOCK_SIZE,
) -> MoveContext:
    """Run collection, matching, filtering and grouping as the mode requires.

    Args:
        result: Output of the alignment engine
        mode: Detection mode; NO returns an empty context
        ws_mode: Whitespace normalization applied before fingerprinting
        min_block_size: Alphanumeric threshold for the block modes

    Returns:
        A populated MoveContext owned by the caller

    Raises:
        BlockCollectionError: If collection fails; the context is released
    """
    ctx = MoveContext(mode, ws_mode, min_block_size)
    if mode == MovedMode.NO:
        return ctx

    try:
        ctx.collect(result)
        ctx.match_blocks()
        if mode.filters_small_blocks:
            ctx.filter_small_blocks(result.old_lines)
        if mode.uses_groups:
            ctx.assign_groups()
    except BlockCollectionError:
        ctx.close()
        raise
    return ctx


def collect_blocks_from_diff(
    engine: DiffEngine,
    old: DiffInput,
    new: DiffInput,
    options: DiffOptions,
    mode: MovedMode,
    ws_mode: MovedWsMode = MovedWsMode.NONE,
) -> MoveContext:
    """Align two inputs with engine and detect moved blocks in one call.

    Mode NO skips the alignment and returns an empty context.

    Raises:
        BlockCollectionError: If the engine fails or collection fails
    """
    if mode == MovedMode.NO:
        return MoveContext(mode, ws_mode)

    try:
        result = engine.compute(old, new, options)
    except DiffEngineError as e:
        raise BlockCollectionError(f"Diff computation failed: {e}") from e
    return detect_moved_blocks(result, mode, ws_mode)


# ------------------------------------------------------------------
# Move Report
# ------------------------------------------------------------------


@dataclass(frozen=True)
class MoveDetail:
    """Details about a single detected move."""

    source_lines: tuple[int, int]
    target_lines: tuple[int, int]
    line_count: int
    group: int | None

    def to_dict(self) -> dict:
        return {
            "source_lines": list(self.source_lines),
            "target_lines": list(self.target_lines),
            "line_count": self.line_count,
            "group": self.group,
        }


@dataclass(frozen=True)
class MoveReport:
    """Summary of all detected moves."""

    mode: str
    moves_detected: int
    total_lines_moved: int
    moves: tuple[MoveDetail, ...]

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "moves_detected": self.moves_detected,
            "total_lines_moved": self.total_lines_moved,
            "moves": [m.to_dict() for m in self.moves],
        }


def build_move_report(ctx: MoveContext) -> MoveReport:
    """Build a summary report of the matched pairs in ctx."""
    details = tuple(
        MoveDetail(
            source_lines=(deleted.start, deleted.end),
            target_lines=(inserted.start, inserted.end),
            line_count=deleted.line_count,
            group=deleted.group,
        )
        for deleted, inserted in ctx.matched_pairs()
    )
    return MoveReport(
        mode=ctx.mode.value,
        moves_detected=len(details),
        total_lines_moved=sum(d.line_count for d in details),
        moves=details,
    )
