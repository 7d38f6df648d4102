"""Escalating search for the tokens that must move before a source token can leave.

The search widens in fixed steps and stops at the first step that yields a
result:

1. ``direct``  - the source already reaches the extraction row.
2. ``single``  - removing one other token opens a path.
3. ``pair``    - removing two other tokens opens a path. Each anchor keeps
   only its first working partner and the first anchor with a partner wins,
   so this is *a* working pair, not a minimum one.
4. ``column``  - every token straight above the source. This ignores
   sideways routes and may overstate the true set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from busjam.core.config import DEFAULT_SEARCH, SearchConfig
from busjam.core.errors import PreconditionViolation
from busjam.core.reachability import reachable
from busjam.core.snapshot import BoardSnapshot
from busjam.core.utils import Position, manhattan, row_major_key

DIRECT = "direct"
SINGLE = "single"
PAIR = "pair"
COLUMN = "column"


@dataclass(frozen=True)
class BlockerSet:
    positions: Tuple[Position, ...]
    method: str

    @property
    def cost(self) -> int:
        # Each blocker is one relocation, plus the source's own move.
        return len(self.positions) + 1


def _candidates(board: BoardSnapshot, source: Position) -> list[Position]:
    """Occupied cells other than the source, row-major."""
    return [token.position for token in board.tokens() if token.position != source]


def _opens_path(source: Position, base: np.ndarray, removed: Tuple[Position, ...]) -> bool:
    mask = base.copy()
    for col, row in removed:
        mask[row, col] = True
    return reachable(source, mask)


def _single_blocker(
    board: BoardSnapshot, source: Position, base: np.ndarray, config: SearchConfig
) -> Position | None:
    successes = [
        pos for pos in _candidates(board, source) if _opens_path(source, base, (pos,))
    ]
    if not successes:
        return None

    if config.prefer_adjacent:
        adjacent = [pos for pos in successes if manhattan(pos, source) == 1]
        if adjacent:
            successes = adjacent

    return sorted(successes, key=row_major_key)[0]


def _blocker_pair(
    board: BoardSnapshot, source: Position, base: np.ndarray
) -> Tuple[Position, Position] | None:
    candidates = _candidates(board, source)
    for anchor in candidates:
        for partner in candidates:
            if partner == anchor:
                continue
            if not _opens_path(source, base, (anchor, partner)):
                continue
            if manhattan(anchor, source) <= manhattan(partner, source):
                return (anchor, partner)
            return (partner, anchor)
    return None


def _column_blockers(board: BoardSnapshot, source: Position) -> Tuple[Position, ...]:
    col, row = source
    found = [
        (col, r)
        for r in range(row - 1, -1, -1)
        if board.cell(col, r).is_occupied
    ]
    return tuple(sorted(found, key=row_major_key))


def find_blockers(
    board: BoardSnapshot,
    source: Position,
    config: SearchConfig = DEFAULT_SEARCH,
) -> BlockerSet:
    """Return the ordered tokens to relocate before the token at `source` can leave.

    Args:
        board: Snapshot of the current decision
        source: (col, row) of the token being evaluated
        config: Escalation limits

    Returns:
        BlockerSet with the positions (relocation order) and the search step
        that produced them

    Raises:
        PreconditionViolation: If `source` is out of bounds, disabled or empty
    """
    col, row = source
    if board.token_at(col, row) is None:
        raise PreconditionViolation(f"No token at [{col},{row}]")

    base = board.passability_mask(query=source)
    if reachable(source, base):
        return BlockerSet(positions=(), method=DIRECT)

    if config.max_exact_blockers >= 1:
        single = _single_blocker(board, source, base, config)
        if single is not None:
            return BlockerSet(positions=(single,), method=SINGLE)

    if config.max_exact_blockers >= 2:
        pair = _blocker_pair(board, source, base)
        if pair is not None:
            return BlockerSet(positions=pair, method=PAIR)

    return BlockerSet(positions=_column_blockers(board, source), method=COLUMN)


__all__ = ["BlockerSet", "find_blockers", "DIRECT", "SINGLE", "PAIR", "COLUMN"]
