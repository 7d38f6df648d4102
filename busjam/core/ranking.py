from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from busjam.core.blockers import DIRECT, find_blockers
from busjam.core.config import DEFAULT_SEARCH, SearchConfig
from busjam.core.snapshot import BoardSnapshot
from busjam.core.utils import Position


@dataclass(frozen=True)
class MoveCostResult:
    """
    Cost of delivering one target-colour token.

    `blockers` is empty exactly when `cost == 1`; otherwise it lists the
    tokens to relocate, first one first.
    """

    source: Position
    color: str
    cost: int
    blockers: Tuple[Position, ...]
    method: str

    @property
    def reachable(self) -> bool:
        return self.method == DIRECT

    @property
    def stuck(self) -> bool:
        """Unreachable, and the column scan found nothing to relocate (walled in by disabled cells)."""
        return not self.reachable and not self.blockers

    @property
    def next_move(self) -> Position:
        """The token to click next when acting on this candidate."""
        return self.blockers[0] if self.blockers else self.source

    def sort_key(self) -> Tuple[int, bool, int, int]:
        col, row = self.source
        return (self.cost, self.stuck, row, col)


def evaluate(
    board: BoardSnapshot,
    source: Position,
    config: SearchConfig = DEFAULT_SEARCH,
) -> MoveCostResult:
    col, row = source
    token = board.token_at(col, row)
    blockers = find_blockers(board, source, config)
    return MoveCostResult(
        source=source,
        color=token.color,
        cost=blockers.cost,
        blockers=blockers.positions,
        method=blockers.method,
    )


def rank(
    board: BoardSnapshot,
    target_color: str,
    config: SearchConfig = DEFAULT_SEARCH,
) -> list[MoveCostResult]:
    """Rank every `target_color` token by move cost, cheapest first.

    Ties fall back to (row, col) of the source. An absent colour gives an
    empty list.
    """
    results = [evaluate(board, token.position, config) for token in board.tokens_of(target_color)]
    results.sort(key=MoveCostResult.sort_key)
    return results


def best_move(ranking: Sequence[MoveCostResult]) -> MoveCostResult | None:
    """Cheapest candidate that can actually be acted on, or None."""
    for result in ranking:
        if not result.stuck:
            return result
    return None


__all__ = ["MoveCostResult", "evaluate", "rank", "best_move"]
