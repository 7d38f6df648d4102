"""Base class for decision policies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from busjam.core.ranking import MoveCostResult
from busjam.core.snapshot import GameSnapshot
from busjam.core.utils import Position


@dataclass(frozen=True)
class DecisionContext:
    """Everything a policy may look at for one decision.

    Attributes:
        game: Snapshot handed over by the host
        ranking: Candidates for the current target colour, cheapest first
        move_count: Moves made so far on this level
    """

    game: GameSnapshot
    ranking: Tuple[MoveCostResult, ...]
    move_count: int = 0


class DecisionPolicy(ABC):
    """Abstract base class for move selection.

    Subclasses turn a ranked candidate list into the board position to click.
    """

    name: str = "base"

    @abstractmethod
    def choose(self, ctx: DecisionContext) -> Position | None:
        """Pick the position of the token to move next.

        Args:
            ctx: Snapshot and ranking for this decision

        Returns:
            (col, row) of the token to move, or None to pass
        """
        pass


__all__ = ["DecisionPolicy", "DecisionContext"]
