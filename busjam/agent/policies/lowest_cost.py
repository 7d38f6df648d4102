"""Deterministic policy: act on the cheapest candidate."""

from __future__ import annotations

from busjam.agent.policies.base import DecisionContext, DecisionPolicy
from busjam.core.ranking import best_move
from busjam.core.utils import Position


class LowestCostPolicy(DecisionPolicy):
    """Move the cheapest candidate itself, or its first blocker when it is not free yet."""

    name = "lowest_cost"

    def choose(self, ctx: DecisionContext) -> Position | None:
        best = best_move(ctx.ranking)
        if best is None:
            return None
        return best.next_move


__all__ = ["LowestCostPolicy"]
