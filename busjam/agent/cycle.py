"""One decision cycle: snapshot in, chosen move (or a reason to pass) out.

Nothing here sleeps, polls or touches the live board. The host calls
`decide` with a fresh snapshot and the `CycleState` returned by the previous
call, executes the move itself, and comes back with the next snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from busjam.agent.config import DEFAULT_AGENT, AgentConfig
from busjam.agent.logging import NullRunLogger, RunLogger
from busjam.agent.policies import DecisionContext, DecisionPolicy
from busjam.core.errors import ParseError
from busjam.core.ranking import MoveCostResult, best_move, rank
from busjam.core.render import format_position
from busjam.core.snapshot import GameSnapshot
from busjam.core.utils import Position

MOVE = "move"
WAIT = "wait"
IDLE = "idle"
REJECTED = "rejected"


@dataclass(frozen=True)
class CycleState:
    """Bookkeeping carried from one decision to the next by the caller."""

    level_index: int = 0
    move_count: int = 0
    levels_completed: int = 0
    history: Tuple[str, ...] = ()

    def observe_level(self, level_index: int) -> "CycleState":
        if level_index == self.level_index:
            return self
        return CycleState(
            level_index=level_index,
            move_count=0,
            levels_completed=self.levels_completed + 1,
            history=(),
        )

    def record(self, move: Position) -> "CycleState":
        count = self.move_count + 1
        entry = f"Move {count}: Selected passenger at {format_position(move)}"
        return replace(self, move_count=count, history=self.history + (entry,))


@dataclass(frozen=True)
class Decision:
    kind: str
    move: Position | None = None
    ranking: Tuple[MoveCostResult, ...] = ()
    reason: str | None = None


def _reject_reason(game: GameSnapshot, move: Position) -> str | None:
    col, row = move
    board = game.board
    if not board.in_bounds(col, row):
        return f"{format_position(move)} is outside the board"
    cell = board.cell(col, row)
    if cell.disabled:
        return f"{format_position(move)} is a disabled cell"
    if cell.occupant is None:
        return f"No passenger found at {format_position(move)}"
    if game.queue is not None and cell.occupant == game.queue.color and game.queue.is_full:
        return "Cannot move this passenger - the matching bus is already full"
    return None


def decide(
    game: GameSnapshot,
    policy: DecisionPolicy,
    state: CycleState | None = None,
    config: AgentConfig = DEFAULT_AGENT,
    logger: RunLogger | None = None,
) -> tuple[Decision, CycleState]:
    """Run one decision.

    Args:
        game: Snapshot for this decision
        policy: Move selection policy
        state: State returned by the previous call (None on the first call)
        config: Agent settings
        logger: Metric sink (defaults to a no-op logger)

    Returns:
        Tuple of (decision, updated state)
    """
    logger = logger or NullRunLogger()
    state = (state or CycleState()).observe_level(game.level_index)

    if game.queue is None:
        return Decision(kind=IDLE, reason="No bus is waiting"), state
    if game.queue.is_full and config.wait_for_departure:
        return Decision(kind=WAIT, reason="Bus is full, waiting for departure"), state

    ranking = tuple(rank(game.board, game.queue.color, config.search))
    step = state.move_count
    logger.log_metric("decision/candidates", len(ranking), step=step)
    best = best_move(ranking)
    if best is not None:
        logger.log_metric("decision/best_cost", best.cost, step=step)

    ctx = DecisionContext(game=game, ranking=ranking, move_count=state.move_count)
    try:
        move = policy.choose(ctx)
    except ParseError as exc:
        return Decision(kind=REJECTED, ranking=ranking, reason=str(exc)), state

    if move is None:
        return Decision(kind=IDLE, ranking=ranking, reason="No candidate to move"), state

    reason = _reject_reason(game, move)
    if reason is not None:
        return Decision(kind=REJECTED, move=move, ranking=ranking, reason=reason), state

    state = state.record(move)
    logger.log_metric("decision/move_count", state.move_count, step=state.move_count)
    return Decision(kind=MOVE, move=move, ranking=ranking), state


__all__ = ["CycleState", "Decision", "decide", "MOVE", "WAIT", "IDLE", "REJECTED"]
