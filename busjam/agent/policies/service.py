"""Policy delegating the choice to an external text-in/text-out decision service."""

from __future__ import annotations

from typing import Protocol

from busjam.agent.policies.base import DecisionContext, DecisionPolicy
from busjam.agent.reply import parse_reply, resolve_selection
from busjam.core.render import SYSTEM_PROMPT, build_user_message
from busjam.core.utils import Position


class DecisionService(Protocol):
    def complete(self, system: str, user: str, *, model: str, temperature: float) -> str:
        ...


class ServicePolicy(DecisionPolicy):
    """Send the rendered game state to a decision service and parse its `[x,y]` reply.

    A reply whose coordinate is empty but whose swapped reading holds a token
    is taken to have mixed up the axes. Unparseable replies raise ParseError.
    """

    name = "service"

    def __init__(
        self,
        service: DecisionService,
        *,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
    ):
        self.service = service
        self.model = model
        self.temperature = temperature
        self.last_reply: str | None = None

    def choose(self, ctx: DecisionContext) -> Position | None:
        user = build_user_message(ctx.game, ctx.ranking, ctx.move_count)
        reply = self.service.complete(
            SYSTEM_PROMPT, user, model=self.model, temperature=self.temperature
        )
        self.last_reply = reply
        coord = parse_reply(reply)
        resolved = resolve_selection(ctx.game.board, coord)
        return resolved if resolved is not None else coord


__all__ = ["DecisionService", "ServicePolicy"]
