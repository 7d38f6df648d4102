"""Decision-cycle settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from busjam.agent.policies import POLICIES
from busjam.core.config import SearchConfig
from busjam.core.errors import ConfigurationError


@dataclass(frozen=True)
class AgentConfig:
    """
    Settings for one agent session.

    - `policy` names an entry of `busjam.agent.policies.POLICIES`.
    - `wait_for_departure` makes the cycle pass while the bus is full; how
      long to wait is up to the host's loop.
    - `model` / `temperature` are forwarded to the decision service.
    - `search` bounds the blocker search.
    """

    policy: str = "lowest_cost"
    wait_for_departure: bool = True
    model: str = "gpt-4o-mini"
    temperature: float = 0.3
    search: SearchConfig = field(default_factory=SearchConfig)

    def __post_init__(self) -> None:
        if self.policy not in POLICIES:
            available = ", ".join(POLICIES.keys())
            raise ConfigurationError(f"policy must be one of: {available} (got '{self.policy}')")
        if not self.model:
            raise ConfigurationError("model must be a non-empty string")
        if not 0.0 <= self.temperature <= 1.0:
            raise ConfigurationError(f"temperature must be in [0, 1], got {self.temperature}")

    def to_params(self) -> dict:
        return {
            "policy": self.policy,
            "wait_for_departure": self.wait_for_departure,
            "model": self.model,
            "temperature": self.temperature,
            "max_exact_blockers": self.search.max_exact_blockers,
            "prefer_adjacent": self.search.prefer_adjacent,
        }


DEFAULT_AGENT = AgentConfig()

__all__ = ["AgentConfig", "DEFAULT_AGENT"]
