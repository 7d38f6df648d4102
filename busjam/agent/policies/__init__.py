"""Decision policies.

A policy turns the ranked candidates of one decision into the position of
the token to move next.
"""

from typing import Any

from busjam.agent.policies.base import DecisionContext, DecisionPolicy
from busjam.agent.policies.lowest_cost import LowestCostPolicy
from busjam.agent.policies.service import DecisionService, ServicePolicy

# Policy registry
POLICIES: dict[str, type[DecisionPolicy]] = {
    "lowest_cost": LowestCostPolicy,
    "service": ServicePolicy,
}


def get_policy(name: str, **kwargs: Any) -> DecisionPolicy:
    """Get a decision policy instance by name.

    Args:
        name: Policy name (lowest_cost, service)
        **kwargs: Constructor arguments (the service policy needs `service`)

    Returns:
        DecisionPolicy instance

    Raises:
        KeyError: If policy name is not recognized
    """
    if name not in POLICIES:
        available = ", ".join(POLICIES.keys())
        raise KeyError(f"Unknown policy '{name}'. Available policies: {available}")
    return POLICIES[name](**kwargs)


__all__ = [
    "DecisionPolicy",
    "DecisionContext",
    "DecisionService",
    "LowestCostPolicy",
    "ServicePolicy",
    "POLICIES",
    "get_policy",
]
