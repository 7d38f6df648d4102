from __future__ import annotations

from .config import DEFAULT_AGENT, AgentConfig
from .cycle import CycleState, Decision, decide
from .logging import MemoryRunLogger, MLflowRunLogger, NullRunLogger, RunLogger
from .policies import DecisionContext, DecisionPolicy, DecisionService, get_policy
from .reply import parse_reply, resolve_selection

__all__ = [
    "AgentConfig",
    "DEFAULT_AGENT",
    "CycleState",
    "Decision",
    "decide",
    "RunLogger",
    "NullRunLogger",
    "MemoryRunLogger",
    "MLflowRunLogger",
    "DecisionContext",
    "DecisionPolicy",
    "DecisionService",
    "get_policy",
    "parse_reply",
    "resolve_selection",
]
