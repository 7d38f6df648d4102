from __future__ import annotations

from .blockers import BlockerSet, find_blockers
from .config import DEFAULT_SEARCH, BoardShape, SearchConfig
from .errors import ConfigurationError, ParseError, PreconditionViolation
from .ranking import MoveCostResult, best_move, evaluate, rank
from .reachability import reachable, reachable_region, reachable_token
from .snapshot import BoardSnapshot, Cell, ExtractionQueue, GameSnapshot, OverflowBuffer, Token

__all__ = [
    "BoardShape",
    "SearchConfig",
    "DEFAULT_SEARCH",
    "ConfigurationError",
    "PreconditionViolation",
    "ParseError",
    "Cell",
    "Token",
    "BoardSnapshot",
    "ExtractionQueue",
    "OverflowBuffer",
    "GameSnapshot",
    "reachable",
    "reachable_region",
    "reachable_token",
    "BlockerSet",
    "find_blockers",
    "MoveCostResult",
    "evaluate",
    "rank",
    "best_move",
]
