"""Move planning for a grid colour-matching puzzle: reachability, blocker search and cost ranking."""

__version__ = "0.1.0"
