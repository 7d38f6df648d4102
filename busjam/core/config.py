from __future__ import annotations

from dataclasses import dataclass

from busjam.core.errors import ConfigurationError


@dataclass(frozen=True)
class BoardShape:
    """Static geometry of a board."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Board dimensions must be positive (got {self.width}x{self.height})"
            )

    @property
    def cell_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class SearchConfig:
    """
    Escalation limits for the blocker search.

    - `max_exact_blockers` caps the exhaustive phases: 2 runs single then pair
      removal, 1 skips the pair phase, 0 goes straight to the column scan.
    - `prefer_adjacent` reports a blocker touching the source ahead of any
      other single-removal success.
    """

    max_exact_blockers: int = 2
    prefer_adjacent: bool = True

    def __post_init__(self) -> None:
        if self.max_exact_blockers not in (0, 1, 2):
            raise ConfigurationError(
                f"max_exact_blockers must be 0, 1 or 2 (got {self.max_exact_blockers})"
            )


DEFAULT_SEARCH = SearchConfig()

__all__ = ["BoardShape", "SearchConfig", "DEFAULT_SEARCH"]
