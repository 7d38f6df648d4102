from __future__ import annotations

from collections import deque
from typing import Deque, Tuple

import numpy as np

from busjam.core.constants import EXTRACTION_ROW
from busjam.core.errors import PreconditionViolation
from busjam.core.snapshot import BoardSnapshot
from busjam.core.utils import Position, neighbors


def _check_start(position: Position, mask: np.ndarray) -> Tuple[int, int]:
    if mask.ndim != 2:
        raise PreconditionViolation(f"Passability mask must be 2-D (got {mask.ndim}-D)")
    height, width = mask.shape
    col, row = position
    if not (0 <= col < width and 0 <= row < height):
        raise PreconditionViolation(f"Start [{col},{row}] is outside the {width}x{height} mask")
    return width, height


def reachable(position: Position, mask: np.ndarray) -> bool:
    """
    Breadth-first search from `position` towards the extraction row.

    `mask` is a (height, width) bool array indexed [row, col]; only cells
    marked True are entered. The start cell itself is not checked against
    the mask. The mask is read, never written.
    """
    width, height = _check_start(position, mask)
    if position[1] == EXTRACTION_ROW:
        return True

    visited = np.zeros((height, width), dtype=np.bool_)
    queue: Deque[Position] = deque([position])
    visited[position[1], position[0]] = True

    while queue:
        current = queue.popleft()
        if current[1] == EXTRACTION_ROW:
            return True
        for nb in neighbors(current, width, height):
            col, row = nb
            if visited[row, col] or not mask[row, col]:
                continue
            visited[row, col] = True
            queue.append(nb)

    return False


def reachable_region(position: Position, mask: np.ndarray) -> Tuple[Position, ...]:
    """
    Every cell the search can enter from `position`, row-major.
    Useful for explaining why a token is stuck.
    """
    width, height = _check_start(position, mask)
    visited = np.zeros((height, width), dtype=np.bool_)
    queue: Deque[Position] = deque([position])
    visited[position[1], position[0]] = True

    while queue:
        current = queue.popleft()
        for col, row in neighbors(current, width, height):
            if visited[row, col] or not mask[row, col]:
                continue
            visited[row, col] = True
            queue.append((col, row))

    rows, cols = np.nonzero(visited)
    return tuple((int(c), int(r)) for r, c in zip(rows, cols))


def reachable_token(board: BoardSnapshot, position: Position) -> bool:
    """Reachability of the token at `position` on its own board."""
    col, row = position
    if board.token_at(col, row) is None:
        raise PreconditionViolation(f"No token at [{col},{row}]")
    return reachable(position, board.passability_mask(query=position))


__all__ = ["reachable", "reachable_region", "reachable_token"]
