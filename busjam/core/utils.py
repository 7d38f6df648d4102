"""Grid helpers shared by the snapshot, search and rendering modules."""

from __future__ import annotations

import re
from typing import Tuple

from busjam.core.constants import DIRS
from busjam.core.errors import ConfigurationError

Position = Tuple[int, int]

_ROW_PREFIX = re.compile(r"^\s*Row\s+\d+\s*:\s?", re.IGNORECASE)


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def row_major_key(pos: Position) -> Tuple[int, int]:
    """Sort key ordering positions top-to-bottom, then left-to-right."""
    col, row = pos
    return (row, col)


def neighbors(pos: Position, width: int, height: int) -> list[Position]:
    """Return in-bounds 4-neighbours of `pos` in DIRS order (up, right, down, left).

    Args:
        pos: (col, row) of the cell
        width: Grid width
        height: Grid height

    Returns:
        List of (col, row) tuples (up to 4)
    """
    col, row = pos
    out: list[Position] = []
    for dc, dr in DIRS:
        nc, nr = col + dc, row + dr
        if 0 <= nc < width and 0 <= nr < height:
            out.append((nc, nr))
    return out


def parse_layout(text: str) -> list[list[str]]:
    """Parse a legend layout into rows of single-character cells.

    Each non-blank line is one board row, top row first. Cells may be
    separated by whitespace ("R . X") or written contiguously ("R.X"), and a
    leading "Row N:" label, as emitted by the renderer, is ignored.

    Args:
        text: Layout text

    Returns:
        List of rows, each a list of legend characters

    Raises:
        ConfigurationError: If the layout is empty, a cell is wider than one
            character, or rows have different lengths
    """
    if text is None:
        raise ConfigurationError("Board layout is missing")

    rows: list[list[str]] = []
    for line in text.splitlines():
        line = _ROW_PREFIX.sub("", line).strip()
        if not line:
            continue
        parts = line.split()
        if len(parts) == 1:
            parts = list(parts[0])
        for part in parts:
            if len(part) != 1:
                raise ConfigurationError(f"Layout cell '{part}' must be a single character")
        rows.append(parts)

    if not rows:
        raise ConfigurationError("Board layout is empty")

    width = len(rows[0])
    for idx, row in enumerate(rows):
        if len(row) != width:
            raise ConfigurationError(
                f"Row {idx} has {len(row)} cells, expected {width} (jagged layout)"
            )
    return rows


__all__ = ["Position", "manhattan", "row_major_key", "neighbors", "parse_layout"]
