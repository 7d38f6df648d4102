"""Parsing of free-text decision-service replies into board coordinates."""

from __future__ import annotations

import re

from busjam.core.errors import ParseError
from busjam.core.snapshot import BoardSnapshot
from busjam.core.utils import Position

_BRACKETS = re.compile(r"\[([^\[\]]*)\]")
_AXIS = re.compile(r"^\s*(?:([xy])\s*=\s*)?(-?\d+)\s*$", re.IGNORECASE)


def parse_reply(text: str | None) -> Position:
    """Extract the first `[x,y]` coordinate pair from a reply.

    Both `[1,2]` and `[x=1,y=2]` are accepted. Only the first bracketed
    group is considered.

    Args:
        text: Raw reply text

    Returns:
        (col, row) tuple

    Raises:
        ParseError: If no bracketed pair of integers is present
    """
    if not text:
        raise ParseError("Reply is empty")

    match = _BRACKETS.search(text)
    if match is None:
        raise ParseError(f"Couldn't find coordinates in reply: {text!r}")

    parts = match.group(1).split(",")
    if len(parts) != 2:
        raise ParseError(f"Invalid coordinates format: [{match.group(1)}]")

    values: list[int] = []
    for part, axis in zip(parts, ("x", "y")):
        axis_match = _AXIS.match(part)
        if axis_match is None:
            raise ParseError(f"Invalid coordinate value: {part.strip()!r}")
        label = axis_match.group(1)
        if label is not None and label.lower() != axis:
            raise ParseError(f"Coordinate labelled '{label}' where '{axis}' was expected")
        values.append(int(axis_match.group(2)))

    return (values[0], values[1])


def _holds_token(board: BoardSnapshot, pos: Position) -> bool:
    col, row = pos
    if not board.in_bounds(col, row):
        return False
    return board.cell(col, row).is_occupied


def resolve_selection(board: BoardSnapshot, coord: Position) -> Position | None:
    """Map a parsed coordinate onto a token, tolerating swapped axes.

    Returns the coordinate itself when it holds a token, otherwise the
    swapped (row, col) reading when that one does, otherwise None.
    """
    if _holds_token(board, coord):
        return coord
    swapped = (coord[1], coord[0])
    if _holds_token(board, swapped):
        return swapped
    return None


__all__ = ["parse_reply", "resolve_selection"]
