from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence, Tuple

import numpy as np

from busjam.core.config import BoardShape
from busjam.core.constants import (
    CODE_COLORS,
    COLOR_CODES,
    DISABLED_CHAR,
    EMPTY_CHAR,
    SNAPSHOT_VERSION,
)
from busjam.core.errors import ConfigurationError, PreconditionViolation
from busjam.core.utils import Position, parse_layout


@dataclass(frozen=True)
class Cell:
    col: int
    row: int
    disabled: bool = False
    occupant: str | None = None

    def __post_init__(self) -> None:
        if self.disabled and self.occupant is not None:
            raise ConfigurationError(
                f"Cell [{self.col},{self.row}] is disabled but holds a {self.occupant} token"
            )

    @property
    def position(self) -> Position:
        return (self.col, self.row)

    @property
    def is_empty(self) -> bool:
        return not self.disabled and self.occupant is None

    @property
    def is_occupied(self) -> bool:
        return self.occupant is not None


@dataclass(frozen=True)
class Token:
    color: str
    col: int
    row: int

    @property
    def position(self) -> Position:
        return (self.col, self.row)


_COLOR_NAMES = {name.lower(): name for name in COLOR_CODES}


def _color_name(value: Any, col: int, row: int) -> str:
    """Canonical legend name for a full colour name, case-insensitive."""
    name = _COLOR_NAMES.get(value.lower()) if isinstance(value, str) else None
    if name is None:
        raise ConfigurationError(f"Unknown colour {value!r} at [{col},{row}]")
    return name


def _decode_cell(value: Any, col: int, row: int) -> Cell:
    if value is None or value == EMPTY_CHAR:
        return Cell(col=col, row=row)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"Cell [{col},{row}] has unsupported value {value!r}")
    if value == DISABLED_CHAR:
        return Cell(col=col, row=row, disabled=True)
    if len(value) == 1:
        color = CODE_COLORS.get(value.upper())
        if color is None:
            raise ConfigurationError(f"Unknown colour code '{value}' at [{col},{row}]")
        return Cell(col=col, row=row, occupant=color)
    return Cell(col=col, row=row, occupant=_color_name(value, col, row))


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Immutable per-decision view of the board.

    Cells are stored row-major; positions are (col, row) with row 0 the
    extraction row. The snapshot is never mutated: helpers that "remove"
    tokens return a new snapshot.
    """

    shape: BoardShape
    cells: Tuple[Cell, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != self.shape.cell_count:
            raise ConfigurationError(
                f"Expected {self.shape.cell_count} cells for a "
                f"{self.shape.width}x{self.shape.height} board, got {len(self.cells)}"
            )
        for idx, cell in enumerate(self.cells):
            row, col = divmod(idx, self.shape.width)
            if (cell.col, cell.row) != (col, row):
                raise ConfigurationError(
                    f"Cell at index {idx} reports position [{cell.col},{cell.row}], expected [{col},{row}]"
                )

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    @staticmethod
    def from_rows(rows: Sequence[Sequence[Any]] | None) -> "BoardSnapshot":
        """Build a snapshot from rows of cell values (top row first).

        A cell value is None or "." for empty, "X" for disabled, a colour
        code from the legend ("R", "B", ...) or a full legend colour name
        ("Red", "teal", ...). Anything else is a ConfigurationError.
        """
        if rows is None:
            raise ConfigurationError("Board grid is missing")
        if not isinstance(rows, (list, tuple)):
            raise ConfigurationError(f"Board grid must be a list of rows, got {type(rows).__name__}")
        if len(rows) == 0:
            raise ConfigurationError("Board grid has no rows")

        width: int | None = None
        cells: list[Cell] = []
        for row_idx, row in enumerate(rows):
            if row is None:
                raise ConfigurationError(f"Row {row_idx} is missing")
            if not isinstance(row, (list, tuple, str)):
                raise ConfigurationError(f"Row {row_idx} must be a list of cells, got {type(row).__name__}")
            if width is None:
                width = len(row)
            elif len(row) != width:
                raise ConfigurationError(
                    f"Row {row_idx} has {len(row)} cells, expected {width} (jagged grid)"
                )
            for col_idx, value in enumerate(row):
                cells.append(_decode_cell(value, col_idx, row_idx))

        shape = BoardShape(width=width or 0, height=len(rows))
        return BoardSnapshot(shape=shape, cells=tuple(cells))

    @staticmethod
    def from_text(text: str) -> "BoardSnapshot":
        return BoardSnapshot.from_rows(parse_layout(text))

    @staticmethod
    def from_grid(
        disabled: Sequence[Sequence[bool]],
        occupants: Sequence[Sequence[str | None]],
    ) -> "BoardSnapshot":
        """Build a snapshot from parallel row-major disabled flags and occupant colours."""
        if disabled is None or occupants is None:
            raise ConfigurationError("Board grid is missing")
        if not isinstance(disabled, (list, tuple)) or not isinstance(occupants, (list, tuple)):
            raise ConfigurationError("Disabled and occupant grids must be lists of rows")
        if len(disabled) != len(occupants):
            raise ConfigurationError(
                f"Disabled grid has {len(disabled)} rows but occupant grid has {len(occupants)}"
            )
        if len(disabled) == 0:
            raise ConfigurationError("Board grid has no rows")

        width: int | None = None
        cells: list[Cell] = []
        for row_idx, (flags, colors) in enumerate(zip(disabled, occupants)):
            if flags is None or colors is None:
                raise ConfigurationError(f"Row {row_idx} is missing")
            if not isinstance(flags, (list, tuple)) or not isinstance(colors, (list, tuple)):
                raise ConfigurationError(f"Row {row_idx} must be a list of cells")
            if width is None:
                width = len(flags)
            if len(flags) != width or len(colors) != width:
                raise ConfigurationError(f"Row {row_idx} does not have {width} cells (jagged grid)")
            for col_idx, (flag, color) in enumerate(zip(flags, colors)):
                if color is not None:
                    color = _color_name(color, col_idx, row_idx)
                cells.append(Cell(col=col_idx, row=row_idx, disabled=bool(flag), occupant=color))

        return BoardSnapshot(shape=BoardShape(width=width or 0, height=len(disabled)), cells=tuple(cells))

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    @property
    def width(self) -> int:
        return self.shape.width

    @property
    def height(self) -> int:
        return self.shape.height

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.shape.width and 0 <= row < self.shape.height

    def cell(self, col: int, row: int) -> Cell:
        if not self.in_bounds(col, row):
            raise PreconditionViolation(
                f"Cell [{col},{row}] is outside the {self.shape.width}x{self.shape.height} board"
            )
        return self.cells[row * self.shape.width + col]

    def token_at(self, col: int, row: int) -> Token | None:
        cell = self.cell(col, row)
        if cell.disabled:
            raise PreconditionViolation(f"Cell [{col},{row}] is disabled")
        if cell.occupant is None:
            return None
        return Token(color=cell.occupant, col=col, row=row)

    def is_passable(self, col: int, row: int, query: Position | None = None) -> bool:
        """True when the cell is enabled and either empty or holds the query token itself."""
        cell = self.cell(col, row)
        if cell.disabled:
            return False
        return cell.occupant is None or cell.position == query

    def passability_mask(self, query: Position | None = None) -> np.ndarray:
        """Return a fresh (height, width) bool array indexed [row, col]."""
        mask = np.zeros((self.shape.height, self.shape.width), dtype=np.bool_)
        for cell in self.cells:
            if cell.is_empty:
                mask[cell.row, cell.col] = True
        if query is not None:
            col, row = query
            if not self.in_bounds(col, row):
                raise PreconditionViolation(f"Query position [{col},{row}] is out of bounds")
            if not self.cells[row * self.shape.width + col].disabled:
                mask[row, col] = True
        return mask

    def tokens(self) -> list[Token]:
        """All tokens in row-major order."""
        return [
            Token(color=cell.occupant, col=cell.col, row=cell.row)
            for cell in self.cells
            if cell.occupant is not None
        ]

    def tokens_of(self, color: str) -> list[Token]:
        return [token for token in self.tokens() if token.color == color]

    def without(self, positions: Iterable[Position]) -> "BoardSnapshot":
        """Return a copy of the snapshot with the tokens at `positions` removed."""
        cleared = set()
        for col, row in positions:
            if self.cell(col, row).occupant is None:
                raise PreconditionViolation(f"No token to remove at [{col},{row}]")
            cleared.add((col, row))
        cells = tuple(
            Cell(col=cell.col, row=cell.row) if cell.position in cleared else cell
            for cell in self.cells
        )
        return BoardSnapshot(shape=self.shape, cells=cells)

    def to_rows(self) -> list[list[str]]:
        """Inverse of `from_rows`, using "." / "X" / colour names."""
        rows: list[list[str]] = []
        for row in range(self.shape.height):
            out: list[str] = []
            for col in range(self.shape.width):
                cell = self.cells[row * self.shape.width + col]
                if cell.disabled:
                    out.append(DISABLED_CHAR)
                elif cell.occupant is None:
                    out.append(EMPTY_CHAR)
                else:
                    out.append(cell.occupant)
            rows.append(out)
        return rows


@dataclass(frozen=True)
class ExtractionQueue:
    """The vehicle currently accepting tokens of one colour."""

    color: str
    capacity: int
    filled: int = 0

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ConfigurationError(f"Queue capacity must be positive (got {self.capacity})")
        if not 0 <= self.filled <= self.capacity:
            raise ConfigurationError(
                f"Queue fill {self.filled} outside [0, {self.capacity}]"
            )

    @property
    def remaining(self) -> int:
        return self.capacity - self.filled

    @property
    def is_full(self) -> bool:
        return self.remaining == 0


@dataclass(frozen=True)
class OverflowBuffer:
    """Waiting slots; exhaustion ends the game but is judged by the host."""

    slots: Tuple[str | None, ...] = field(default_factory=tuple)

    @property
    def capacity(self) -> int:
        return len(self.slots)

    @property
    def filled(self) -> int:
        return sum(1 for slot in self.slots if slot is not None)

    @property
    def free(self) -> int:
        return self.capacity - self.filled

    @property
    def is_exhausted(self) -> bool:
        return self.capacity > 0 and self.free == 0


@dataclass(frozen=True)
class GameSnapshot:
    """
    Versioned hand-off from the hosting application for one decision.

    `queue` is None between levels, when the host has no active vehicle.
    """

    board: BoardSnapshot
    queue: ExtractionQueue | None
    buffer: OverflowBuffer = field(default_factory=OverflowBuffer)
    level_index: int = 0
    version: int = SNAPSHOT_VERSION

    def __post_init__(self) -> None:
        if self.version != SNAPSHOT_VERSION:
            raise ConfigurationError(
                f"Unsupported snapshot version {self.version} (expected {SNAPSHOT_VERSION})"
            )

    @property
    def target_color(self) -> str | None:
        return self.queue.color if self.queue is not None else None

    @staticmethod
    def from_dict(payload: Mapping[str, Any]) -> "GameSnapshot":
        if payload is None:
            raise ConfigurationError("Snapshot payload is missing")
        if not isinstance(payload, Mapping):
            raise ConfigurationError(f"Snapshot payload must be a mapping, got {type(payload).__name__}")
        version = payload.get("version", SNAPSHOT_VERSION)
        if version != SNAPSHOT_VERSION:
            raise ConfigurationError(
                f"Unsupported snapshot version {version} (expected {SNAPSHOT_VERSION})"
            )
        if "board" not in payload:
            raise ConfigurationError("Snapshot payload has no 'board'")

        raw_board = payload["board"]
        if isinstance(raw_board, str):
            board = BoardSnapshot.from_text(raw_board)
        elif isinstance(raw_board, list) and raw_board and all(isinstance(r, str) for r in raw_board):
            board = BoardSnapshot.from_text("\n".join(raw_board))
        elif isinstance(raw_board, (list, tuple)):
            board = BoardSnapshot.from_rows(raw_board)
        else:
            raise ConfigurationError(
                f"Snapshot board must be a layout string or a list of rows, got {type(raw_board).__name__}"
            )

        raw_queue = payload.get("queue")
        queue = None
        if raw_queue is not None:
            try:
                color = str(raw_queue["color"])
                capacity = int(raw_queue["capacity"])
                filled = int(raw_queue.get("filled", 0))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                raise ConfigurationError(f"Malformed queue entry: {raw_queue!r}") from exc
            queue = ExtractionQueue(color=color, capacity=capacity, filled=filled)

        raw_buffer = payload.get("buffer") or ()
        if not isinstance(raw_buffer, (list, tuple)):
            raise ConfigurationError(f"Snapshot buffer must be a list of slots, got {raw_buffer!r}")

        try:
            level_index = int(payload.get("level_index", 0))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"level_index must be an integer, got {payload.get('level_index')!r}"
            ) from exc

        buffer = OverflowBuffer(slots=tuple(raw_buffer))
        return GameSnapshot(
            board=board,
            queue=queue,
            buffer=buffer,
            level_index=level_index,
            version=version,
        )

    def to_dict(self) -> dict:
        queue = None
        if self.queue is not None:
            queue = {
                "color": self.queue.color,
                "capacity": self.queue.capacity,
                "filled": self.queue.filled,
            }
        return {
            "version": self.version,
            "level_index": self.level_index,
            "board": self.board.to_rows(),
            "queue": queue,
            "buffer": list(self.buffer.slots),
        }


__all__ = [
    "Cell",
    "Token",
    "BoardSnapshot",
    "ExtractionQueue",
    "OverflowBuffer",
    "GameSnapshot",
]
