"""Unit tests for the board snapshot and the host hand-off types."""

import numpy as np
import pytest

from busjam.core.config import BoardShape
from busjam.core.errors import ConfigurationError, PreconditionViolation
from busjam.core.snapshot import (
    BoardSnapshot,
    Cell,
    ExtractionQueue,
    GameSnapshot,
    OverflowBuffer,
    Token,
)


@pytest.fixture
def board():
    """3x3 board with a disabled corner and three tokens.

    Row 0: . B X
    Row 1: R . .
    Row 2: . G R
    """
    return BoardSnapshot.from_text(". B X\nR . .\n. G R")


def test_from_text_dimensions(board):
    """Test that width and height follow the layout."""
    assert board.width == 3
    assert board.height == 3
    assert board.shape == BoardShape(width=3, height=3)


def test_from_text_accepts_contiguous_and_row_labels():
    """Test the alternative layout spellings."""
    labelled = BoardSnapshot.from_text("Row 0: . B X\nRow 1: R . .")
    contiguous = BoardSnapshot.from_text(".BX\nR..")
    assert labelled == contiguous


def test_cells_are_exactly_one_state(board):
    """Test that every cell is disabled, empty or occupied and nothing else."""
    for cell in board.cells:
        states = [cell.disabled, cell.is_empty, cell.is_occupied]
        assert sum(states) == 1


def test_token_at(board):
    """Test token lookup by (col, row)."""
    assert board.token_at(1, 0) == Token(color="Blue", col=1, row=0)
    assert board.token_at(0, 1) == Token(color="Red", col=0, row=1)
    assert board.token_at(1, 1) is None


def test_token_at_disabled_raises(board):
    """Test that asking for the token of a disabled cell fails fast."""
    with pytest.raises(PreconditionViolation, match="disabled"):
        board.token_at(2, 0)


@pytest.mark.parametrize("col,row", [(-1, 0), (3, 0), (0, 3), (0, -1)])
def test_out_of_bounds_queries_raise(board, col, row):
    """Test that out-of-bounds lookups are rejected rather than treated as walls."""
    with pytest.raises(PreconditionViolation, match="outside"):
        board.token_at(col, row)
    with pytest.raises(PreconditionViolation, match="outside"):
        board.is_passable(col, row)


def test_is_passable(board):
    """Test passability with and without a query token."""
    assert board.is_passable(1, 1)
    assert not board.is_passable(2, 0)  # disabled
    assert not board.is_passable(0, 1)  # someone else's token
    assert board.is_passable(0, 1, query=(0, 1))  # the query token's own cell
    assert not board.is_passable(2, 2, query=(0, 1))


def test_passability_mask(board):
    """Test the numpy mask layout ([row, col]) and the query cell."""
    mask = board.passability_mask(query=(2, 2))
    expected = np.array(
        [
            [True, False, False],
            [False, True, True],
            [True, False, True],
        ]
    )
    assert mask.dtype == np.bool_
    np.testing.assert_array_equal(mask, expected)


def test_passability_mask_is_fresh(board):
    """Test that each call returns an independent array."""
    first = board.passability_mask()
    first[:] = True
    assert not board.passability_mask()[0, 1]


def test_tokens_row_major(board):
    """Test token enumeration order."""
    positions = [token.position for token in board.tokens()]
    assert positions == [(1, 0), (0, 1), (1, 2), (2, 2)]
    assert [token.position for token in board.tokens_of("Red")] == [(0, 1), (2, 2)]
    assert board.tokens_of("Purple") == []


def test_without_returns_new_snapshot(board):
    """Test that removal never mutates the original snapshot."""
    cleared = board.without([(1, 0)])
    assert cleared.token_at(1, 0) is None
    assert board.token_at(1, 0) is not None


def test_without_empty_cell_raises(board):
    """Test that removing a token that is not there is a caller error."""
    with pytest.raises(PreconditionViolation, match="No token"):
        board.without([(1, 1)])


class TestMalformedInput:
    """Malformed host input is a ConfigurationError."""

    def test_missing_grid(self):
        with pytest.raises(ConfigurationError, match="missing"):
            BoardSnapshot.from_rows(None)

    def test_empty_grid(self):
        with pytest.raises(ConfigurationError, match="no rows"):
            BoardSnapshot.from_rows([])

    def test_zero_width(self):
        with pytest.raises(ConfigurationError, match="must be positive"):
            BoardSnapshot.from_rows([[], []])

    def test_jagged_rows(self):
        with pytest.raises(ConfigurationError, match="jagged"):
            BoardSnapshot.from_rows([[".", "."], ["."]])

    def test_missing_row(self):
        with pytest.raises(ConfigurationError, match="Row 1 is missing"):
            BoardSnapshot.from_rows([[".", "."], None])

    def test_unknown_colour_code(self):
        with pytest.raises(ConfigurationError, match="Unknown colour code"):
            BoardSnapshot.from_rows([["Z"]])

    def test_jagged_layout_text(self):
        with pytest.raises(ConfigurationError, match="jagged"):
            BoardSnapshot.from_text("R . .\n. .")

    def test_empty_layout_text(self):
        with pytest.raises(ConfigurationError, match="empty"):
            BoardSnapshot.from_text("\n  \n")

    def test_disabled_cell_with_token(self):
        with pytest.raises(ConfigurationError, match="disabled"):
            Cell(col=0, row=0, disabled=True, occupant="Red")

    def test_negative_dimensions(self):
        with pytest.raises(ConfigurationError, match="must be positive"):
            BoardShape(width=-1, height=3)

    def test_from_grid_row_mismatch(self):
        with pytest.raises(ConfigurationError, match="rows"):
            BoardSnapshot.from_grid([[False]], [[None], [None]])

    def test_from_grid_missing_first_row(self):
        """Test that a null row is reported before any width is taken from it."""
        with pytest.raises(ConfigurationError, match="Row 0 is missing"):
            BoardSnapshot.from_grid([None], [None])

    def test_from_grid_non_sequence(self):
        with pytest.raises(ConfigurationError, match="lists of rows"):
            BoardSnapshot.from_grid(5, [[None]])

    def test_non_sequence_grid(self):
        with pytest.raises(ConfigurationError, match="list of rows"):
            BoardSnapshot.from_rows(5)

    def test_non_sequence_row(self):
        with pytest.raises(ConfigurationError, match="Row 1 must be a list of cells"):
            BoardSnapshot.from_rows([[".", "."], 7])

    @pytest.mark.parametrize("name", ["Magenta", "Cyan", "Redd"])
    def test_unknown_colour_name(self, name):
        """Test that only legend colours are accepted, so no two colours share a code."""
        with pytest.raises(ConfigurationError, match="Unknown colour"):
            BoardSnapshot.from_rows([[name, "."]])

    def test_from_grid_unknown_colour(self):
        with pytest.raises(ConfigurationError, match="Unknown colour 'Magenta' at \\[1,0\\]"):
            BoardSnapshot.from_grid([[False, False]], [[None, "Magenta"]])


def test_from_grid_matches_from_rows():
    """Test the explicit-array constructor."""
    grid = BoardSnapshot.from_grid(
        disabled=[[False, True], [False, False]],
        occupants=[[None, None], ["Red", "Blue"]],
    )
    assert grid == BoardSnapshot.from_rows([[".", "X"], ["R", "B"]])


def test_full_colour_names_accepted():
    """Test that hosts may pass colour names instead of legend codes."""
    board = BoardSnapshot.from_rows([["Teal", "."]])
    assert board.token_at(0, 0).color == "Teal"


def test_colour_names_are_case_normalised():
    """Test that "red", "RED" and "R" all name the same colour."""
    board = BoardSnapshot.from_rows([["red", "RED", "R"]])
    assert {token.color for token in board.tokens()} == {"Red"}
    grid = BoardSnapshot.from_grid([[False, False]], [["blue", "Blue"]])
    assert [token.color for token in grid.tokens()] == ["Blue", "Blue"]


class TestExtractionQueue:
    def test_remaining_and_full(self):
        queue = ExtractionQueue(color="Red", capacity=3, filled=2)
        assert queue.remaining == 1
        assert not queue.is_full
        assert ExtractionQueue(color="Red", capacity=3, filled=3).is_full

    def test_invalid_capacity(self):
        with pytest.raises(ConfigurationError, match="capacity must be positive"):
            ExtractionQueue(color="Red", capacity=0)

    def test_overfilled(self):
        with pytest.raises(ConfigurationError, match="outside"):
            ExtractionQueue(color="Red", capacity=3, filled=4)


def test_overflow_buffer_counts():
    """Test slot accounting of the waiting area."""
    buffer = OverflowBuffer(slots=("Blue", None, "Green"))
    assert buffer.capacity == 3
    assert buffer.filled == 2
    assert buffer.free == 1
    assert not buffer.is_exhausted
    assert OverflowBuffer(slots=("Blue", "Red")).is_exhausted
    assert not OverflowBuffer().is_exhausted


class TestGameSnapshot:
    def test_from_dict(self):
        game = GameSnapshot.from_dict(
            {
                "version": 1,
                "level_index": 4,
                "board": ["R . X", ". B ."],
                "queue": {"color": "Red", "capacity": 3, "filled": 1},
                "buffer": [None, "Blue"],
            }
        )
        assert game.level_index == 4
        assert game.target_color == "Red"
        assert game.queue.remaining == 2
        assert game.buffer.filled == 1
        assert game.board.token_at(1, 1).color == "Blue"

    def test_board_as_layout_string(self):
        game = GameSnapshot.from_dict({"board": "R .\n. B", "queue": None})
        assert game.queue is None
        assert game.target_color is None
        assert game.board.width == 2

    def test_to_dict_round_trip(self):
        game = GameSnapshot(
            board=BoardSnapshot.from_text("R X\n. B"),
            queue=ExtractionQueue(color="Blue", capacity=2),
            buffer=OverflowBuffer(slots=(None, "Red")),
            level_index=2,
        )
        assert GameSnapshot.from_dict(game.to_dict()) == game

    def test_unsupported_version(self):
        with pytest.raises(ConfigurationError, match="Unsupported snapshot version"):
            GameSnapshot.from_dict({"version": 99, "board": "R"})

    def test_missing_board(self):
        with pytest.raises(ConfigurationError, match="no 'board'"):
            GameSnapshot.from_dict({"version": 1})

    def test_malformed_queue(self):
        with pytest.raises(ConfigurationError, match="Malformed queue"):
            GameSnapshot.from_dict({"board": "R", "queue": {"capacity": 2}})

    def test_non_numeric_queue_capacity(self):
        with pytest.raises(ConfigurationError, match="Malformed queue"):
            GameSnapshot.from_dict({"board": "R", "queue": {"color": "Red", "capacity": "three"}})

    def test_queue_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match="Malformed queue"):
            GameSnapshot.from_dict({"board": "R", "queue": 3})

    def test_non_numeric_level_index(self):
        with pytest.raises(ConfigurationError, match="level_index must be an integer"):
            GameSnapshot.from_dict({"board": "R", "level_index": "first"})

    @pytest.mark.parametrize("board", [5, {"rows": []}, None])
    def test_board_of_wrong_type(self, board):
        """Test that a board that is neither layout text nor rows is refused."""
        with pytest.raises(ConfigurationError, match="layout string or a list of rows"):
            GameSnapshot.from_dict({"board": board})

    def test_buffer_of_wrong_type(self):
        with pytest.raises(ConfigurationError, match="buffer must be a list"):
            GameSnapshot.from_dict({"board": "R", "buffer": 2})

    def test_payload_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            GameSnapshot.from_dict(["R"])

    def test_overfilled_queue_keeps_its_own_message(self):
        with pytest.raises(ConfigurationError, match="outside"):
            GameSnapshot.from_dict({"board": "R", "queue": {"color": "Red", "capacity": 2, "filled": 5}})
