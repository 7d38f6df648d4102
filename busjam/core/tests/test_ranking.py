"""Unit tests for the move-cost ranker."""

import numpy as np
import pytest

from busjam.core.blockers import COLUMN, DIRECT, PAIR, SINGLE
from busjam.core.ranking import MoveCostResult, best_move, evaluate, rank
from busjam.core.reachability import reachable_token
from busjam.core.snapshot import BoardSnapshot


@pytest.fixture
def mixed_board():
    """Four Red tokens with costs 1, 2, 2 and 3.

    Row 0: . . . B .
    Row 1: B X B X .
    Row 2: R X R X R
    Row 3: R X . . .
    """
    return BoardSnapshot.from_text(". . . B .\nB X B X .\nR X R X R\nR X . . .")


def random_board(rng, width=5, height=5):
    cells = rng.choice(
        [".", "X", "R", "B", "G"],
        size=(height, width),
        p=[0.3, 0.1, 0.2, 0.2, 0.2],
    )
    return BoardSnapshot.from_rows(cells.tolist())


def test_rank_orders_by_cost_then_position(mixed_board):
    """Test the (cost, row, col) ordering."""
    ranking = rank(mixed_board, "Red")
    assert [r.source for r in ranking] == [(4, 2), (0, 2), (2, 2), (0, 3)]
    assert [r.cost for r in ranking] == [1, 2, 2, 3]


def test_rank_results(mixed_board):
    """Test the individual results behind the ordering."""
    by_source = {r.source: r for r in rank(mixed_board, "Red")}
    assert by_source[(4, 2)].method == DIRECT
    assert by_source[(4, 2)].blockers == ()
    assert by_source[(0, 2)].blockers == ((0, 1),)
    assert by_source[(2, 2)].blockers == ((2, 1),)
    assert by_source[(0, 3)].method == PAIR
    assert by_source[(0, 3)].blockers == ((0, 2), (0, 1))


def test_absent_colour_is_empty(mixed_board):
    """Test that a colour with no tokens on the board gives an empty ranking."""
    assert rank(mixed_board, "Purple") == []
    assert best_move([]) is None


def test_direct_entries_come_first():
    """Test that cost-1 entries precede everything, wherever they sit."""
    board = BoardSnapshot.from_text("B . .\nR X .\n. X R")
    ranking = rank(board, "Red")
    assert ranking[0].source == (2, 2)
    assert ranking[0].cost == 1
    assert ranking[1].source == (0, 1)
    assert ranking[1].cost == 2


def test_stuck_token_sorts_after_direct_one():
    """Test that a walled-in token never outranks a free one at equal cost."""
    board = BoardSnapshot.from_text("X . .\nR X .\nX X R")
    ranking = rank(board, "Red")
    assert [r.source for r in ranking] == [(2, 2), (0, 1)]
    assert ranking[0].cost == ranking[1].cost == 1
    assert ranking[1].method == COLUMN
    assert ranking[1].stuck
    assert best_move(ranking).source == (2, 2)


def test_best_move_skips_stuck_tokens():
    """Test that a ranking of stuck tokens recommends nothing."""
    board = BoardSnapshot.from_text("X\nR")
    assert best_move(rank(board, "Red")) is None


def test_next_move(mixed_board):
    """Test that next_move is the source when free, else its first blocker."""
    ranking = rank(mixed_board, "Red")
    assert ranking[0].next_move == (4, 2)
    assert ranking[-1].next_move == (0, 2)


def test_evaluate_single_token(mixed_board):
    result = evaluate(mixed_board, (0, 2))
    assert result == MoveCostResult(
        source=(0, 2), color="Red", cost=2, blockers=((0, 1),), method=SINGLE
    )
    assert not result.reachable


def test_rank_is_deterministic(mixed_board):
    """Test that repeated ranking of the same snapshot is identical."""
    assert rank(mixed_board, "Red") == rank(mixed_board, "Red")


def test_extraction_row_tokens_cost_one():
    """Test that every row-0 token is free regardless of its neighbours."""
    board = BoardSnapshot.from_text("R B R\nB B B")
    ranking = rank(board, "Red")
    assert all(r.cost == 1 and r.blockers == () for r in ranking)


@pytest.mark.parametrize("seed", range(12))
def test_random_boards_properties(seed):
    """Round trip, ordering and cost bookkeeping on random boards."""
    rng = np.random.default_rng(seed)
    board = random_board(rng)
    ranking = rank(board, "Red")

    assert len(ranking) == len(board.tokens_of("Red"))
    keys = [(r.cost, r.stuck, r.source[1], r.source[0]) for r in ranking]
    assert keys == sorted(keys)
    assert ranking == rank(board, "Red")

    for result in ranking:
        assert result.cost == len(result.blockers) + 1
        assert (result.cost == 1) == (result.blockers == ())
        if result.source[1] == 0:
            assert result.method == DIRECT
        if result.method in (DIRECT, SINGLE, PAIR):
            cleared = board.without(result.blockers)
            assert reachable_token(cleared, result.source)
        else:
            assert not reachable_token(board, result.source)
