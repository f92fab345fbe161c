"""Unit tests for /src/tictactoe/heuristic.py"""

import pytest

from src.tictactoe.board import Board
from src.tictactoe.heuristic import evaluate, line_pressure
from src.tictactoe.marks import Mark

UNFINISHED_BOARDS = [
    "---/---/---",
    "X--/---/---",
    "XX-/XX-/---",
    "XO-/-X-/--O",
    "XXX-/OOO-/----/----",
    "XXXX-/XXXX-/XXXX-/XXXX-/-----",
]


def test_empty_board_is_neutral() -> None:
    assert evaluate(Board.create(3), Mark.X) == 0
    assert evaluate(Board.create(4), Mark.O) == 0


def test_line_pressure_single_mark() -> None:
    """A corner sits on a row, a column and a diagonal. The center on all four lines through it."""
    assert line_pressure(Board.from_string("X--/---/---"), Mark.X) == 3
    assert line_pressure(Board.from_string("---/-X-/---"), Mark.X) == 4
    assert line_pressure(Board.from_string("---/-X-/---"), Mark.O) == -4


def test_blocked_lines_count_zero() -> None:
    """X and O share the top row, so that row no longer counts for anyone"""
    board = Board.from_string("XO-/---/---")
    # X: column 0 and the diagonal. O: column 1.
    assert line_pressure(board, Mark.X) == 2 - 1


@pytest.mark.parametrize("text", UNFINISHED_BOARDS)
def test_evaluation_is_symmetric(text: str) -> None:
    board = Board.from_string(text)
    assert evaluate(board, Mark.X) == -evaluate(board, Mark.O)


@pytest.mark.parametrize("text", UNFINISHED_BOARDS)
def test_evaluation_stays_below_a_real_win(text: str) -> None:
    """A guess must never reach the value of an actual win or loss"""
    board = Board.from_string(text)
    assert board.winner() is None
    assert -1 < evaluate(board, Mark.X) < 1


def test_closer_to_winning_ranks_higher() -> None:
    one_in_a_row = Board.from_string("X--/---/---")
    two_in_a_row = Board.from_string("XX-/---/---")
    assert evaluate(two_in_a_row, Mark.X) > evaluate(one_in_a_row, Mark.X) > 0
    assert evaluate(two_in_a_row, Mark.O) < evaluate(one_in_a_row, Mark.O) < 0
