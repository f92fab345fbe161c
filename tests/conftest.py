"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.tictactoe.board import Board
from src.tictactoe.marks import Mark
from src.tictactoe.moves import Move
from src.tictactoe.participant import Participant


@pytest.fixture
def empty_board() -> Board:
    return Board.create(3)


@pytest.fixture
def fill_cells() -> Callable[[Board, list[int], Mark], Board]:
    """Call the inner function to place the same mark on several cells (no turn order involved)."""

    def _fill(board: Board, indices: list[int], mark: Mark) -> Board:
        for index in indices:
            board = board.apply_move(Move(index, mark))
        return board

    return _fill


@pytest.fixture
def computer_x() -> Participant:
    return Participant.automated(Mark.X)


@pytest.fixture
def computer_o() -> Participant:
    return Participant.automated(Mark.O)
