"""
Scoring of unfinished boards, for when the search has to stop before the game ends.

Any function with the `Evaluator` signature can be plugged into the search. It must return a value
strictly between -1 and +1 for a board nobody has won yet, so that a real win (+1) or loss (-1)
always outranks a guess.
"""

from typing import Callable

from src.tictactoe.board import Board
from src.tictactoe.marks import Mark, opponent

Evaluator = Callable[[Board, Mark], float]


def line_pressure(board: Board, mark: Mark) -> int:
    """
    Sum over all lines still open for exactly one side:
    +k^2 for a line holding k of `mark`'s marks and none of the opponent's, -k^2 the other way around.
    Lines holding both marks (or none) can no longer decide anything and count zero.
    """
    other = opponent(mark)
    total = 0
    for line in board.winning_lines():
        marks = [board.cells[index] for index in line]
        own, theirs = marks.count(mark), marks.count(other)
        if theirs == 0:
            total += own * own
        elif own == 0:
            total -= theirs * theirs
    return total


def evaluate(board: Board, mark: Mark) -> float:
    """Line pressure scaled into (-1, 1).

    A line only reaches n^2 when it is complete, which means the board is already won,
    so for every unfinished board the result stays strictly inside the interval.
    """
    lines = board.winning_lines()
    return line_pressure(board, mark) / (len(lines) * board.size * board.size)
