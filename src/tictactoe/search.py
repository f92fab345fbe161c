"""
Adversarial search: pick the move for the player to move, assuming the opponent replies perfectly.

Scores are always from the point of view of the side to move (negamax):
* won board: +W, lost board: -W, drawn board: 0, with W = number of cells + 1
* board at the depth limit: the evaluator's guess, strictly inside (-1, 1)

Every ply a result is passed up, a win or loss moves one point closer to zero. Their sign never changes
(W is larger than the number of plies a game can last), so a win still beats a draw and a draw still
beats a loss, but a quick win beats a slow one and a slow loss beats a quick one.
"""

import logging
from functools import lru_cache
from typing import Optional

from src.core.exceptions import InvalidMoverError, NoLegalMoveError
from src.tictactoe.board import Board, OutcomeKind
from src.tictactoe.heuristic import Evaluator, evaluate
from src.tictactoe.marks import Mark, opponent
from src.tictactoe.moves import Move
from src.tictactoe.participant import Participant

logger = logging.getLogger(__name__)

CACHE_SIZE = 2**20


class SearchEngine:
    """
    Built fresh for every decision, over the board as it is at that moment.

    The board is an immutable value, so the engine owns its own snapshot by construction.
    Successor boards are created internally while exploring.
    """

    def __init__(
        self,
        board: Board,
        mover: Participant,
        max_depth: Optional[int] = None,
        evaluator: Evaluator = evaluate,
    ) -> None:
        next_mark = board.next_mark()
        if mover.mark != next_mark:
            expected = next_mark.value if next_mark else "nobody"
            raise InvalidMoverError(
                f"{mover.name} plays {mover.mark.value}, but on this board {expected} moves next."
            )
        self.board = board
        self.mover = mover
        self.max_depth = effective_depth(board, max_depth)
        self.evaluator = evaluator

    def best_move(self) -> Move:
        """
        Highest scoring move. Equal scores go to the lowest cell index.
        """
        scores = self.score_moves()
        # max keeps the first of equal scores
        best_index = max(sorted(scores), key=scores.__getitem__)

        logger.debug(
            "%s picks cell %d (score %.3f, depth %s, %s)",
            self.mover.name,
            best_index,
            scores[best_index],
            self.max_depth or "unbounded",
            _negamax.cache_info(),
        )
        return Move(best_index, self.mover.mark)

    def score_moves(self) -> dict[int, float]:
        """Score of every empty cell, from the mover's point of view."""
        if self.board.evaluate_outcome().is_terminal:
            raise NoLegalMoveError(
                f"No move left to make on {self.board.to_string()!r}: the game is over."
            )

        child_depth = None if self.max_depth is None else self.max_depth - 1
        other = opponent(self.mover.mark)
        return {
            index: -_negamax(
                self.board.apply_move(Move(index, self.mover.mark)),
                other,
                child_depth,
                self.evaluator,
            )
            for index in self.board.empty_indices()
        }


def effective_depth(board: Board, max_depth: Optional[int]) -> Optional[int]:
    """
    The depth bound that is actually used. None means: search until every line of play has ended.

    A missing or non-positive bound is no bound. A bound reaching the number of empty cells
    cannot cut anything off, so it is dropped as well.
    """
    if max_depth is None or max_depth <= 0:
        return None
    if max_depth >= len(board.empty_indices()):
        return None
    return max_depth


@lru_cache(maxsize=CACHE_SIZE)
def _negamax(
    board: Board, to_move: Mark, depth: Optional[int], evaluator: Evaluator
) -> float:
    """
    Value of the board for `to_move`.

    Cached: the value only depends on the arguments, which are all immutable.
    """
    outcome = board.evaluate_outcome()
    if outcome.kind == OutcomeKind.WIN:
        win_score = board.cell_count() + 1
        return win_score if outcome.winner == to_move else -win_score
    if outcome.kind == OutcomeKind.DRAW:
        return 0.0
    if depth == 0:
        return evaluator(board, to_move)

    next_depth = None if depth is None else depth - 1
    other = opponent(to_move)
    best = max(
        -_negamax(board.apply_move(Move(index, to_move)), other, next_depth, evaluator)
        for index in board.empty_indices()
    )
    return _one_ply_further(best)


def _one_ply_further(score: float) -> float:
    """Wins and losses lose one point of weight per ply. Guesses (always below 1 in size) are left alone."""
    if score >= 1:
        return score - 1
    if score <= -1:
        return score + 1
    return score
