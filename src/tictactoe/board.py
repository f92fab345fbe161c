"""The Board holds the N x N grid and implements all rules that depend only on the grid: legal placement, wins and draws."""

from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import Optional, Self

from src.core.exceptions import (
    CellOccupiedError,
    IndexOutOfRangeError,
    InvalidNotationError,
    InvalidSizeError,
)
from src.tictactoe.marks import PLAYER_MARKS, SYMBOL_TO_MARK, Mark
from src.tictactoe.moves import Move

ROW_SEPARATOR = "/"

# A line is the sequence of cell indices that must all hold the same mark to win
Line = tuple[int, ...]


class OutcomeKind(Enum):
    IN_PROGRESS = auto()
    WIN = auto()
    DRAW = auto()


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    winner: Optional[Mark] = None

    @classmethod
    def in_progress(cls) -> Self:
        return cls(OutcomeKind.IN_PROGRESS)

    @classmethod
    def win(cls, mark: Mark) -> Self:
        return cls(OutcomeKind.WIN, mark)

    @classmethod
    def draw(cls) -> Self:
        return cls(OutcomeKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS


@lru_cache(maxsize=None)
def winning_lines(size: int) -> tuple[Line, ...]:
    """
    All lines of an N x N grid: N rows, N columns and the two main diagonals.

    NOTE: only the two full-length diagonals count. Shorter diagonals never win, whatever the grid size.
    """
    rows = [tuple(range(row * size, (row + 1) * size)) for row in range(size)]
    columns = [tuple(range(column, size * size, size)) for column in range(size)]
    diagonal = tuple(row * size + row for row in range(size))
    anti_diagonal = tuple(row * size + (size - 1 - row) for row in range(size))
    return tuple(rows + columns + [diagonal, anti_diagonal])


@dataclass(frozen=True)
class Board:
    """
    Immutable grid. Placing a mark returns a new Board, so a board handed to the search
    can never be changed behind the back of whoever owns the game (and vice versa).

    Cell `i` sits on row `i // size`, column `i % size`.
    """

    size: int
    cells: tuple[Mark, ...]

    def __post_init__(self):
        if self.size < 1:
            raise InvalidSizeError(f"Board side must be at least 1, got {self.size}.")
        if len(self.cells) != self.size * self.size:
            raise InvalidSizeError(
                f"A board of side {self.size} needs {self.size * self.size} cells, got {len(self.cells)}."
            )

    # -- CREATION LOGIC ---
    @classmethod
    def create(cls, size: int) -> Self:
        """Empty board of side `size`."""
        if size < 1:
            raise InvalidSizeError(f"Board side must be at least 1, got {size}.")
        return cls(size, (Mark.EMPTY,) * (size * size))

    @classmethod
    def from_string(cls, text: str) -> Self:
        """Construct a board from its text notation.

        Rows are listed top to bottom and separated by slashes, one symbol per cell:
        XO-/-X-/--O
        means:
        * X in the top-left corner, O next to it, top-right corner empty
        * X in the center
        * O in the bottom-right corner
        """
        rows = text.strip().split(ROW_SEPARATOR)
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise InvalidSizeError(f"Rows of {text!r} do not form a square grid.")

        cells: list[Mark] = []
        for row in rows:
            for symbol in row.upper():
                if symbol not in SYMBOL_TO_MARK:
                    raise InvalidNotationError(
                        f"Unknown symbol {symbol!r} in {text!r}. Use one of {''.join(SYMBOL_TO_MARK)}."
                    )
                cells.append(SYMBOL_TO_MARK[symbol])
        return cls(size, tuple(cells))

    def to_string(self) -> str:
        return ROW_SEPARATOR.join(
            "".join(mark.value for mark in self._row(row)) for row in range(self.size)
        )

    # -- QUERIES ---
    def cell_count(self) -> int:
        return self.size * self.size

    def mark_at(self, index: int) -> Mark:
        self._assert_in_range(index)
        return self.cells[index]

    def is_empty_at(self, index: int) -> bool:
        return self.mark_at(index) == Mark.EMPTY

    def first_empty_index(self) -> Optional[int]:
        """Lowest empty cell, None if the board is full. Only a place to start scanning, not the only legal choice."""
        return next(
            (index for index, mark in enumerate(self.cells) if mark == Mark.EMPTY),
            None,
        )

    def empty_indices(self) -> list[int]:
        return [index for index, mark in enumerate(self.cells) if mark == Mark.EMPTY]

    def is_full(self) -> bool:
        return Mark.EMPTY not in self.cells

    def count(self, mark: Mark) -> int:
        return self.cells.count(mark)

    def next_mark(self) -> Optional[Mark]:
        """
        The mark that moves next, given that X always starts and players alternate.
        None if the counts could not have come from alternating play.
        """
        x_count, o_count = (self.count(mark) for mark in PLAYER_MARKS)
        if x_count == o_count:
            return Mark.X
        if x_count == o_count + 1:
            return Mark.O
        return None

    # -- PLACING MARKS ---
    def apply_move(self, move: Move) -> Self:
        """New board with the move's mark on the target cell. This board stays as it is, also when the move is refused."""
        if not self.is_empty_at(move.index):
            raise CellOccupiedError(
                f"Cell {move.index} already holds {self.cells[move.index].value}."
            )
        cells = list(self.cells)
        cells[move.index] = move.mark
        return type(self)(self.size, tuple(cells))

    # -- END OF GAME ---
    def winning_lines(self) -> tuple[Line, ...]:
        return winning_lines(self.size)

    def winner(self) -> Optional[Mark]:
        """
        Mark that fills an entire line, if any.

        NOTE: two different winners cannot happen under alternating play. If a hand-made board has them anyway,
        the first completed line (rows, then columns, then diagonals) decides.
        """
        for line in self.winning_lines():
            first = self.cells[line[0]]
            if first != Mark.EMPTY and all(self.cells[index] == first for index in line):
                return first
        return None

    def evaluate_outcome(self) -> Outcome:
        winner = self.winner()
        if winner is not None:
            return Outcome.win(winner)
        if self.is_full():
            return Outcome.draw()
        return Outcome.in_progress()

    def render(self) -> str:
        """Plain text grid, one row per line."""
        return "\n".join(
            " ".join(mark.value for mark in self._row(row)) for row in range(self.size)
        )

    # -- PRIVATE HELPERS ---
    def _row(self, row: int) -> tuple[Mark, ...]:
        return self.cells[row * self.size : (row + 1) * self.size]

    def _assert_in_range(self, index: int) -> None:
        if not 0 <= index < self.cell_count():
            raise IndexOutOfRangeError(
                f"Cell {index} is not on the board. Pick one in [0, {self.cell_count()})."
            )
