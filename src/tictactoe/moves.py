"""A move places one mark on one cell. Nothing more."""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import InvalidMarkError, InvalidNotationError
from src.tictactoe.marks import PLAYER_MARKS, SYMBOL_TO_MARK, Mark


@dataclass(frozen=True)
class Move:
    index: int
    mark: Mark

    def __post_init__(self):
        if self.mark not in PLAYER_MARKS:
            raise InvalidMarkError(f"Cannot place {self.mark} on the board.")

    def row(self, size: int) -> int:
        """Cells are numbered row by row: index = row * size + column"""
        return self.index // size

    def column(self, size: int) -> int:
        return self.index % size

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """'X5' means: X on the fifth cell. Cell numbers in the notation start at 1, like the terminal shows them."""
        symbol, number = notation[:1].upper(), notation[1:]
        if symbol not in SYMBOL_TO_MARK or not number.isdecimal():
            raise InvalidNotationError(f"Cannot interpret {notation!r} as a move.")
        return cls(int(number) - 1, SYMBOL_TO_MARK[symbol])

    def to_notation(self) -> str:
        return f"{self.mark.value}{self.index + 1}"
