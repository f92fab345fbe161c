"""The marks that can occupy a cell on the grid"""

from enum import Enum

from src.core.exceptions import InvalidMarkError


class Mark(Enum):
    """Cell states. Values are the symbols used in the board notation (and when printing the grid)."""

    EMPTY = "-"
    X = "X"
    O = "O"


# X always makes the first move of a match
PLAYER_MARKS: tuple[Mark, Mark] = (Mark.X, Mark.O)

SYMBOL_TO_MARK: dict[str, Mark] = {mark.value: mark for mark in Mark}

_OPPONENT: dict[Mark, Mark] = {Mark.X: Mark.O, Mark.O: Mark.X}


def opponent(mark: Mark) -> Mark:
    """The other player's mark. EMPTY has no opponent."""
    if mark not in _OPPONENT:
        raise InvalidMarkError(f"{mark} is not a player's mark.")
    return _OPPONENT[mark]
