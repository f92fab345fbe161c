"""
Error taxonomy shared by all layers.

All of these signal a broken caller contract. The domain raises them and never retries;
the outer layer (CLI) decides whether to re-prompt or to abort.
"""


class GameError(Exception):
    """Base class for every error raised by the game."""


# --- BOARD ---
class InvalidSizeError(GameError):
    """Grid side must be a positive integer."""


class IndexOutOfRangeError(GameError):
    """Cell index outside [0, n*n)."""


class CellOccupiedError(GameError):
    """Attempted to place a mark on a cell that is not empty."""


class InvalidMarkError(GameError):
    """Only X and O can be placed on the board or held by a player."""


class InvalidNotationError(GameError):
    """Text could not be parsed into a board or a move."""


# --- SEARCH ---
class InvalidMoverError(GameError):
    """The search was bound to a player whose mark is not the next one to move on that board."""


class NoLegalMoveError(GameError):
    """Search requested on a board that is already won or full."""


# --- GAME ---
class GameStateError(GameError):
    """Action not allowed in the current state of the game."""


class NotYourTurnError(GameError):
    """Player tried to move while it is the opponent's turn."""
