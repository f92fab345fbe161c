"""Who is playing: a name, a mark, and whether moves come from a person or from the search."""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import InvalidMarkError
from src.core.shared_types import PlayerKind
from src.tictactoe.marks import PLAYER_MARKS, Mark

DEFAULT_AUTOMATED_NAME = "Computer"


@dataclass(frozen=True)
class Participant:
    name: str
    mark: Mark
    kind: PlayerKind = PlayerKind.HUMAN

    def __post_init__(self):
        if self.mark not in PLAYER_MARKS:
            raise InvalidMarkError(
                f"{self.name} must play with one of {', '.join(m.value for m in PLAYER_MARKS)}."
            )

    @classmethod
    def human(cls, name: str, mark: Mark) -> Self:
        return cls(name, mark, PlayerKind.HUMAN)

    @classmethod
    def automated(cls, mark: Mark, name: str = DEFAULT_AUTOMATED_NAME) -> Self:
        return cls(name, mark, PlayerKind.AUTOMATED)

    @property
    def is_automated(self) -> bool:
        return self.kind == PlayerKind.AUTOMATED

    def __str__(self) -> str:
        return f"{self.name} ({self.mark.value}, {self.kind})"
