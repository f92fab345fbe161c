"""
The Game is the entrypoint into the domain layer for whatever drives it (the CLI, a test, ...).
It owns the live board and the two players, checks whose turn it is, and asks the search for
the move of an automated player. How a human's move is obtained is not its business.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.config import GameSettings
from src.core.exceptions import GameStateError, NotYourTurnError
from src.core.shared_types import PlayMode
from src.tictactoe.board import Board, Outcome
from src.tictactoe.marks import Mark
from src.tictactoe.moves import Move
from src.tictactoe.participant import DEFAULT_AUTOMATED_NAME, Participant
from src.tictactoe.search import SearchEngine

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "UserPlayer"


@dataclass
class Game:
    board: Board
    players: tuple[Participant, Participant]
    search_depth: Optional[int] = None
    moves: list[Move] = field(default_factory=list)

    def __post_init__(self):
        first, second = self.players
        if first.name == second.name:
            raise GameStateError(
                f"Both players are called {first.name!r}. Pick different names."
            )
        if (first.mark, second.mark) != (Mark.X, Mark.O):
            raise GameStateError("The first player plays X, the second player plays O.")
        if self.board.next_mark() is None:
            raise GameStateError(
                f"Cannot continue on {self.board.to_string()!r}: X and O did not take turns."
            )

    # --- CREATION LOGIC ---
    @classmethod
    def against_computer(
        cls,
        player_name: str = DEFAULT_PLAYER_NAME,
        grid_size: int = 3,
        human_first: bool = True,
        search_depth: Optional[int] = None,
        computer_name: str = DEFAULT_AUTOMATED_NAME,
    ) -> Self:
        """A person against the search. Whoever goes first plays X."""
        if human_first:
            players = (
                Participant.human(player_name, Mark.X),
                Participant.automated(Mark.O, computer_name),
            )
        else:
            players = (
                Participant.automated(Mark.X, computer_name),
                Participant.human(player_name, Mark.O),
            )
        return cls(Board.create(grid_size), players, search_depth)

    @classmethod
    def two_players(
        cls, first_name: str, second_name: str, grid_size: int = 3
    ) -> Self:
        return cls(
            Board.create(grid_size),
            (Participant.human(first_name, Mark.X), Participant.human(second_name, Mark.O)),
        )

    @classmethod
    def from_settings(cls, settings: GameSettings) -> Self:
        if settings.mode == PlayMode.HUMAN:
            return cls.two_players(
                settings.player_name, settings.resolved_opponent_name, settings.grid_size
            )
        return cls.against_computer(
            player_name=settings.player_name,
            grid_size=settings.grid_size,
            human_first=settings.human_first,
            search_depth=settings.search_depth,
            computer_name=settings.resolved_opponent_name,
        )

    # --- STATE ---
    @property
    def current_player(self) -> Participant:
        """The player whose mark the board expects next. X starts, then the marks alternate."""
        next_mark = self.board.next_mark()
        return next(player for player in self.players if player.mark == next_mark)

    @property
    def outcome(self) -> Outcome:
        return self.board.evaluate_outcome()

    @property
    def is_over(self) -> bool:
        return self.outcome.is_terminal

    @property
    def winner(self) -> Optional[Participant]:
        winning_mark = self.outcome.winner
        if winning_mark is None:
            return None
        return next(player for player in self.players if player.mark == winning_mark)

    def legal_moves(self) -> list[int]:
        if self.is_over:
            return []
        return self.board.empty_indices()

    # --- PLAYING ---
    def make_move(self, index: int, player: str) -> Move:
        """
        Attempt to place the player's mark on cell `index`
        -----

        1. the game must still be in progress
        2. it must be this player's turn
        3. the board must accept the move (in range, empty). Otherwise its error is passed on and nothing changes.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        return self._apply(Move(index, self.current_player.mark))

    def play_automated_turn(self) -> Move:
        """Let the search choose and play the move of the current (automated) player."""
        self._assert_in_progress()
        mover = self.current_player
        if not mover.is_automated:
            raise GameStateError(f"{mover.name} is not an automated player.")
        move = self._search(mover).best_move()
        return self._apply(move)

    def suggest_move(self) -> Move:
        """What the search would play for the current player. Does not change the game."""
        self._assert_in_progress()
        return self._search(self.current_player).best_move()

    def transcript(self) -> str:
        return " ".join(move.to_notation() for move in self.moves)

    def replay(self, transcript: str) -> list[Move]:
        """
        Play the moves of a transcript such as 'X1 O5 X9', in order, whoever the players are.
        -----

        Each move must carry the mark of the player to move (NotYourTurnError otherwise).
        Unreadable entries raise InvalidNotationError, board errors are passed on.
        Moves before the failing one stay played.
        """
        played = []
        for notation in transcript.split():
            self._assert_in_progress()
            move = Move.from_notation(notation)
            player = self.current_player
            if move.mark != player.mark:
                raise NotYourTurnError(
                    f"{notation} is out of turn: {player.name} plays {player.mark.value} next."
                )
            played.append(self._apply(move))
        return played

    # -- PRIVATE HELPERS ---
    def _search(self, mover: Participant) -> SearchEngine:
        return SearchEngine(self.board, mover, self.search_depth)

    def _apply(self, move: Move) -> Move:
        mover = self.current_player
        self.board = self.board.apply_move(move)
        self.moves.append(move)
        logger.info("%s played %s", mover.name, move.to_notation())

        if self.is_over:
            self._log_result()
        return move

    def _log_result(self) -> None:
        winner = self.winner
        if winner is None:
            logger.info("Game drawn after %d moves", len(self.moves))
        else:
            logger.info("%s won after %d moves", winner.name, len(self.moves))

    def _assert_in_progress(self) -> None:
        if self.is_over:
            raise GameStateError(
                f"Game is over ({self.outcome.kind.name.lower()}). No more moves allowed."
            )

    def _assert_your_turn(self, player: str) -> None:
        player_to_move = self.current_player.name
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )
