"""
Terminal front end. Reads the setup, prints the grid and runs the turn loop.

All game rules live in the domain layer: this module only asks for input and reports.
"""

import argparse
import logging
import sys
import tomllib
from typing import Callable, Optional

from pydantic import ValidationError

from src.core.config import configure_logging, load_settings
from src.core.exceptions import CellOccupiedError, GameError, IndexOutOfRangeError
from src.core.shared_types import PlayMode
from src.tictactoe.board import Outcome
from src.tictactoe.game import Game
from src.tictactoe.participant import Participant

logger = logging.getLogger(__name__)

HINT_COMMANDS = ("h", "hint")
# larger grids cannot be searched to the end in reasonable time
EXHAUSTIVE_SEARCH_MAX_SIZE = 3

Reader = Callable[[str], str]
Writer = Callable[[str], None]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tictactoe", description="Tic-tac-toe on an N x N grid"
    )
    parser.add_argument("--config", default=None, help="TOML file with a [game] table")
    parser.add_argument("--size", type=int, default=None, help="Side of the grid (default: 3)")
    parser.add_argument("--name", default=None, help="Your name")
    parser.add_argument("--opponent", default=None, help="Name of your opponent")
    parser.add_argument(
        "--two-players",
        dest="mode",
        action="store_const",
        const=PlayMode.HUMAN,
        default=None,
        help="Play against another person instead of the computer",
    )
    parser.add_argument(
        "--second",
        dest="human_first",
        action="store_const",
        const=False,
        default=None,
        help="Let the computer make the first move",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Limit the computer's search to this many half-moves (default: search to the end)",
    )
    parser.add_argument(
        "--opening",
        default=None,
        help="Moves to play before the game starts, e.g. \"X5 O1\" (cells numbered from 1)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(
            args.config,
            grid_size=args.size,
            player_name=args.name,
            opponent_name=args.opponent,
            mode=args.mode,
            human_first=args.human_first,
            search_depth=args.depth,
            log_level="DEBUG" if args.verbose else None,
        )
        game = Game.from_settings(settings)
        if args.opening:
            game.replay(args.opening)
    except (GameError, ValidationError, OSError, tomllib.TOMLDecodeError) as exc:
        print(f"Cannot set up the game: {exc}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)
    if (
        settings.mode == PlayMode.COMPUTER
        and settings.grid_size > EXHAUSTIVE_SEARCH_MAX_SIZE
        and settings.search_depth is None
    ):
        logger.warning(
            "The computer searches a %dx%d grid to the end, which can take very long. Use --depth to limit it.",
            settings.grid_size,
            settings.grid_size,
        )
    try:
        play(game)
    except (EOFError, KeyboardInterrupt):
        print("\nGame aborted.")
        return 1
    return 0


def play(game: Game, read: Reader = input, write: Writer = print) -> Outcome:
    """Run turns until the game is won or drawn."""
    write(f"Game on a {game.board.size}x{game.board.size} grid. Cells are numbered:")
    write(cell_numbers(game.board.size))
    for player in game.players:
        write(str(player))

    while not game.is_over:
        write(game.board.render())
        player = game.current_player
        if player.is_automated:
            move = game.play_automated_turn()
            size = game.board.size
            write(
                f"{player.name} marks cell {move.index + 1} "
                f"(row {move.row(size) + 1}, column {move.column(size) + 1})"
            )
        else:
            _human_turn(game, player, read, write)

    write(game.board.render())
    winner = game.winner
    write(f"{winner.name} ({winner.kind}) won!" if winner else "Game drawn!")
    write(f"Moves: {game.transcript()}")
    return game.outcome


def cell_numbers(size: int) -> str:
    """The 1-based numbers a person types to pick a cell, laid out like the grid."""
    width = len(str(size * size))
    return "\n".join(
        " ".join(str(row * size + column + 1).rjust(width) for column in range(size))
        for row in range(size)
    )


def _human_turn(game: Game, player: Participant, read: Reader, write: Writer) -> None:
    """Keep asking until the board accepts a move."""
    cell_count = game.board.cell_count()
    while True:
        answer = read(
            f"Enter the number of the cell you want to mark, {player.name} (1-{cell_count}, 'hint' for a suggestion): "
        ).strip().lower()

        if answer in HINT_COMMANDS:
            write(f"Suggested cell: {game.suggest_move().index + 1}")
            continue
        if not answer.isdecimal():
            write(f"Please enter a number between 1 and {cell_count}.")
            continue

        try:
            game.make_move(int(answer) - 1, player.name)
            return
        except IndexOutOfRangeError:
            write(f"Please enter a number between 1 and {cell_count}.")
        except CellOccupiedError:
            write("Please enter the number of an empty cell.")


if __name__ == "__main__":
    sys.exit(main())
