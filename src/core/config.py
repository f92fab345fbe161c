"""
Settings for setting up a game, and the logging setup.

Values come from (later wins):
1. the defaults below
2. the `[game]` table of a TOML file
3. TICTACTOE_* environment variables (quick overrides for grid size, search depth and log level)
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Self

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import GameStateError, InvalidSizeError
from src.core.shared_types import PlayMode

DEFAULT_CONFIG_PATH = Path("tictactoe.toml")
ENV_PREFIX = "TICTACTOE_"
ENV_OVERRIDES = ("grid_size", "search_depth", "log_level")

DEFAULT_COMPUTER_NAME = "Computer"
DEFAULT_SECOND_PLAYER_NAME = "PlayerTwo"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


class GameSettings(BaseModel):
    grid_size: int = 3
    mode: PlayMode = PlayMode.COMPUTER
    player_name: str = "UserPlayer"
    opponent_name: Optional[str] = None
    human_first: bool = True
    search_depth: Optional[int] = None
    log_level: str = "WARNING"

    @field_validator("grid_size")
    @classmethod
    def validate_grid_size(cls, value: int) -> int:
        if value < 1:
            raise InvalidSizeError(f"Grid size must be at least 1, got {value}.")
        return value

    @field_validator("search_depth")
    @classmethod
    def validate_search_depth(cls, value: Optional[int]) -> Optional[int]:
        """A depth of zero (or less) means the same as not setting one: search until the game ends."""
        if value is None or value <= 0:
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def validate_distinct_names(self) -> Self:
        if self.player_name == self.resolved_opponent_name:
            raise GameStateError(
                f"Both players are called {self.player_name!r}. Pick different names."
            )
        return self

    @property
    def resolved_opponent_name(self) -> str:
        """The opponent name, falling back to a default that depends on the mode."""
        if self.opponent_name:
            return self.opponent_name
        if self.mode == PlayMode.COMPUTER:
            return DEFAULT_COMPUTER_NAME
        return DEFAULT_SECOND_PLAYER_NAME


def load_settings(
    path: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> GameSettings:
    """Merge file, environment and explicit overrides (ex. from the command line) into validated settings.

    ---
    NOTE a missing file is only an error when the path was asked for explicitly.
    Overrides with value None are ignored, so unset command line flags do not clobber the file.
    """
    raw: dict[str, Any] = {}

    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if path is not None or config_path.exists():
        with config_path.open("rb") as f:
            raw.update(tomllib.load(f).get("game", {}))
        logger.debug("Loaded settings from %s", config_path)

    env = os.environ if environ is None else environ
    for name in ENV_OVERRIDES:
        value = env.get(f"{ENV_PREFIX}{name.upper()}")
        if value:
            raw[name] = value

    raw.update({key: value for key, value in overrides.items() if value is not None})
    return GameSettings.model_validate(raw)


def configure_logging(level: str = "WARNING") -> None:
    """Called once by the entrypoint. Library code only creates module level loggers."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
