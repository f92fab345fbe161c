"""Unit tests for /src/core/config.py"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.core.config import (
    DEFAULT_COMPUTER_NAME,
    DEFAULT_SECOND_PLAYER_NAME,
    GameSettings,
    load_settings,
)
from src.core.exceptions import GameStateError, InvalidSizeError
from src.core.shared_types import PlayMode

CONFIG_FILE = """
[game]
grid_size = 4
player_name = "Ada"
human_first = false
search_depth = 3
"""


@pytest.fixture
def no_config_around(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty directory, so no tictactoe.toml gets picked up by accident"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "custom.toml"
    path.write_text(CONFIG_FILE)
    return path


# -- Validation - GameSettings --
def test_defaults() -> None:
    settings = GameSettings()
    assert settings.grid_size == 3
    assert settings.mode == PlayMode.COMPUTER
    assert settings.human_first is True
    assert settings.search_depth is None
    assert settings.log_level == "WARNING"
    assert settings.resolved_opponent_name == DEFAULT_COMPUTER_NAME


def test_default_second_player_name() -> None:
    settings = GameSettings(mode=PlayMode.HUMAN)
    assert settings.resolved_opponent_name == DEFAULT_SECOND_PLAYER_NAME


@pytest.mark.parametrize("grid_size", [0, -3])
def test_invalid_grid_size(grid_size: int) -> None:
    with pytest.raises(InvalidSizeError):
        _ = GameSettings(grid_size=grid_size)


@pytest.mark.parametrize("search_depth, expected", [(0, None), (-2, None), (None, None), (3, 3)])
def test_non_positive_depth_means_unbounded(search_depth: int | None, expected: int | None) -> None:
    assert GameSettings(search_depth=search_depth).search_depth == expected


def test_log_level_is_normalised() -> None:
    assert GameSettings(log_level=" debug").log_level == "DEBUG"


def test_unknown_log_level() -> None:
    with pytest.raises(ValidationError):
        _ = GameSettings(log_level="very loud")


def test_same_names_rejected() -> None:
    with pytest.raises(GameStateError):
        _ = GameSettings(mode=PlayMode.HUMAN, player_name="Ada", opponent_name="Ada")


def test_name_clash_with_computer_default() -> None:
    with pytest.raises(GameStateError):
        _ = GameSettings(player_name=DEFAULT_COMPUTER_NAME)


# -- Loading --
def test_load_defaults_without_file(no_config_around: Path) -> None:
    assert load_settings(environ={}) == GameSettings()


def test_load_default_file(no_config_around: Path) -> None:
    (no_config_around / "tictactoe.toml").write_text(CONFIG_FILE)
    settings = load_settings(environ={})
    assert settings.grid_size == 4
    assert settings.player_name == "Ada"


def test_load_from_file(no_config_around: Path, config_file: Path) -> None:
    settings = load_settings(config_file, environ={})
    assert settings.grid_size == 4
    assert settings.player_name == "Ada"
    assert settings.human_first is False
    assert settings.search_depth == 3


def test_missing_explicit_file(no_config_around: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = load_settings(no_config_around / "nope.toml", environ={})


def test_environment_overrides_file(no_config_around: Path, config_file: Path) -> None:
    environ = {
        "TICTACTOE_GRID_SIZE": "5",
        "TICTACTOE_SEARCH_DEPTH": "0",
        "TICTACTOE_LOG_LEVEL": "info",
        "TICTACTOE_PLAYER_NAME": "ignored",
    }
    settings = load_settings(config_file, environ=environ)
    assert settings.grid_size == 5
    assert settings.search_depth is None
    assert settings.log_level == "INFO"
    assert settings.player_name == "Ada"


def test_overrides_win(no_config_around: Path, config_file: Path) -> None:
    """Explicit overrides beat file and environment. None means: not given."""
    settings = load_settings(
        config_file,
        environ={"TICTACTOE_GRID_SIZE": "5"},
        grid_size=6,
        player_name=None,
    )
    assert settings.grid_size == 6
    assert settings.player_name == "Ada"


def test_invalid_environment_value(no_config_around: Path) -> None:
    with pytest.raises(InvalidSizeError):
        _ = load_settings(environ={"TICTACTOE_GRID_SIZE": "0"})
