"""
Type definitions used across layers
"""

from enum import StrEnum


class PlayerKind(StrEnum):
    HUMAN = "human"
    AUTOMATED = "automated"


class PlayMode(StrEnum):
    """Who the first player is up against."""

    COMPUTER = "computer"
    HUMAN = "human"
