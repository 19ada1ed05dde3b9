"""Table configuration for a Hearts game."""
from __future__ import annotations

from dataclasses import dataclass

from .deal import NUM_PLAYERS
from .errors import ConfigurationError
from .scoring import SCORE_LIMIT

PLAYER_NAMES: tuple[str, str, str, str] = ("You", "West", "North", "East")


@dataclass(frozen=True)
class GameConfig:
    player_names: tuple[str, ...] = PLAYER_NAMES
    # Seat driven by explicit events; None makes every seat computer-controlled.
    human_seat: int | None = 0
    score_limit: int = SCORE_LIMIT
    # Pacing hints for a presentation layer (seconds). The engine never sleeps.
    ai_delay: float = 1.0
    trick_display: float = 1.5

    def __post_init__(self) -> None:
        object.__setattr__(self, "player_names", tuple(self.player_names))
        if len(self.player_names) != NUM_PLAYERS:
            raise ConfigurationError(f"Hearts needs {NUM_PLAYERS} player names, got {len(self.player_names)}")
        if len(set(self.player_names)) != NUM_PLAYERS:
            raise ConfigurationError("Player names must be unique")
        if self.human_seat is not None and not 0 <= self.human_seat < NUM_PLAYERS:
            raise ConfigurationError(f"human_seat must be in 0..{NUM_PLAYERS - 1} or None")
        if self.score_limit <= 0:
            raise ConfigurationError("score_limit must be positive")
        if self.ai_delay < 0 or self.trick_display < 0:
            raise ConfigurationError("Delays cannot be negative")

    def is_human(self, seat: int) -> bool:
        return self.human_seat is not None and seat == self.human_seat
