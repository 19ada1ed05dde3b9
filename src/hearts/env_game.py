"""
Environment wrapper around the Hearts engine for agents.

Design:
- Single-agent view: one learning seat per env instance.
- Episode = one game (until the score limit) or ``max_rounds`` rounds.
- Decision points are the learning seat's card plays. Its passes are chosen by
  the same heuristic the computer seats use.
- Reward is given only at the end of the episode and equals minus the learning
  seat's cumulative score, so fewer penalty points means more reward.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import PLAYER_NAMES, GameConfig
from .deal import NUM_PLAYERS
from .env import NUM_ACTIONS, OBS_SIZE, card_from_index, encode_play_observation, legal_action_mask
from .game import (
    GameState,
    Phase,
    advance,
    confirm_pass,
    new_game,
    play_card,
    select_card_for_pass,
)
from .heuristics import choose_pass_cards
from .scoring import SCORE_LIMIT


@dataclass
class StepResult:
    """Container returned by HeartsEnv.step/reset."""

    obs: np.ndarray
    reward: float
    done: bool
    info: dict
    legal_actions_mask: np.ndarray


class HeartsEnv:
    """
    4-player Hearts environment (single learning seat, heuristic opponents).

    Public API (Gym-like, no external RL dependency):
      - reset() -> StepResult
      - step(action: int) -> StepResult
    """

    def __init__(
        self,
        learning_player: int = 0,
        max_rounds: Optional[int] = None,
        score_limit: int = SCORE_LIMIT,
        rng: Optional[random.Random] = None,
    ) -> None:
        assert 0 <= learning_player < NUM_PLAYERS
        self.learning_player = learning_player
        self.max_rounds = max_rounds
        # Names are seen from the learning seat: "You", then West, North, East in turn order.
        names = tuple(PLAYER_NAMES[(seat - learning_player) % NUM_PLAYERS] for seat in range(NUM_PLAYERS))
        self.config = GameConfig(
            player_names=names,
            human_seat=learning_player,
            score_limit=score_limit,
            ai_delay=0.0,
            trick_display=0.0,
        )
        self.rng = rng or random.Random()
        self._state: Optional[GameState] = None
        self._done: bool = False

    @property
    def state(self) -> GameState:
        assert self._state is not None, "call reset() first"
        return self._state

    # ---- Public API ----

    def reset(self) -> StepResult:
        """Start a new game and return the first decision for the learning seat."""
        self._state = new_game(self.config, self.rng)
        self._done = False
        return self._advance_until_decision()

    def step(self, action: int) -> StepResult:
        """Play the card with index ``action`` for the learning seat."""
        if self._done:
            # Further steps re-emit the terminal state without reward.
            return self._terminal(reward=0.0)
        if not 0 <= action < NUM_ACTIONS:
            raise ValueError(f"Invalid play action {action}")
        card = card_from_index(action)
        if card not in self.state.legal_cards(self.learning_player):
            raise ValueError(f"Chosen card {card} is not a legal move")
        self._state = play_card(self.state, card)
        return self._advance_until_decision()

    # ---- Internal helpers ----

    def _pass_for_learning_seat(self) -> None:
        state = self.state
        for card in choose_pass_cards(state.hand(self.learning_player)):
            state = select_card_for_pass(state, card)
        self._state = confirm_pass(state)

    def _advance_until_decision(self) -> StepResult:
        while True:
            state = self.state
            if state.phase == Phase.GAME_OVER:
                return self._finish()
            if state.phase == Phase.ROUND_END and self.max_rounds is not None:
                if state.round_number >= self.max_rounds:
                    return self._finish()
            if state.phase == Phase.PASSING:
                self._pass_for_learning_seat()
                continue
            if state.phase == Phase.PLAYING and state.current_player == self.learning_player:
                legal = state.legal_cards(self.learning_player)
                return StepResult(
                    obs=encode_play_observation(state, self.learning_player),
                    reward=0.0,
                    done=False,
                    info={
                        "phase": state.phase.value,
                        "round_number": state.round_number,
                        "current_trick_len": len(state.current_trick),
                    },
                    legal_actions_mask=legal_action_mask(legal),
                )
            self._state = advance(state, self.rng)

    def _finish(self) -> StepResult:
        self._done = True
        return self._terminal(reward=-float(self.state.scores[self.learning_player]))

    def _terminal(self, reward: float) -> StepResult:
        state = self.state
        return StepResult(
            obs=np.zeros(OBS_SIZE, dtype=np.float32),
            reward=reward,
            done=True,
            info={
                "phase": "done",
                "totals": tuple(state.scores),
                "rounds_played": state.round_number,
                "winner": state.game_winner,
            },
            legal_actions_mask=np.zeros(NUM_ACTIONS, dtype=bool),
        )


__all__ = ["HeartsEnv", "StepResult"]
