"""
Baseline agents and the generic policy interface.

The ``Policy`` protocol is the contract used by environment runners:
``act(obs, legal_actions_mask) -> action_index`` where the action is a card
index (see ``hearts.env.card_index``).

- ``RandomAgent`` samples uniformly among legal cards.
- ``HeuristicAgent`` rebuilds the table from the observation and applies the
  same lead / follow / discard rules as the computer seats.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Protocol, Sequence

from .deck import Suit
from .env import HEARTS_BROKEN_INDEX, LEAD_SLICE, TRICK_SLICE, card_index, decode_card_set
from .heuristics import choose_discard, choose_follow, choose_lead


class Policy(Protocol):
    """Stateless or stateful decision policy working on flat observations."""

    def act(self, obs: Sequence[float], legal_actions_mask: Iterable[bool]) -> int:
        """
        Choose a card index given an observation and a boolean legal-action mask.

        Implementations must only return indices where ``legal_actions_mask[i]`` is true.
        """


def _legal_indices(legal_actions_mask: Iterable[bool]) -> List[int]:
    return [i for i, ok in enumerate(legal_actions_mask) if ok]


@dataclass
class RandomAgent:
    """
    Picks a random legal card.

    Usage:
        agent = RandomAgent(seed=42)
        action = agent.act(step.obs, step.legal_actions_mask)
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def act(self, obs: Sequence[float], legal_actions_mask: Iterable[bool]) -> int:
        legal = _legal_indices(legal_actions_mask)
        if not legal:
            raise ValueError("No legal actions available for RandomAgent")
        return self._rng.choice(legal)


class HeuristicAgent:
    """Rule-based player working from the play observation alone."""

    def act(self, obs: Sequence[float], legal_actions_mask: Iterable[bool]) -> int:
        mask = list(legal_actions_mask)
        legal = decode_card_set(mask)
        if not legal:
            raise ValueError("No legal actions available for HeuristicAgent")

        on_table = decode_card_set(list(obs[TRICK_SLICE]))
        lead_bits = list(obs[LEAD_SLICE])
        card = None
        if not on_table:
            card = choose_lead(legal, bool(obs[HEARTS_BROKEN_INDEX]))
        elif any(lead_bits):
            lead_suit = Suit(lead_bits.index(max(lead_bits)))
            # Play order is not part of the observation; only the winning rank matters here.
            trick = list(enumerate(on_table))
            card = choose_follow(legal, trick, lead_suit) or choose_discard(legal)
        if card is None:
            card = min(legal, key=lambda c: c.rank)
        return card_index(card)


__all__ = ["Policy", "RandomAgent", "HeuristicAgent"]
