"""
Observation / action encoding for Hearts agents.

Flat observations describe what one seat can see during play:
- its own hand, card-by-card;
- the cards on the table;
- every card already gathered in completed tricks this round;
- seat, led suit, hearts-broken flag and round points so far.

Actions are card indices 0..51, one per card of the deck.
"""
from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from .deck import RANKS, Card, Suit
from .game import GameState
from .play import TOTAL_POINTS

NUM_CARDS: int = 52
NUM_ACTIONS: int = NUM_CARDS
OBS_SIZE: int = 3 * NUM_CARDS + 4 + 4 + 1 + 4  # 169

# Offsets into the play observation.
HAND_SLICE = slice(0, NUM_CARDS)
TRICK_SLICE = slice(NUM_CARDS, 2 * NUM_CARDS)
GATHERED_SLICE = slice(2 * NUM_CARDS, 3 * NUM_CARDS)
SEAT_SLICE = slice(3 * NUM_CARDS, 3 * NUM_CARDS + 4)
LEAD_SLICE = slice(3 * NUM_CARDS + 4, 3 * NUM_CARDS + 8)
HEARTS_BROKEN_INDEX = 3 * NUM_CARDS + 8


def _one_hot(index: int | None, size: int) -> np.ndarray:
    vec = np.zeros(size, dtype=np.float32)
    if index is not None and 0 <= index < size:
        vec[index] = 1.0
    return vec


def card_index(card: Card) -> int:
    """
    Stable index 0..51 matching make_deck_52(): suit-major (Clubs, Diamonds,
    Spades, Hearts), then rank 2..Ace.
    """
    return int(card.suit) * len(RANKS) + (card.rank - 2)


def card_from_index(index: int) -> Card:
    if not 0 <= index < NUM_CARDS:
        raise ValueError(f"Invalid card index {index}")
    suit, offset = divmod(index, len(RANKS))
    return Card(Suit(suit), offset + 2)


def encode_card_set(cards: Iterable[Card]) -> np.ndarray:
    """Binary 52-dim vector: 1.0 where the card is present."""
    vec = np.zeros(NUM_CARDS, dtype=np.float32)
    for c in cards:
        vec[card_index(c)] = 1.0
    return vec


def decode_card_set(vec: Sequence[float]) -> list[Card]:
    """Inverse of encode_card_set: cards whose entry is non-zero, in deck order."""
    return [card_from_index(i) for i, v in enumerate(vec) if v]


def encode_play_observation(state: GameState, player_index: int) -> np.ndarray:
    """
    Play-phase observation for ``player_index`` (shape ``(OBS_SIZE,)``, float32):

    - [0:52)    : own hand
    - [52:104)  : current trick
    - [104:156) : cards in completed tricks (all seats)
    - 4 dims    : seat one-hot
    - 4 dims    : led suit one-hot (zeros when leading)
    - 1 dim     : hearts broken
    - 4 dims    : round points per seat, scaled by 1/26
    """
    gathered = [c for p in state.players for c in p.tricks_taken]
    lead = int(state.lead_suit) if state.lead_suit is not None else None
    parts = [
        encode_card_set(state.hand(player_index)),
        encode_card_set(c for _, c in state.current_trick),
        encode_card_set(gathered),
        _one_hot(player_index, 4),
        _one_hot(lead, 4),
        np.array([1.0 if state.hearts_broken else 0.0], dtype=np.float32),
        np.asarray(state.round_scores, dtype=np.float32) / TOTAL_POINTS,
    ]
    obs = np.concatenate(parts)
    assert obs.shape == (OBS_SIZE,)
    return obs


def legal_action_mask(legal_cards: Sequence[Card]) -> np.ndarray:
    """Boolean mask over the 52 card actions; True for each legal card."""
    mask = np.zeros(NUM_ACTIONS, dtype=bool)
    for c in legal_cards:
        mask[card_index(c)] = True
    return mask


__all__ = [
    "NUM_CARDS",
    "NUM_ACTIONS",
    "OBS_SIZE",
    "card_index",
    "card_from_index",
    "encode_card_set",
    "decode_card_set",
    "encode_play_observation",
    "legal_action_mask",
]
