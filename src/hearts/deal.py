"""
Distribution (deal) and card passing for 4 players.
Deal: the shuffled pack goes round-robin, card i to seat i mod 4, 13 each.
Passing rotates left, right, across, hold with the round number.
"""
from __future__ import annotations

import random
from enum import Enum
from typing import NamedTuple, Sequence

from .deck import Card, RandomSource, make_deck_52, shuffle, sort_hand

NUM_PLAYERS = 4
HAND_SIZE = 13
PASS_SIZE = 3


class PassDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    ACROSS = "across"
    HOLD = "hold"


# Seat offset of the giver, seen from the receiver: seat i receives from (i + offset) % 4.
_RECEIVE_FROM_OFFSET = {
    PassDirection.LEFT: 1,
    PassDirection.RIGHT: 3,
    PassDirection.ACROSS: 2,
}

_ROTATION = (PassDirection.LEFT, PassDirection.RIGHT, PassDirection.ACROSS, PassDirection.HOLD)


class Deal4P(NamedTuple):
    """Result of a 4-player deal. Each hand is sorted in canonical order."""
    hands: tuple[list[Card], list[Card], list[Card], list[Card]]


def deal_4p(deck: list[Card] | None = None, rng: RandomSource | None = None) -> Deal4P:
    """
    Shuffle ``deck`` (a fresh 52-card deck by default) and deal 13 cards to each seat.
    """
    if deck is None:
        deck = make_deck_52()
    if rng is None:
        rng = random.Random()
    if len(deck) != NUM_PLAYERS * HAND_SIZE:
        raise ValueError(f"Expected a {NUM_PLAYERS * HAND_SIZE}-card deck, got {len(deck)}")
    shuffled = shuffle(deck, rng)

    hands: list[list[Card]] = [[], [], [], []]
    for i, card in enumerate(shuffled):
        hands[i % NUM_PLAYERS].append(card)

    return Deal4P(hands=(
        sort_hand(hands[0]),
        sort_hand(hands[1]),
        sort_hand(hands[2]),
        sort_hand(hands[3]),
    ))


def passing_direction(round_number: int) -> PassDirection:
    """Round 1 passes left, then right, across, hold, and around again."""
    if round_number < 1:
        raise ValueError(f"Round numbers start at 1, got {round_number}")
    return _ROTATION[(round_number - 1) % 4]


def pass_source(seat: int, direction: PassDirection) -> int | None:
    """Seat whose passed cards ``seat`` receives, or None when holding."""
    if direction == PassDirection.HOLD:
        return None
    return (seat + _RECEIVE_FROM_OFFSET[direction]) % NUM_PLAYERS


def pass_target(seat: int, direction: PassDirection) -> int | None:
    """Seat that receives the cards ``seat`` passes, or None when holding."""
    if direction == PassDirection.HOLD:
        return None
    return (seat - _RECEIVE_FROM_OFFSET[direction]) % NUM_PLAYERS


def exchange_passes(
    hands: Sequence[Sequence[Card]],
    passes: Sequence[Sequence[Card]],
    direction: PassDirection,
) -> list[list[Card]]:
    """
    Remove each seat's passed cards and hand them to the receiving seat.
    Returns four new sorted hands; the inputs are not modified.
    """
    if direction == PassDirection.HOLD:
        return [sort_hand(h) for h in hands]
    kept: list[list[Card]] = []
    for seat in range(NUM_PLAYERS):
        given = set(passes[seat])
        if len(given) != PASS_SIZE or not given.issubset(hands[seat]):
            raise ValueError(f"Seat {seat} must pass {PASS_SIZE} cards from its own hand")
        kept.append([c for c in hands[seat] if c not in given])
    result: list[list[Card]] = []
    for seat in range(NUM_PLAYERS):
        giver = pass_source(seat, direction)
        assert giver is not None
        result.append(sort_hand(kept[seat] + list(passes[giver])))
    return result


def holder_of(hands: Sequence[Sequence[Card]], card: Card) -> int:
    """Seat holding ``card``."""
    for seat, hand in enumerate(hands):
        if card in hand:
            return seat
    raise ValueError(f"Card {card} is not in any hand")
