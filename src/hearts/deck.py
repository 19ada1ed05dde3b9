"""
Hearts deck: standard 52 cards (4 suits × 13 ranks).
Cards are value objects; equality and hashing come from (suit, rank).
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Protocol


class Suit(IntEnum):
    """Clubs, Diamonds, Spades, Hearts. The value is the canonical hand sort order."""
    CLUBS = 0
    DIAMONDS = 1
    SPADES = 2
    HEARTS = 3

    @property
    def symbol(self) -> str:
        return "♣♦♠♥"[self]

    @property
    def letter(self) -> str:
        return "CDSH"[self]


# Rank in a suit: 2..10, 11=Jack, 12=Queen, 13=King, 14=Ace (highest)
RANK_JACK = 11
RANK_QUEEN = 12
RANK_KING = 13
RANK_ACE = 14
RANKS = tuple(range(2, 15))

_RANK_NAMES = {RANK_JACK: "J", RANK_QUEEN: "Q", RANK_KING: "K", RANK_ACE: "A"}
_RANK_FROM_NAME = {v: k for k, v in _RANK_NAMES.items()}


class RandomSource(Protocol):
    """Anything exposing ``random() -> float`` in [0, 1); ``random.Random`` qualifies."""

    def random(self) -> float:
        ...


@dataclass(frozen=True)
class Card:
    """A single playing card."""

    suit: Suit
    rank: int  # 2..14

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        # Accept plain ints for the suit but store the enum.
        object.__setattr__(self, "suit", Suit(self.suit))

    def is_heart(self) -> bool:
        return self.suit == Suit.HEARTS

    def is_queen_of_spades(self) -> bool:
        return self.suit == Suit.SPADES and self.rank == RANK_QUEEN

    def points(self) -> int:
        """Penalty points carried by this card: 1 per heart, 13 for the Queen of Spades."""
        if self.is_heart():
            return 1
        if self.is_queen_of_spades():
            return 13
        return 0

    @property
    def rank_name(self) -> str:
        return _RANK_NAMES.get(self.rank) or str(self.rank)

    @property
    def code(self) -> str:
        """Plain-ASCII form, e.g. ``QS`` or ``10H``; inverse of :func:`parse_card`."""
        return f"{self.rank_name}{self.suit.letter}"

    def sort_key(self) -> tuple[int, int]:
        return (int(self.suit), self.rank)

    def __str__(self) -> str:
        return f"{self.rank_name}{self.suit.symbol}"

    def __repr__(self) -> str:
        return str(self)


TWO_OF_CLUBS = Card(Suit.CLUBS, 2)
QUEEN_OF_SPADES = Card(Suit.SPADES, RANK_QUEEN)


def parse_card(text: str) -> Card:
    """
    Parse ``"QS"``, ``"10h"``, ``"2♣"`` into a Card.
    Raises ValueError on anything else.
    """
    s = text.strip().upper()
    if len(s) < 2:
        raise ValueError(f"Not a card: {text!r}")
    suit_part, rank_part = s[-1], s[:-1]
    if suit_part in "CDSH":
        suit = Suit("CDSH".index(suit_part))
    elif suit_part in "♣♦♠♥":
        suit = Suit("♣♦♠♥".index(suit_part))
    else:
        raise ValueError(f"Unknown suit in {text!r}")
    if rank_part in _RANK_FROM_NAME:
        rank = _RANK_FROM_NAME[rank_part]
    elif rank_part.isdigit() and int(rank_part) in range(2, 11):
        rank = int(rank_part)
    else:
        raise ValueError(f"Unknown rank in {text!r}")
    return Card(suit, rank)


def make_deck_52() -> list[Card]:
    """Build a full 52-card deck in canonical order."""
    return [Card(s, r) for s in Suit for r in RANKS]


def shuffle(deck: Iterable[Card], rng: RandomSource | None = None) -> list[Card]:
    """
    Fisher-Yates shuffle. Returns a new list; the input is left untouched.
    The result depends only on the deck and the values drawn from ``rng``.
    """
    if rng is None:
        rng = random.Random()
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def sort_hand(hand: Iterable[Card]) -> list[Card]:
    """Canonical display order: Clubs, Diamonds, Spades, Hearts; 2 low, Ace high."""
    return sorted(hand, key=Card.sort_key)


def cards_point_total(cards: Iterable[Card]) -> int:
    """Total penalty points in a set of cards (26 for a whole deck)."""
    return sum(c.points() for c in cards)


POINT_CARDS: tuple[Card, ...] = tuple(Card(Suit.HEARTS, r) for r in RANKS) + (QUEEN_OF_SPADES,)
