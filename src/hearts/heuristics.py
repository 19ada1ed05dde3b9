"""
Rule-based decisions for computer-controlled seats.

Passing: shed the Queen of Spades and its protectors, try to void a short minor
suit, then give away high cards.
Playing: lead low in the longest safe suit, duck under the winning card when
following, and unload the most dangerous card when void in the led suit.

Every function is pure: the same hand and table always give the same card.
"""
from __future__ import annotations

from typing import Sequence

from .deal import PASS_SIZE
from .deck import QUEEN_OF_SPADES, RANK_KING, RANK_QUEEN, RANK_ACE, Card, Suit
from .play import Trick, legal_plays, winning_card

_LEAD_SUITS = (Suit.CLUBS, Suit.DIAMONDS, Suit.SPADES)
_VOID_SUITS = (Suit.CLUBS, Suit.DIAMONDS)
# Clubs below the ten are kept when passing: they are safe cards to follow with.
_LOW_CLUB_LIMIT = 10


def _highest(cards: Sequence[Card]) -> Card:
    return max(cards, key=lambda c: c.rank)


def _lowest(cards: Sequence[Card]) -> Card:
    return min(cards, key=lambda c: c.rank)


def _suit_counts(cards: Sequence[Card]) -> dict[Suit, int]:
    counts = {s: 0 for s in Suit}
    for c in cards:
        counts[c.suit] += 1
    return counts


def choose_pass_cards(hand: Sequence[Card]) -> list[Card]:
    """Pick the 3 cards to pass. Always 3 distinct cards from ``hand``."""
    if len(hand) < PASS_SIZE:
        raise ValueError(f"Need at least {PASS_SIZE} cards to pass, hand has {len(hand)}")
    # Highest rank first; equal ranks keep the hand's suit order.
    by_rank = sorted(hand, key=lambda c: -c.rank)

    to_pass = [c for c in by_rank if c.suit == Suit.SPADES and c.rank >= RANK_QUEEN]

    if len(to_pass) < PASS_SIZE:
        counts = _suit_counts(hand)
        room = PASS_SIZE - len(to_pass)
        candidates = sorted(
            (s for s in _VOID_SUITS if 0 < counts[s] <= room),
            key=lambda s: counts[s],
        )
        if candidates:
            to_pass.extend(c for c in by_rank if c.suit == candidates[0] and c not in to_pass)

    if len(to_pass) < PASS_SIZE:
        remaining = [c for c in by_rank if c not in to_pass]
        high = [c for c in remaining if not (c.suit == Suit.CLUBS and c.rank < _LOW_CLUB_LIMIT)]
        to_pass.extend(high[: PASS_SIZE - len(to_pass)])

    if len(to_pass) < PASS_SIZE:
        remaining = [c for c in by_rank if c not in to_pass]
        to_pass.extend(remaining[: PASS_SIZE - len(to_pass)])

    return to_pass[:PASS_SIZE]


def choose_lead(legal: Sequence[Card], hearts_broken: bool = False) -> Card | None:
    """
    Lowest card of the longest legal suit. Hearts count once broken, or when
    nothing else is legal. Ties go Clubs, Diamonds, Spades, Hearts.
    """
    counts = _suit_counts(legal)
    suits = [s for s in _LEAD_SUITS if counts[s] > 0]
    if counts[Suit.HEARTS] > 0 and (hearts_broken or not suits):
        suits.append(Suit.HEARTS)
    if not suits:
        return None
    longest = max(suits, key=lambda s: counts[s])
    return _lowest([c for c in legal if c.suit == longest])


def choose_follow(legal: Sequence[Card], trick: Trick, lead_suit: Suit) -> Card | None:
    """
    Card to play when able to follow suit, or None when void in ``lead_suit``.
    Duck under the winning card if possible, otherwise take with the lowest.
    """
    in_suit = [c for c in legal if c.suit == lead_suit]
    if not in_suit:
        return None

    if lead_suit == Suit.SPADES and QUEEN_OF_SPADES in in_suit:
        if any(c.suit == Suit.SPADES and c.rank in (RANK_KING, RANK_ACE) for _, c in trick):
            return QUEEN_OF_SPADES

    winner = winning_card(trick, lead_suit)
    if winner is None:
        return _lowest(in_suit)
    under = [c for c in in_suit if c.rank < winner.rank]
    if under:
        return _highest(under)
    return _lowest(in_suit)


def choose_discard(legal: Sequence[Card]) -> Card | None:
    """Most dangerous card first: Q♠, high hearts, A♠/K♠, then the top of the longest suit."""
    if not legal:
        return None
    if QUEEN_OF_SPADES in legal:
        return QUEEN_OF_SPADES
    hearts = [c for c in legal if c.is_heart()]
    if hearts:
        return _highest(hearts)
    high_spades = [c for c in legal if c.suit == Suit.SPADES and c.rank >= RANK_KING]
    if high_spades:
        return _highest(high_spades)
    counts = _suit_counts(legal)
    longest = max((s for s in Suit if counts[s] > 0), key=lambda s: counts[s])
    return _highest([c for c in legal if c.suit == longest])


def choose_play(
    hand: Sequence[Card],
    trick: Trick,
    lead_suit: Suit | None,
    hearts_broken: bool,
    first_trick: bool = False,
) -> Card:
    """Pick a legal card for the seat holding ``hand``."""
    legal = legal_plays(hand, trick, lead_suit, hearts_broken, first_trick=first_trick)
    if not legal:
        raise ValueError("No legal plays available")

    card: Card | None
    if not trick:
        card = choose_lead(legal, hearts_broken)
    else:
        if lead_suit is None:
            lead_suit = trick[0][1].suit
        card = choose_follow(legal, trick, lead_suit)
        if card is None:
            card = choose_discard(legal)

    if card is None or card not in legal:
        card = _lowest(legal)
    return card


__all__ = [
    "choose_pass_cards",
    "choose_lead",
    "choose_follow",
    "choose_discard",
    "choose_play",
]
