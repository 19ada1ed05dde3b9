"""
Trick-taking: point values, legal moves, trick winner.
Follow suit if able; hearts cannot be led until broken; the two of clubs opens.
"""
from __future__ import annotations

from typing import Sequence

from .deal import holder_of
from .deck import TWO_OF_CLUBS, Card, Suit
from .errors import InvariantViolationError

Trick = Sequence[tuple[int, Card]]

TOTAL_POINTS = 26


def point_value(card: Card) -> int:
    """Hearts are worth 1, the Queen of Spades 13, everything else 0."""
    return card.points()


def trick_points(trick: Trick) -> int:
    return sum(point_value(c) for _, c in trick)


def opening_leader(hands: Sequence[Sequence[Card]]) -> int:
    """Seat holding the two of clubs; it leads the first trick of the round."""
    return holder_of(hands, TWO_OF_CLUBS)


def has_suit(hand: Sequence[Card], suit: Suit) -> bool:
    return any(c.suit == suit for c in hand)


def legal_plays(
    hand: Sequence[Card],
    trick: Trick,
    lead_suit: Suit | None,
    hearts_broken: bool,
    first_trick: bool = False,
) -> list[Card]:
    """
    Return the cards of ``hand`` that may be played on ``trick``.
    trick: list of (player_index, card) in order played.
    first_trick: True while the opening trick of the round is in progress.
    """
    if not hand:
        return []

    if not trick:
        if first_trick and TWO_OF_CLUBS in hand:
            return [TWO_OF_CLUBS]
        if hearts_broken or all(c.is_heart() for c in hand):
            return list(hand)
        return [c for c in hand if not c.is_heart()]

    if lead_suit is None:
        lead_suit = trick[0][1].suit
    if has_suit(hand, lead_suit):
        return [c for c in hand if c.suit == lead_suit]
    # Void in the led suit: discard anything.
    return list(hand)


def breaks_hearts(card: Card, hearts_broken: bool) -> bool:
    """True if playing ``card`` breaks hearts for the rest of the round."""
    return card.is_heart() and not hearts_broken


def trick_winner(trick: Trick, lead_suit: Suit | None = None) -> tuple[int, Card]:
    """
    (player, card) taking the trick: highest card of the led suit.
    Off-suit cards never win.
    """
    if not trick:
        raise InvariantViolationError("Cannot resolve an empty trick")
    if lead_suit is None:
        lead_suit = trick[0][1].suit
    best: tuple[int, Card] | None = None
    for p, c in trick:
        if c.suit != lead_suit:
            continue
        if best is None or c.rank > best[1].rank:
            best = (p, c)
    if best is None:
        raise InvariantViolationError(f"No {lead_suit.name.lower()} card in trick {list(trick)}")
    return best


def winning_card(trick: Trick, lead_suit: Suit) -> Card | None:
    """Card currently winning an unfinished trick, or None if the trick is empty."""
    if not trick:
        return None
    return trick_winner(trick, lead_suit)[1]
