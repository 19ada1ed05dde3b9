"""
Score calculation: round points, shooting the moon, cumulative totals.
26 points per round; reaching the score limit ends the game and the lowest total wins.
"""
from __future__ import annotations

from typing import Sequence

from .play import TOTAL_POINTS

SCORE_LIMIT = 100


def shooter(round_scores: Sequence[int]) -> int | None:
    """Seat that took all 26 points this round, if exactly one did."""
    seats = [i for i, s in enumerate(round_scores) if s == TOTAL_POINTS]
    if len(seats) == 1:
        return seats[0]
    return None


def apply_shoot_the_moon(round_scores: Sequence[int]) -> tuple[int, ...]:
    """
    A seat with all 26 points scores 0 and every other seat scores 26.
    Otherwise the round scores pass through unchanged.
    """
    moon = shooter(round_scores)
    if moon is None:
        return tuple(round_scores)
    return tuple(0 if i == moon else TOTAL_POINTS for i in range(len(round_scores)))


def add_round(totals: Sequence[int], round_scores: Sequence[int]) -> tuple[int, ...]:
    """Cumulative totals after a round (round scores already moon-adjusted)."""
    if len(totals) != len(round_scores):
        raise ValueError("totals and round_scores must have the same length")
    return tuple(t + r for t, r in zip(totals, round_scores))


def is_game_over(totals: Sequence[int], score_limit: int = SCORE_LIMIT) -> bool:
    return any(t >= score_limit for t in totals)


def game_winner(totals: Sequence[int]) -> int:
    """Seat with the lowest total; ties go to the lower seat index."""
    return min(range(len(totals)), key=lambda i: (totals[i], i))
