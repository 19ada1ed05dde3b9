"""
Exceptions raised by the Hearts engine.

IllegalMoveError and ConfigurationError describe bad requests from a player or
caller; the event reducer turns them into the status message and leaves the
game untouched. InvariantViolationError means the engine itself is broken.
"""
from __future__ import annotations


class HeartsError(Exception):
    """Base exception for Hearts engine errors."""


class IllegalMoveError(HeartsError, ValueError):
    """A card that is not a legal play right now, or an action out of turn or phase."""


class ConfigurationError(HeartsError, ValueError):
    """An incomplete or inconsistent request, e.g. confirming a pass without 3 cards."""


class InvariantViolationError(HeartsError, RuntimeError):
    """Internal state is inconsistent (card missing from the acting hand, broken trick)."""


__all__ = [
    "HeartsError",
    "IllegalMoveError",
    "ConfigurationError",
    "InvariantViolationError",
]
