"""Hearts game engine (4 players, pass left/right/across/hold, shoot the moon)."""

__version__ = "0.1.0"

from .deck import Card, Suit, make_deck_52, parse_card, shuffle, sort_hand, TWO_OF_CLUBS, QUEEN_OF_SPADES
from .deal import deal_4p, Deal4P, PassDirection, passing_direction, exchange_passes
from .play import legal_plays, trick_winner, point_value, opening_leader, trick_points
from .heuristics import choose_pass_cards, choose_play
from .scoring import apply_shoot_the_moon, add_round, is_game_over, game_winner
from .config import GameConfig
from .errors import HeartsError, IllegalMoveError, ConfigurationError, InvariantViolationError
from .game import (
    GameState,
    Phase,
    Player,
    new_game,
    reset_game,
    start_new_round,
    select_card_for_pass,
    confirm_pass,
    play_card,
    advance_ai_turn,
    collect_trick,
    dispatch,
    advance,
    run_game,
)
