"""
Round and game orchestration: deal → pass → play tricks → score, until someone
reaches the score limit.

``GameState`` is immutable. Every transition is a plain function taking a state
(and an rng where cards get dealt) and returning the next state:

    passing ──confirm_pass──▶ playing ──4th card──▶ trick-end ──collect_trick──▶ playing
                                                               └─(hands empty)─▶ round-end / game-over
    round-end ──start_new_round──▶ passing (or playing when the round holds)

Human input arrives through ``select_card_for_pass``, ``confirm_pass`` and
``play_card``; computer seats move through ``advance_ai_turn``. ``dispatch``
wraps all of them behind event objects and turns rejected requests into the
status message instead of raising.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, NamedTuple, Union

from .config import GameConfig
from .deal import NUM_PLAYERS, PASS_SIZE, PassDirection, deal_4p, exchange_passes, passing_direction
from .deck import Card, RandomSource, Suit
from .errors import ConfigurationError, IllegalMoveError, InvariantViolationError
from .heuristics import choose_pass_cards, choose_play
from .play import breaks_hearts, legal_plays, opening_leader, trick_points, trick_winner
from .scoring import add_round, apply_shoot_the_moon, game_winner, is_game_over, shooter

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    PASSING = "passing"
    PLAYING = "playing"
    TRICK_END = "trick-end"
    ROUND_END = "round-end"
    GAME_OVER = "game-over"


@dataclass(frozen=True)
class Player:
    id: int
    name: str
    is_human: bool
    hand: tuple[Card, ...] = ()
    tricks_taken: tuple[Card, ...] = ()


class TrickWinnerInfo(NamedTuple):
    """Shown while a finished trick is still on the table."""
    name: str
    points: int
    winner_id: int


_ZERO_SCORES = (0, 0, 0, 0)


@dataclass(frozen=True)
class GameState:
    """Everything about one game in progress. Replace, never mutate."""

    config: GameConfig
    phase: Phase
    players: tuple[Player, ...]
    round_number: int = 1
    current_player: int = 0
    current_trick: tuple[tuple[int, Card], ...] = ()
    lead_suit: Suit | None = None
    hearts_broken: bool = False
    tricks_played: int = 0  # completed tricks this round
    pass_selection: tuple[Card, ...] = ()  # human seat only
    round_scores: tuple[int, ...] = _ZERO_SCORES
    scores: tuple[int, ...] = _ZERO_SCORES
    trick_winner_info: TrickWinnerInfo | None = None
    game_winner: int | None = None
    message: str = ""

    @property
    def passing_direction(self) -> PassDirection:
        return passing_direction(self.round_number)

    @property
    def first_trick(self) -> bool:
        return self.tricks_played == 0

    @property
    def human_seat(self) -> int | None:
        return self.config.human_seat

    def hand(self, seat: int) -> tuple[Card, ...]:
        return self.players[seat].hand

    def name(self, seat: int) -> str:
        return self.players[seat].name

    def legal_cards(self, seat: int) -> list[Card]:
        """Cards ``seat`` could play on the current trick (empty outside the playing phase)."""
        if self.phase != Phase.PLAYING:
            return []
        return legal_plays(
            self.hand(seat),
            self.current_trick,
            self.lead_suit,
            self.hearts_broken,
            first_trick=self.first_trick,
        )

    def awaiting_human(self) -> bool:
        """True when nothing can happen until the human seat acts."""
        if self.human_seat is None:
            return False
        if self.phase == Phase.PASSING:
            return True
        return self.phase == Phase.PLAYING and self.current_player == self.human_seat

    def all_cards(self) -> list[Card]:
        """Every card the state knows about: hands, current trick and tricks taken."""
        cards: list[Card] = []
        for p in self.players:
            cards.extend(p.hand)
            cards.extend(p.tricks_taken)
        cards.extend(c for _, c in self.current_trick)
        return cards

    def snapshot(self) -> dict[str, Any]:
        """Read-only view for a presentation layer."""
        seat = self.human_seat
        return {
            "game_state": self.phase.value,
            "round_number": self.round_number,
            "passing_direction": self.passing_direction.value,
            "players": [
                {
                    "id": p.id,
                    "name": p.name,
                    "is_human": p.is_human,
                    "hand": list(p.hand),
                    "tricks_taken": list(p.tricks_taken),
                }
                for p in self.players
            ],
            "current_trick": list(self.current_trick),
            "lead_suit": self.lead_suit,
            "current_player": self.current_player,
            "hearts_broken": self.hearts_broken,
            "pass_selection": list(self.pass_selection),
            "playable": self.legal_cards(seat) if seat is not None else [],
            "round_scores": {p.name: self.round_scores[p.id] for p in self.players},
            "scores": {p.name: self.scores[p.id] for p in self.players},
            "trick_winner_info": self.trick_winner_info._asdict() if self.trick_winner_info else None,
            "game_winner": self.name(self.game_winner) if self.game_winner is not None else None,
            "message": self.message,
        }


# ---- Status messages ----


def _status_message(state: GameState) -> str:
    phase = state.phase
    if phase == Phase.PASSING:
        if state.human_seat is None:
            return f"Passing {state.passing_direction.value}."
        return f"Select 3 cards to pass {state.passing_direction.value}."
    if phase == Phase.PLAYING:
        opening = state.first_trick and not state.current_trick
        name = state.name(state.current_player)
        if state.current_player == state.human_seat:
            if opening:
                return "Your turn. You must play the 2 of Clubs."
            if not state.current_trick:
                return "It's your turn to lead."
            return "It's your turn to play."
        if opening:
            return f"{name} starts with the 2 of Clubs."
        return f"{name} is thinking..."
    if phase == Phase.TRICK_END and state.trick_winner_info is not None:
        name, points, _ = state.trick_winner_info
        if points > 0:
            return f"{name} takes the trick with {points} point{'s' if points > 1 else ''}."
        return f"{name} takes the trick."
    if phase == Phase.ROUND_END:
        return "Round over!"
    if phase == Phase.GAME_OVER and state.game_winner is not None:
        return f"{state.name(state.game_winner)} wins the game!"
    return ""


def _with_status(state: GameState) -> GameState:
    return replace(state, message=_status_message(state))


# ---- Round setup ----


def _deal_round(
    config: GameConfig,
    round_number: int,
    scores: tuple[int, ...],
    rng: RandomSource,
) -> GameState:
    deal = deal_4p(rng=rng)
    players = tuple(
        Player(id=i, name=config.player_names[i], is_human=config.is_human(i), hand=tuple(deal.hands[i]))
        for i in range(NUM_PLAYERS)
    )
    direction = passing_direction(round_number)
    phase = Phase.PLAYING if direction == PassDirection.HOLD else Phase.PASSING
    state = GameState(
        config=config,
        phase=phase,
        players=players,
        round_number=round_number,
        current_player=opening_leader(deal.hands),
        scores=scores,
    )
    logger.info("Round %d dealt, passing %s", round_number, direction.value)
    state = _with_status(state)
    if phase == Phase.PLAYING and config.human_seat is not None:
        state = replace(state, message="No passing this round. " + state.message)
    return state


def new_game(config: GameConfig | None = None, rng: RandomSource | None = None) -> GameState:
    """Fresh game: scores zeroed, round 1 dealt."""
    if config is None:
        config = GameConfig()
    if rng is None:
        rng = random.Random()
    return _deal_round(config, 1, _ZERO_SCORES, rng)


def reset_game(state: GameState, rng: RandomSource | None = None) -> GameState:
    """Play again with the same table; allowed from any phase."""
    logger.info("Game reset")
    return new_game(state.config, rng)


def start_new_round(state: GameState, rng: RandomSource | None = None) -> GameState:
    """Deal the next round once the previous one has been scored."""
    if state.phase != Phase.ROUND_END:
        raise IllegalMoveError("The current round is not over yet.")
    if rng is None:
        rng = random.Random()
    return _deal_round(state.config, state.round_number + 1, state.scores, rng)


# ---- Passing ----


def select_card_for_pass(state: GameState, card: Card) -> GameState:
    """Toggle ``card`` in the human seat's pass selection (at most 3 cards)."""
    seat = state.human_seat
    if state.phase != Phase.PASSING or seat is None:
        raise IllegalMoveError("Cards can only be selected for passing during the passing phase.")
    if card not in state.hand(seat):
        raise IllegalMoveError(f"{card} is not in your hand.")
    selection = state.pass_selection
    if card in selection:
        selection = tuple(c for c in selection if c != card)
    elif len(selection) < PASS_SIZE:
        selection = selection + (card,)
    else:
        return state
    return replace(state, pass_selection=selection)


def confirm_pass(state: GameState) -> GameState:
    """Exchange passed cards in the round's direction and start play."""
    if state.phase != Phase.PASSING:
        raise IllegalMoveError("There is nothing to pass right now.")
    seat = state.human_seat
    if seat is not None and len(state.pass_selection) != PASS_SIZE:
        raise ConfigurationError("Please select exactly 3 cards.")

    direction = state.passing_direction
    passes: list[list[Card]] = []
    for p in state.players:
        if p.id == seat:
            passes.append(list(state.pass_selection))
        else:
            passes.append(choose_pass_cards(p.hand))
        logger.debug("%s passes %s %s", p.name, passes[-1], direction.value)

    hands = exchange_passes([p.hand for p in state.players], passes, direction)
    players = tuple(replace(p, hand=tuple(hands[p.id])) for p in state.players)
    state = replace(
        state,
        phase=Phase.PLAYING,
        players=players,
        pass_selection=(),
        current_player=opening_leader(hands),
    )
    return _with_status(state)


# ---- Playing ----


def _play(state: GameState, seat: int, card: Card) -> GameState:
    if seat != state.current_player:
        raise InvariantViolationError(f"Seat {seat} acted out of turn")
    player = state.players[seat]
    if card not in player.hand:
        raise InvariantViolationError(f"{player.name} played {card}, which is not in their hand")

    hand = tuple(c for c in player.hand if c != card)
    players = state.players[:seat] + (replace(player, hand=hand),) + state.players[seat + 1:]
    trick = state.current_trick + ((seat, card),)
    lead_suit = state.lead_suit if state.current_trick else card.suit
    broke = breaks_hearts(card, state.hearts_broken)
    logger.debug("%s plays %s", player.name, card)

    state = replace(
        state,
        players=players,
        current_trick=trick,
        lead_suit=lead_suit,
        hearts_broken=state.hearts_broken or broke,
    )

    if len(trick) == NUM_PLAYERS:
        winner, _ = trick_winner(trick, lead_suit)
        info = TrickWinnerInfo(name=state.name(winner), points=trick_points(trick), winner_id=winner)
        state = _with_status(replace(state, phase=Phase.TRICK_END, trick_winner_info=info))
        if broke:
            state = replace(state, message="Hearts are broken! " + state.message)
        return state

    state = _with_status(replace(state, current_player=(seat + 1) % NUM_PLAYERS))
    if broke:
        state = replace(state, message="Hearts are broken!")
    return state


def play_card(state: GameState, card: Card) -> GameState:
    """The human seat plays ``card``. Illegal attempts raise IllegalMoveError."""
    seat = state.human_seat
    if state.phase != Phase.PLAYING:
        raise IllegalMoveError("Cards can only be played during the playing phase.")
    if seat is None or state.current_player != seat:
        raise IllegalMoveError("It's not your turn.")
    if card not in state.legal_cards(seat):
        raise IllegalMoveError("You can't play that card.")
    return _play(state, seat, card)


def advance_ai_turn(state: GameState) -> GameState:
    """Let the computer seat whose turn it is play one card."""
    if state.phase != Phase.PLAYING:
        raise IllegalMoveError("No card can be played right now.")
    seat = state.current_player
    if seat == state.human_seat:
        raise IllegalMoveError("Waiting for you to play.")
    card = choose_play(
        state.hand(seat),
        state.current_trick,
        state.lead_suit,
        state.hearts_broken,
        first_trick=state.first_trick,
    )
    return _play(state, seat, card)


def collect_trick(state: GameState) -> GameState:
    """Give the finished trick to its winner; the winner leads next."""
    if state.phase != Phase.TRICK_END or state.trick_winner_info is None:
        raise IllegalMoveError("There is no finished trick to collect.")
    if len(state.current_trick) != NUM_PLAYERS:
        raise InvariantViolationError(f"Trick-end with {len(state.current_trick)} cards on the table")

    info = state.trick_winner_info
    winner = state.players[info.winner_id]
    taken = winner.tricks_taken + tuple(c for _, c in state.current_trick)
    players = tuple(replace(p, tricks_taken=taken) if p.id == winner.id else p for p in state.players)
    round_scores = tuple(
        s + info.points if i == winner.id else s for i, s in enumerate(state.round_scores)
    )
    logger.debug("%s takes trick %d (%d points)", winner.name, state.tricks_played + 1, info.points)

    state = replace(
        state,
        players=players,
        round_scores=round_scores,
        current_trick=(),
        lead_suit=None,
        current_player=winner.id,
        tricks_played=state.tricks_played + 1,
        trick_winner_info=None,
    )
    if all(not p.hand for p in state.players):
        return _finish_round(state)
    return _with_status(replace(state, phase=Phase.PLAYING))


def _finish_round(state: GameState) -> GameState:
    raw = state.round_scores
    moon = shooter(raw)
    round_scores = apply_shoot_the_moon(raw)
    totals = add_round(state.scores, round_scores)
    logger.info("Round %d scores %s, totals %s", state.round_number, round_scores, totals)

    if is_game_over(totals, state.config.score_limit):
        winner = game_winner(totals)
        logger.info("Game over after %d rounds, %s wins", state.round_number, state.name(winner))
        state = replace(
            state,
            phase=Phase.GAME_OVER,
            round_scores=round_scores,
            scores=totals,
            game_winner=winner,
        )
    else:
        state = replace(state, phase=Phase.ROUND_END, round_scores=round_scores, scores=totals)
    state = _with_status(state)
    if moon is not None:
        state = replace(state, message=f"{state.name(moon)} shot the moon! " + state.message)
    return state


# ---- Events ----


@dataclass(frozen=True)
class SelectCardForPass:
    card: Card


@dataclass(frozen=True)
class ConfirmPass:
    pass


@dataclass(frozen=True)
class PlayCard:
    card: Card


@dataclass(frozen=True)
class StartNewRound:
    pass


@dataclass(frozen=True)
class ResetGame:
    pass


@dataclass(frozen=True)
class AdvanceAI:
    pass


@dataclass(frozen=True)
class CollectTrick:
    pass


Event = Union[SelectCardForPass, ConfirmPass, PlayCard, StartNewRound, ResetGame, AdvanceAI, CollectTrick]


def dispatch(state: GameState, event: Event, rng: RandomSource | None = None) -> GameState:
    """
    Apply ``event`` to ``state``. A rejected request returns the same state with
    only the status message changed.
    """
    try:
        if isinstance(event, SelectCardForPass):
            return select_card_for_pass(state, event.card)
        if isinstance(event, ConfirmPass):
            return confirm_pass(state)
        if isinstance(event, PlayCard):
            return play_card(state, event.card)
        if isinstance(event, StartNewRound):
            return start_new_round(state, rng)
        if isinstance(event, ResetGame):
            return reset_game(state, rng)
        if isinstance(event, AdvanceAI):
            return advance_ai_turn(state)
        if isinstance(event, CollectTrick):
            return collect_trick(state)
    except (IllegalMoveError, ConfigurationError) as e:
        logger.debug("Rejected %s: %s", type(event).__name__, e)
        return replace(state, message=str(e))
    raise TypeError(f"Unknown event {event!r}")


# ---- Drivers ----


def advance(state: GameState, rng: RandomSource | None = None) -> GameState:
    """
    Perform the next step that needs no human input: pass for an all-computer
    table, play a computer turn, collect a finished trick, or deal the next round.
    """
    if state.phase == Phase.GAME_OVER:
        return state
    if state.awaiting_human():
        raise IllegalMoveError("Waiting for the human player.")
    if state.phase == Phase.PASSING:
        return confirm_pass(state)
    if state.phase == Phase.PLAYING:
        return advance_ai_turn(state)
    if state.phase == Phase.TRICK_END:
        return collect_trick(state)
    return start_new_round(state, rng)


@dataclass
class GameRecord:
    """Summary of a finished computer-only game."""
    final: GameState
    rounds: int
    round_scores: list[tuple[int, ...]] = field(default_factory=list)

    @property
    def winner(self) -> int:
        assert self.final.game_winner is not None
        return self.final.game_winner


def run_game(
    config: GameConfig | None = None,
    rng: RandomSource | None = None,
    max_steps: int = 100_000,
) -> GameRecord:
    """Play a whole game with every seat computer-controlled."""
    if config is None:
        config = GameConfig(human_seat=None)
    if config.human_seat is not None:
        raise ConfigurationError("run_game needs a table without a human seat (human_seat=None)")
    if rng is None:
        rng = random.Random()

    state = new_game(config, rng)
    per_round: list[tuple[int, ...]] = []
    steps = 0
    while state.phase != Phase.GAME_OVER:
        if steps >= max_steps:
            raise InvariantViolationError(f"Game did not finish within {max_steps} steps")
        state = advance(state, rng)
        if state.phase in (Phase.ROUND_END, Phase.GAME_OVER):
            per_round.append(state.round_scores)
        steps += 1
    return GameRecord(final=state, rounds=state.round_number, round_scores=per_round)


__all__ = [
    "Phase",
    "Player",
    "TrickWinnerInfo",
    "GameState",
    "new_game",
    "reset_game",
    "start_new_round",
    "select_card_for_pass",
    "confirm_pass",
    "play_card",
    "advance_ai_turn",
    "collect_trick",
    "SelectCardForPass",
    "ConfirmPass",
    "PlayCard",
    "StartNewRound",
    "ResetGame",
    "AdvanceAI",
    "CollectTrick",
    "Event",
    "dispatch",
    "advance",
    "GameRecord",
    "run_game",
]
