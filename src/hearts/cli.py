"""
Command-line interface for playing and simulating Hearts.

Usage examples (after ``pip install -e .``):

    hearts play --seed 7
    hearts simulate --games 200 --seed 1
    hearts random-match --seed 42 --rounds 4
"""
from __future__ import annotations

import argparse
import logging
import random
import time
from collections import Counter
from typing import Callable, Optional

from . import __version__
from .agents import HeuristicAgent, Policy, RandomAgent
from .config import GameConfig, PLAYER_NAMES
from .deck import parse_card
from .env_game import HeartsEnv, StepResult
from .game import (
    ConfirmPass,
    GameState,
    Phase,
    PlayCard,
    ResetGame,
    SelectCardForPass,
    advance,
    dispatch,
    new_game,
    run_game,
)
from .scoring import SCORE_LIMIT

logger = logging.getLogger(__name__)


# ---- play ----


def _render(state: GameState) -> None:
    seat = state.human_seat
    print()
    print(f"Round {state.round_number} (pass {state.passing_direction.value})  "
          + "  ".join(f"{p.name}: {state.scores[p.id]}" for p in state.players))
    if state.current_trick:
        print("Table: " + "  ".join(f"{state.name(p)} {c}" for p, c in state.current_trick))
    if seat is not None:
        hand = state.hand(seat)
        print("Hand:  " + " ".join(str(c) for c in hand))
        if state.phase == Phase.PASSING and state.pass_selection:
            print("Pass:  " + " ".join(str(c) for c in state.pass_selection))
        playable = state.legal_cards(seat)
        if playable and state.current_player == seat:
            print("Legal: " + " ".join(c.code for c in playable))
    if state.message:
        print(f"> {state.message}")


def _read_human_event(state: GameState, read: Callable[[str], str]) -> list | None:
    """Translate one line of input into events; None means quit."""
    line = read("pass 3 cards (e.g. QS KS 2H): " if state.phase == Phase.PASSING else "play: ").strip()
    if line.lower() in ("q", "quit", "exit"):
        return None
    try:
        cards = [parse_card(tok) for tok in line.split()]
    except ValueError as e:
        print(f"> {e}")
        return []
    if state.phase == Phase.PASSING:
        return [SelectCardForPass(c) for c in cards] + [ConfirmPass()]
    return [PlayCard(c) for c in cards[:1]]


def play_console(
    config: GameConfig,
    rng: random.Random,
    read: Callable[[str], str] = input,
    sleep: Callable[[float], None] = time.sleep,
) -> GameState:
    """Interactive game on the terminal; the human sits in ``config.human_seat``."""
    state = new_game(config, rng)
    _render(state)
    while True:
        if state.phase == Phase.GAME_OVER:
            again = read("play again? [y/N] ").strip().lower()
            if again != "y":
                return state
            state = dispatch(state, ResetGame(), rng)
            _render(state)
            continue
        if state.awaiting_human():
            events = _read_human_event(state, read)
            if events is None:
                return state
            if state.phase == Phase.PASSING:
                # Start from a clean selection so a retyped line replaces the old one.
                state = _clear_pass_selection(state)
            for event in events:
                state = dispatch(state, event, rng)
            _render(state)
            continue
        if state.phase == Phase.PLAYING:
            sleep(config.ai_delay)
        elif state.phase == Phase.TRICK_END:
            sleep(config.trick_display)
        state = advance(state, rng)
        _render(state)


def _clear_pass_selection(state: GameState) -> GameState:
    for card in state.pass_selection:
        state = dispatch(state, SelectCardForPass(card))
    return state


def _cmd_play(args: argparse.Namespace) -> None:
    config = GameConfig(
        player_names=tuple(args.names) if args.names else PLAYER_NAMES,
        human_seat=0,
        score_limit=args.score_limit,
        ai_delay=args.ai_delay,
        trick_display=args.trick_display,
    )
    final = play_console(config, random.Random(args.seed))
    if final.game_winner is not None:
        print(f"Final scores: {dict(zip(config.player_names, final.scores))}")


# ---- simulate ----


def _cmd_simulate(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    config = GameConfig(human_seat=None, score_limit=args.score_limit)
    wins: Counter[int] = Counter()
    totals = [0, 0, 0, 0]
    rounds = 0
    moons = 0
    for _ in range(args.games):
        record = run_game(config, rng)
        wins[record.winner] += 1
        rounds += record.rounds
        moons += sum(1 for r in record.round_scores if sorted(r) == [0, 26, 26, 26])
        for i, s in enumerate(record.final.scores):
            totals[i] += s
    print(f"Simulated {args.games} games, {rounds} rounds, {moons} moon shots")
    for i, name in enumerate(config.player_names):
        print(
            f"  {name:<6} wins={wins[i]:>5}  avg_score={totals[i] / max(args.games, 1):7.2f}"
        )


# ---- random-match ----


def run_env_match(policy: Policy, seed: int, max_rounds: Optional[int]) -> StepResult:
    """Play one environment episode with ``policy`` in seat 0."""
    rng = random.Random(seed)
    env = HeartsEnv(learning_player=0, max_rounds=max_rounds, rng=rng)
    step = env.reset()
    steps = 0
    while not step.done and steps < 100_000:
        action = policy.act(step.obs, step.legal_actions_mask)
        step = env.step(action)
        steps += 1
    logger.info("Episode finished after %d decisions", steps)
    return step


def _cmd_random_match(args: argparse.Namespace) -> None:
    policy: Policy = HeuristicAgent() if args.agent == "heuristic" else RandomAgent(seed=args.seed)
    step = run_env_match(policy, seed=args.seed, max_rounds=args.rounds)
    print(
        f"HeartsEnv ({args.agent}): totals={step.info['totals']}, "
        f"rounds={step.info['rounds_played']}, reward_for_player0={step.reward}"
    )


# ---- parser ----


def _add_play_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("play", help="Play against three computer opponents.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for dealing.")
    parser.add_argument(
        "--names",
        nargs=4,
        metavar="NAME",
        default=None,
        help="Names for the four seats, starting with yours.",
    )
    parser.add_argument("--score-limit", type=int, default=SCORE_LIMIT, help="Points that end the game.")
    parser.add_argument(
        "--ai-delay",
        type=float,
        default=1.0,
        help="Seconds to wait before each computer play.",
    )
    parser.add_argument(
        "--trick-display",
        type=float,
        default=1.5,
        help="Seconds a finished trick stays on the table.",
    )
    parser.set_defaults(func=_cmd_play)


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("simulate", help="Play computer-only games and report results.")
    parser.add_argument("--games", type=int, default=100, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for reproducibility.")
    parser.add_argument("--score-limit", type=int, default=SCORE_LIMIT, help="Points that end a game.")
    parser.set_defaults(func=_cmd_simulate)


def _add_random_match_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "random-match",
        help="Run one HeartsEnv episode with a baseline agent in seat 0.",
    )
    parser.add_argument("--agent", choices=["random", "heuristic"], default="random")
    parser.add_argument("--rounds", type=int, default=None, help="Stop after this many rounds.")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility.")
    parser.set_defaults(func=_cmd_random_match)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hearts", description="Hearts card game engine.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug).")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_play_parser(subparsers)
    _add_simulate_parser(subparsers)
    _add_random_match_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
