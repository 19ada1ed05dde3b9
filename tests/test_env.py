"""Tests for observation / encoding helpers in hearts.env."""
import random
from dataclasses import replace

import numpy as np
import pytest

from hearts.config import GameConfig
from hearts.deck import Card, make_deck_52, parse_card
from hearts.env import (
    GATHERED_SLICE,
    HAND_SLICE,
    HEARTS_BROKEN_INDEX,
    LEAD_SLICE,
    NUM_ACTIONS,
    NUM_CARDS,
    OBS_SIZE,
    SEAT_SLICE,
    TRICK_SLICE,
    card_from_index,
    card_index,
    decode_card_set,
    encode_card_set,
    encode_play_observation,
    legal_action_mask,
)
from hearts.game import Phase, new_game


def test_card_index_covers_full_deck_without_collision():
    deck = make_deck_52()
    assert len(deck) == NUM_CARDS == NUM_ACTIONS
    indices = [card_index(c) for c in deck]
    # Deck order and index order agree
    assert indices == list(range(NUM_CARDS))
    for i in range(NUM_CARDS):
        assert card_index(card_from_index(i)) == i
    with pytest.raises(ValueError):
        card_from_index(NUM_CARDS)


def test_encode_card_set_bits():
    hand = [parse_card(c) for c in ("2C", "QS", "AH")]
    vec = encode_card_set(hand)
    assert vec.shape == (NUM_CARDS,)
    assert vec.dtype == np.float32
    assert vec.sum() == 3
    assert vec[0] == 1.0 and vec[NUM_CARDS - 1] == 1.0
    assert decode_card_set(vec) == hand


def test_play_observation_layout():
    state = new_game(GameConfig(), random.Random(11))
    state = replace(state, phase=Phase.PLAYING, hearts_broken=True, round_scores=(13, 0, 0, 0))
    obs = encode_play_observation(state, 2)
    assert obs.shape == (OBS_SIZE,)
    assert OBS_SIZE == 169
    assert decode_card_set(obs[HAND_SLICE]) == list(state.hand(2))
    assert obs[TRICK_SLICE].sum() == 0
    assert obs[GATHERED_SLICE].sum() == 0
    assert list(obs[SEAT_SLICE]) == [0.0, 0.0, 1.0, 0.0]
    assert obs[LEAD_SLICE].sum() == 0
    assert obs[HEARTS_BROKEN_INDEX] == 1.0
    assert obs[HEARTS_BROKEN_INDEX + 1] == pytest.approx(0.5)


def test_play_observation_sees_trick_and_lead():
    state = new_game(GameConfig(), random.Random(12))
    played = state.hand(1)[0]
    state = replace(state, phase=Phase.PLAYING, current_trick=((1, played),), lead_suit=played.suit)
    obs = encode_play_observation(state, 0)
    assert decode_card_set(obs[TRICK_SLICE]) == [played]
    assert obs[LEAD_SLICE][int(played.suit)] == 1.0


def test_legal_action_mask():
    legal = [Card(0, 2), parse_card("QS")]
    mask = legal_action_mask(legal)
    assert mask.shape == (NUM_ACTIONS,)
    assert mask.dtype == bool
    assert mask.sum() == 2
    assert mask[card_index(parse_card("QS"))]
