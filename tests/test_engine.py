"""Tests for the Hearts deck, deal and trick rules."""
import random

import pytest

from hearts.deal import (
    PassDirection,
    deal_4p,
    exchange_passes,
    pass_source,
    pass_target,
    passing_direction,
)
from hearts.deck import (
    POINT_CARDS,
    QUEEN_OF_SPADES,
    TWO_OF_CLUBS,
    Card,
    Suit,
    cards_point_total,
    make_deck_52,
    parse_card,
    shuffle,
    sort_hand,
)
from hearts.errors import InvariantViolationError
from hearts.play import legal_plays, opening_leader, point_value, trick_points, trick_winner


def C(code: str) -> Card:
    return parse_card(code)


def test_deck_52():
    deck = make_deck_52()
    assert len(deck) == 52
    assert len(set(deck)) == 52
    for suit in Suit:
        assert sum(1 for c in deck if c.suit == suit) == 13


def test_shuffle_is_a_permutation():
    deck = make_deck_52()
    rng = random.Random(42)
    for _ in range(20):
        shuffled = shuffle(deck, rng)
        assert len(shuffled) == 52
        assert set(shuffled) == set(deck)
    # Input is not modified
    assert deck == make_deck_52()


def test_shuffle_depends_only_on_rng():
    deck = make_deck_52()
    assert shuffle(deck, random.Random(7)) == shuffle(deck, random.Random(7))
    assert shuffle(deck, random.Random(7)) != shuffle(deck, random.Random(8))


def test_shuffle_with_injected_source():
    class AlwaysTop:
        def random(self):
            return 0.999999

    # j == i at every step: the order is kept
    assert shuffle(make_deck_52(), AlwaysTop()) == make_deck_52()


def test_deal_4p_partitions_deck():
    rng = random.Random(42)
    deal = deal_4p(rng=rng)
    all_cards = []
    for hand in deal.hands:
        assert len(hand) == 13
        assert hand == sort_hand(hand)
        all_cards.extend(hand)
    assert len(all_cards) == 52
    assert set(all_cards) == set(make_deck_52())
    for suit in Suit:
        assert sum(1 for c in all_cards if c.suit == suit) == 13


def test_deal_round_robin_order():
    class AlwaysTop:
        def random(self):
            return 0.999999

    deck = make_deck_52()
    deal = deal_4p(deck=deck, rng=AlwaysTop())
    for seat in range(4):
        assert deal.hands[seat] == sort_hand(deck[seat::4])


def test_deal_rejects_short_deck():
    with pytest.raises(ValueError):
        deal_4p(deck=make_deck_52()[:40], rng=random.Random(1))


def test_sort_hand_order_and_idempotence():
    hand = [C("AH"), C("2S"), C("KC"), C("3D"), C("2C"), C("10S")]
    ordered = sort_hand(hand)
    assert ordered == [C("2C"), C("KC"), C("3D"), C("2S"), C("10S"), C("AH")]
    assert sort_hand(ordered) == ordered


def test_parse_card_and_code():
    assert parse_card("QS") == QUEEN_OF_SPADES
    assert parse_card("2♣") == TWO_OF_CLUBS
    assert parse_card("10h") == Card(Suit.HEARTS, 10)
    assert Card(Suit.DIAMONDS, 11).code == "JD"
    assert str(QUEEN_OF_SPADES) == "Q♠"
    for card in make_deck_52():
        assert parse_card(card.code) == card
    for bad in ("", "1S", "QX", "11H", "S"):
        with pytest.raises(ValueError):
            parse_card(bad)


def test_card_identity_is_suit_and_rank():
    assert Card(Suit.SPADES, 12) == QUEEN_OF_SPADES
    assert Card(2, 12) == QUEEN_OF_SPADES
    assert len({Card(Suit.HEARTS, 5), Card(Suit.HEARTS, 5)}) == 1
    with pytest.raises(ValueError):
        Card(Suit.HEARTS, 1)


def test_point_values():
    assert point_value(C("2H")) == 1
    assert point_value(C("AH")) == 1
    assert point_value(QUEEN_OF_SPADES) == 13
    assert point_value(C("KS")) == 0
    assert point_value(C("QD")) == 0
    assert cards_point_total(make_deck_52()) == 26
    assert cards_point_total(POINT_CARDS) == 26


def test_passing_direction_cycle():
    expected = [PassDirection.LEFT, PassDirection.RIGHT, PassDirection.ACROSS, PassDirection.HOLD]
    for round_number in range(1, 13):
        assert passing_direction(round_number) == expected[(round_number - 1) % 4]
    with pytest.raises(ValueError):
        passing_direction(0)


def test_pass_source_and_target_are_inverse():
    for direction in (PassDirection.LEFT, PassDirection.RIGHT, PassDirection.ACROSS):
        for seat in range(4):
            assert pass_source(pass_target(seat, direction), direction) == seat
    assert pass_source(0, PassDirection.LEFT) == 1
    assert pass_source(0, PassDirection.RIGHT) == 3
    assert pass_source(0, PassDirection.ACROSS) == 2
    assert pass_source(0, PassDirection.HOLD) is None


def test_exchange_passes_left():
    deal = deal_4p(rng=random.Random(3))
    passes = [hand[:3] for hand in deal.hands]
    hands = exchange_passes(deal.hands, passes, PassDirection.LEFT)
    for seat in range(4):
        assert len(hands[seat]) == 13
        assert hands[seat] == sort_hand(hands[seat])
        # Seat i receives what seat i+1 gave
        for card in passes[(seat + 1) % 4]:
            assert card in hands[seat]
        for card in passes[seat]:
            assert card not in hands[seat]
    assert set(c for h in hands for c in h) == set(make_deck_52())


def test_exchange_passes_rejects_foreign_cards():
    deal = deal_4p(rng=random.Random(4))
    passes = [hand[:3] for hand in deal.hands]
    passes[0] = deal.hands[1][:3]
    with pytest.raises(ValueError):
        exchange_passes(deal.hands, passes, PassDirection.ACROSS)


def test_opening_leader_holds_two_of_clubs():
    deal = deal_4p(rng=random.Random(5))
    leader = opening_leader(deal.hands)
    assert TWO_OF_CLUBS in deal.hands[leader]


def test_first_trick_lead_must_be_two_of_clubs():
    hand = [C("2C"), C("9C"), C("5D"), C("AS"), C("3H")]
    assert legal_plays(hand, [], None, False, first_trick=True) == [TWO_OF_CLUBS]


def test_lead_excludes_hearts_until_broken():
    hand = [C("9C"), C("5D"), C("3H"), C("KH")]
    assert legal_plays(hand, [], None, False) == [C("9C"), C("5D")]
    assert legal_plays(hand, [], None, True) == hand


def test_lead_all_hearts_hand_may_lead_hearts():
    hand = [C("3H"), C("KH")]
    assert legal_plays(hand, [], None, False) == hand


def test_follow_suit_when_able():
    hand = [C("9C"), C("5D"), C("JD"), C("3H")]
    trick = [(1, C("2D"))]
    assert legal_plays(hand, trick, Suit.DIAMONDS, False) == [C("5D"), C("JD")]


def test_void_may_discard_anything():
    hand = [C("9C"), C("QS"), C("3H")]
    trick = [(1, C("2D"))]
    assert legal_plays(hand, trick, Suit.DIAMONDS, False) == hand
    # Also on the first trick: no protection for point cards
    assert legal_plays(hand, trick, Suit.DIAMONDS, False, first_trick=True) == hand


def test_legal_plays_never_empty():
    rng = random.Random(99)
    deck = make_deck_52()
    for _ in range(300):
        cards = shuffle(deck, rng)
        size = rng.randint(1, 13)
        hand = cards[:size]
        trick_len = rng.randint(0, 3)
        trick = [(i, c) for i, c in enumerate(cards[size:size + trick_len])]
        lead = trick[0][1].suit if trick else None
        broken = rng.random() < 0.5
        legal = legal_plays(hand, trick, lead, broken)
        assert legal
        assert set(legal).issubset(hand)


def test_trick_winner_highest_of_led_suit():
    trick = [(0, C("2C")), (1, C("5C")), (2, C("KC")), (3, C("9C"))]
    assert trick_winner(trick, Suit.CLUBS) == (2, C("KC"))
    assert trick_points(trick) == 0


def test_trick_winner_off_suit_never_wins():
    trick = [(2, C("4D")), (3, C("AS")), (0, C("AH")), (1, C("3D"))]
    winner, card = trick_winner(trick, Suit.DIAMONDS)
    assert (winner, card) == (2, C("4D"))
    assert trick_points(trick) == 1


def test_trick_winner_random_tricks():
    rng = random.Random(17)
    deck = make_deck_52()
    for _ in range(200):
        cards = shuffle(deck, rng)[:4]
        trick = [(i, c) for i, c in enumerate(cards)]
        lead = cards[0].suit
        _, card = trick_winner(trick, lead)
        assert card.suit == lead
        assert card.rank == max(c.rank for c in cards if c.suit == lead)


def test_trick_winner_without_lead_suit_is_an_invariant_violation():
    with pytest.raises(InvariantViolationError):
        trick_winner([(0, C("2D")), (1, C("3D"))], Suit.CLUBS)
    with pytest.raises(InvariantViolationError):
        trick_winner([], Suit.CLUBS)
