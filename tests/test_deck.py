from __future__ import annotations

import random
from collections import Counter

import pytest

from flip7.engine.deck import Deck, DeckInvariantError, build_deck, stacked_deck
from flip7.engine.types import DeckComposition, action, card_to_str, double, number, plus


def test_standard_deck_composition() -> None:
    deck = build_deck(DeckComposition.standard(), random.Random(1))
    assert deck.draw_count == 94
    assert deck.discard_count == 0

    counts = Counter(card_to_str(c) for c in deck.draw_pile)
    for v in range(1, 13):
        assert counts[f"#{v}"] == v
    assert counts["#0"] == 1
    assert counts["x2"] == 1
    for b in (2, 4, 6, 8, 10):
        assert counts[f"+{b}"] == 1
    assert counts["FREEZE"] == 3
    assert counts["FLIP_THREE"] == 3
    assert counts["SECOND_CHANCE"] == 3


def test_shuffle_is_seeded() -> None:
    a = build_deck(DeckComposition.standard(), random.Random(7))
    b = build_deck(DeckComposition.standard(), random.Random(7))
    c = build_deck(DeckComposition.standard(), random.Random(8))
    assert a.draw_pile == b.draw_pile
    assert a.draw_pile != c.draw_pile


def test_stacked_deck_draws_in_order() -> None:
    deck = stacked_deck([number(1), double(), action("freeze")])
    assert deck.draw() == number(1)
    assert deck.draw() == double()
    assert deck.draw() == action("freeze")


def test_reshuffles_discard_when_draw_pile_empty() -> None:
    deck = stacked_deck([number(3), plus(4)])
    for _ in range(2):
        deck.discard(deck.draw())
    assert deck.draw_count == 0
    assert deck.discard_count == 2

    card = deck.draw()
    assert card in (number(3), plus(4))
    assert deck.reshuffles == 1
    assert deck.discard_count == 0
    assert deck.draw_count == 1
    deck.discard(card)
    deck.check_conservation()


def test_drawing_from_two_empty_piles_is_fatal() -> None:
    deck = stacked_deck([number(5)])
    deck.draw()
    with pytest.raises(DeckInvariantError):
        deck.draw()


def test_conservation_counts_outstanding_cards() -> None:
    deck = build_deck(DeckComposition.standard(), random.Random(2))
    card = deck.draw()
    assert deck.outstanding == 1
    deck.check_conservation()
    deck.discard(card)
    assert deck.outstanding == 0
    deck.check_conservation()


def test_conservation_mismatch_is_detected() -> None:
    deck = Deck(draw_pile=[number(1), number(2)], rng=random.Random(0))
    deck.draw_pile.pop()  # a card vanishes
    with pytest.raises(DeckInvariantError):
        deck.check_conservation()


def test_discard_without_draw_is_rejected() -> None:
    deck = stacked_deck([number(1)])
    with pytest.raises(DeckInvariantError):
        deck.discard(number(9))
