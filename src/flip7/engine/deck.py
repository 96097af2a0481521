from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from .types import Card, DeckComposition


class DeckInvariantError(RuntimeError):
    """Card accounting is broken; the game cannot continue safely."""


def _shuffle(rng: random.Random, items: list[Card]) -> None:
    rng.shuffle(items)


@dataclass
class Deck:
    """Draw pile plus discard pile, shared by every player for the whole game.

    The top of the draw pile is the end of the list. `outstanding` counts
    cards that have been drawn but not discarded yet; at rest it is 0.
    """

    draw_pile: list[Card]
    rng: random.Random
    discard_pile: list[Card] = field(default_factory=list)
    outstanding: int = 0
    total: int = 0
    reshuffles: int = 0

    def __post_init__(self) -> None:
        if not self.total:
            self.total = len(self.draw_pile) + len(self.discard_pile)

    @property
    def draw_count(self) -> int:
        return len(self.draw_pile)

    @property
    def discard_count(self) -> int:
        return len(self.discard_pile)

    def draw(self) -> Card:
        if not self.draw_pile:
            if not self.discard_pile:
                raise DeckInvariantError(
                    f"Cannot draw: draw and discard piles are both empty ({self.outstanding} outstanding)."
                )
            self.draw_pile = self.discard_pile
            self.discard_pile = []
            _shuffle(self.rng, self.draw_pile)
            self.reshuffles += 1
        card = self.draw_pile.pop()
        self.outstanding += 1
        return card

    def discard(self, card: Card) -> None:
        if self.outstanding <= 0:
            raise DeckInvariantError("Discarded a card that was never drawn.")
        self.outstanding -= 1
        self.discard_pile.append(card)

    def check_conservation(self) -> None:
        counted = self.draw_count + self.discard_count + self.outstanding
        if counted != self.total:
            raise DeckInvariantError(
                f"Card count mismatch: {self.draw_count} draw + {self.discard_count} discard"
                f" + {self.outstanding} outstanding != {self.total}"
            )


def build_deck(composition: DeckComposition, rng: random.Random) -> Deck:
    cards = composition.cards()
    _shuffle(rng, cards)
    return Deck(draw_pile=cards, rng=rng)


def stacked_deck(top_first: Sequence[Card], rng: random.Random | None = None) -> Deck:
    """Deck whose draws come out in the given order (first item drawn first)."""
    return Deck(draw_pile=list(reversed(top_first)), rng=rng or random.Random(0))
