from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

CardKind = Literal["number", "modifier", "action"]
ModifierType = Literal["x2", "plus"]
ActionType = Literal["freeze", "flip_three", "second_chance"]

PLUS_BONUSES: tuple[int, ...] = (2, 4, 6, 8, 10)
ACTION_TYPES: tuple[ActionType, ...] = ("freeze", "flip_three", "second_chance")


@dataclass(frozen=True)
class NumberCard:
    kind: Literal["number"]
    value: int


@dataclass(frozen=True)
class ModifierCard:
    kind: Literal["modifier"]
    modifier: ModifierType
    bonus: int = 0


@dataclass(frozen=True)
class ActionCard:
    kind: Literal["action"]
    action: ActionType


Card = NumberCard | ModifierCard | ActionCard


def number(value: int) -> NumberCard:
    return NumberCard(kind="number", value=value)


def double() -> ModifierCard:
    return ModifierCard(kind="modifier", modifier="x2")


def plus(bonus: int) -> ModifierCard:
    return ModifierCard(kind="modifier", modifier="plus", bonus=bonus)


def action(kind: ActionType) -> ActionCard:
    return ActionCard(kind="action", action=kind)


def card_to_str(card: Card) -> str:
    if isinstance(card, NumberCard):
        return f"#{card.value}"
    if isinstance(card, ModifierCard):
        return "x2" if card.modifier == "x2" else f"+{card.bonus}"
    return card.action.upper()


@dataclass(frozen=True)
class DeckComposition:
    """How many copies of each card go into a fresh deck.

    The standard deck has 94 cards:
      - numbers 1..12 with as many copies as their value, plus one 0
      - one x2 and one each of +2/+4/+6/+8/+10
      - three each of freeze, flip_three and second_chance
    """

    numbers: dict[int, int]
    doubles: int
    plus_bonuses: dict[int, int]
    actions: dict[ActionType, int]

    @staticmethod
    def standard() -> "DeckComposition":
        numbers = {v: v for v in range(1, 13)}
        numbers[0] = 1
        return DeckComposition(
            numbers=dict(sorted(numbers.items())),
            doubles=1,
            plus_bonuses={b: 1 for b in PLUS_BONUSES},
            actions={a: 3 for a in ACTION_TYPES},
        )

    def total_cards(self) -> int:
        return (
            sum(self.numbers.values())
            + self.doubles
            + sum(self.plus_bonuses.values())
            + sum(self.actions.values())
        )

    def cards(self) -> list[Card]:
        """Unshuffled card list, numbers first."""
        out: list[Card] = []
        for value, count in self.numbers.items():
            out.extend(number(value) for _ in range(count))
        out.extend(double() for _ in range(self.doubles))
        for bonus, count in self.plus_bonuses.items():
            out.extend(plus(bonus) for _ in range(count))
        for kind, count in self.actions.items():
            out.extend(action(kind) for _ in range(count))
        return out
