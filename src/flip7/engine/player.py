from __future__ import annotations

from dataclasses import dataclass, field

from .types import ModifierCard


@dataclass
class PlayerState:
    name: str
    total_score: int = 0

    # Round state, cleared by reset_for_round()
    numbers: list[int] = field(default_factory=list)  # distinct, in draw order
    modifiers: list[ModifierCard] = field(default_factory=list)
    extra_life: bool = False
    frozen: bool = False
    busted: bool = False
    stayed: bool = False

    def reset_for_round(self) -> None:
        self.numbers = []
        self.modifiers = []
        self.extra_life = False
        self.frozen = False
        self.busted = False
        self.stayed = False

    @property
    def is_active(self) -> bool:
        return not (self.frozen or self.busted or self.stayed)

    @property
    def eliminated(self) -> bool:
        """Frozen or busted: scores nothing this round."""
        return self.frozen or self.busted

    def has_number(self, value: int) -> bool:
        return value in self.numbers

    def add_number(self, value: int) -> None:
        if self.has_number(value):
            raise ValueError(f"{self.name} already holds {value}")
        self.numbers.append(value)

    def add_modifier(self, card: ModifierCard) -> None:
        self.modifiers.append(card)

    def freeze(self) -> None:
        self.frozen = True

    def bust(self) -> None:
        self.busted = True

    def stay(self) -> None:
        self.stayed = True

    def grant_extra_life(self) -> None:
        if self.extra_life:
            raise ValueError(f"{self.name} already holds an extra life")
        self.extra_life = True

    def consume_extra_life(self) -> None:
        self.extra_life = False
