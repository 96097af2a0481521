from __future__ import annotations

from typing import Callable, Sequence

from flip7.engine.collaborators import Choice
from flip7.engine.player import PlayerState
from flip7.engine.types import card_to_str

HIT_TOKENS = ("h", "hit")
STAY_TOKENS = ("s", "stay")


class ConsolePrompter:
    """Setup, hit/stay and player-selection prompts on a shared terminal.

    Invalid input is never an error: every prompt loops until it gets an
    answer it can use.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
    ) -> None:
        self._input = input_fn or input
        self._output = output_fn or print

    def ask_player_count(self, minimum: int = 2) -> int:
        while True:
            raw = self._input(f"Number of players (>= {minimum})? ").strip()
            try:
                n = int(raw)
            except ValueError:
                n = 0
            if n >= minimum:
                return n
            self._output(f"Enter a whole number of at least {minimum}.")

    def ask_player_names(self, count: int) -> list[str]:
        names: list[str] = []
        while len(names) < count:
            i = len(names) + 1
            name = self._input(f"Name of player {i}? ").strip() or f"P{i}"
            if name in names:
                self._output(f"{name} is already taken.")
                continue
            names.append(name)
        return names

    def ask_hit_or_stay(self, player: PlayerState, potential: int) -> Choice:
        numbers = ", ".join(str(n) for n in player.numbers)
        mods = ", ".join(card_to_str(m) for m in player.modifiers)
        self._output("")
        self._output("---")
        self._output(f"{player.name}'s turn")
        self._output(
            f"Numbers: [{numbers}] | Modifiers: [{mods}] | Second chance: {'yes' if player.extra_life else 'no'}"
        )
        self._output(f"Staying now banks {potential} points.")
        while True:
            answer = self._input("(h)it or (s)tay? ").strip().lower()
            if answer in HIT_TOKENS:
                return "hit"
            if answer in STAY_TOKENS:
                return "stay"

    def choose_player(self, candidates: Sequence[PlayerState], prompt: str) -> int | None:
        if not candidates:
            return None
        self._output(prompt)
        for k, p in enumerate(candidates, start=1):
            self._output(f"  {k}) {p.name}")
        while True:
            raw = self._input("Choice (number): ").strip()
            if raw.isdigit() and 1 <= int(raw) <= len(candidates):
                return int(raw) - 1
            self._output("Invalid choice.")
