from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from .actions import resolve_action
from .collaborators import ChoiceProvider, SelectionProvider
from .scoring import round_points, score_round
from .types import ActionCard, ModifierCard, NumberCard, card_to_str

if TYPE_CHECKING:
    from .game import GameState

DrawSignal = Literal["continue", "round_ended"]
DrawPhase = Literal["initial_deal", "hit", "flip_three", "second_chance"]


@dataclass
class RoundOutcome:
    round_number: int
    dealer: str
    ended_by_flip7: bool
    flip7_player: str | None = None
    gained: dict[str, int] = field(default_factory=dict)
    game_over: bool = False
    winners: list[str] = field(default_factory=list)


class RoundController:
    """Runs one round: initial deal, hit/stay sweeps, then scoring.

    Owns the deck and the player rows for the duration of the round. The
    collaborators are the only places where control leaves the engine.
    """

    def __init__(self, state: GameState, chooser: ChoiceProvider, selector: SelectionProvider) -> None:
        self.state = state
        self.chooser = chooser
        self.selector = selector
        self.flip7_player: str | None = None

    def emit(self, event_type: str, **payload: object) -> None:
        self.state.emit(event_type, payload)

    def turn_order(self) -> list[int]:
        n = len(self.state.players)
        return [(self.state.dealer_index + i) % n for i in range(n)]

    def resolve_draw(self, idx: int, phase: DrawPhase = "hit") -> DrawSignal:
        """Draw one card for player `idx` and apply it.

        A SECOND_CHANCE asks for an immediate follow-up draw; that is handled
        by looping here rather than recursing.
        """
        deck = self.state.deck
        player = self.state.players[idx]
        cfg = self.state.config

        while True:
            card = deck.draw()
            self.emit("DRAW", player=player.name, card=card_to_str(card), phase=phase)

            if isinstance(card, NumberCard):
                deck.discard(card)
                if player.has_number(card.value):
                    if player.extra_life:
                        player.consume_extra_life()
                        self.emit("SECOND_CHANCE_USED", player=player.name, duplicate=card.value)
                    else:
                        player.bust()
                        self.emit("BUST_DUPLICATE", player=player.name, duplicate=card.value)
                    signal: DrawSignal = "continue"
                else:
                    player.add_number(card.value)
                    if len(player.numbers) >= cfg.flip7_count:
                        self.flip7_player = player.name
                        self.emit("FLIP7", player=player.name)
                        signal = "round_ended"
                    else:
                        signal = "continue"
                deck.check_conservation()
                return signal

            if isinstance(card, ModifierCard):
                player.add_modifier(card)
                deck.discard(card)
                deck.check_conservation()
                return "continue"

            assert isinstance(card, ActionCard)
            result = resolve_action(self, card, idx)
            deck.check_conservation()
            if result.round_ended:
                return "round_ended"
            if result.force_draw and player.is_active:
                phase = "second_chance"
                continue
            return "continue"

    def initial_deal(self) -> bool:
        for idx in self.turn_order():
            if self.resolve_draw(idx, phase="initial_deal") == "round_ended":
                return True
        return False

    def turn_phase(self) -> bool:
        players = self.state.players
        while any(p.is_active for p in players):
            for idx in self.turn_order():
                player = players[idx]
                if not player.is_active:
                    continue
                choice = self.chooser.ask_hit_or_stay(player, score_round(player, self.state.config))
                if choice not in ("hit", "stay"):
                    raise ValueError(f"Invalid choice {choice!r} for {player.name}")
                self.emit("CHOICE", player=player.name, choice=choice)
                if choice == "stay":
                    player.stay()
                elif self.resolve_draw(idx, phase="hit") == "round_ended":
                    return True
        return False

    def finalize_scores(self, ended_by_flip7: bool) -> dict[str, int]:
        state = self.state
        self.emit(
            "ROUND_END",
            round=state.round_number,
            dealer=state.players[state.dealer_index].name,
            ended_by_flip7=ended_by_flip7,
        )
        gained: dict[str, int] = {}
        for p in state.players:
            points = round_points(p, state.config)
            p.total_score += points
            p.extra_life = False
            gained[p.name] = points
            self.emit("ROUND_SCORE", player=p.name, gained=points, total=p.total_score)
        return gained

    def play(self) -> RoundOutcome:
        state = self.state
        for p in state.players:
            p.reset_for_round()
        self.emit("ROUND_START", round=state.round_number, dealer=state.players[state.dealer_index].name)

        ended = self.initial_deal()
        if not ended:
            ended = self.turn_phase()

        gained = self.finalize_scores(ended)
        return RoundOutcome(
            round_number=state.round_number,
            dealer=state.players[state.dealer_index].name,
            ended_by_flip7=ended,
            flip7_player=self.flip7_player,
            gained=gained,
        )
