from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from .collaborators import ChoiceProvider, EventSink, SelectionProvider
from .deck import Deck, build_deck
from .player import PlayerState
from .round import RoundController, RoundOutcome
from .types import DeckComposition

Event = dict[str, object]


@dataclass(frozen=True)
class GameConfig:
    target_score: int = 200
    flip7_count: int = 7
    flip7_bonus: int = 15
    flip_three_draws: int = 3
    min_players: int = 2


@dataclass
class GameState:
    config: GameConfig
    seed: int
    rng: random.Random
    deck: Deck
    players: list[PlayerState]
    sink: EventSink | None = None
    dealer_index: int = 0
    round_number: int = 0
    winners: list[str] | None = None
    rounds: list[RoundOutcome] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    def emit(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.event_log.append({"type": event_type, **payload})
        if self.sink is not None:
            self.sink.log(event_type, payload)

    @property
    def dealer(self) -> PlayerState:
        return self.players[self.dealer_index]


def new_game(
    names: Sequence[str],
    seed: int | None = None,
    config: GameConfig | None = None,
    sink: EventSink | None = None,
    composition: DeckComposition | None = None,
    deck: Deck | None = None,
) -> GameState:
    cfg = config or GameConfig()
    if len(names) < cfg.min_players:
        raise ValueError(f"Need at least {cfg.min_players} players, got {len(names)}.")
    if len(set(names)) != len(names):
        raise ValueError("Player names must be unique.")

    if seed is None:
        seed = random.SystemRandom().randrange(2**31)
    rng = random.Random(seed)
    if deck is None:
        deck = build_deck(composition or DeckComposition.standard(), rng)

    state = GameState(
        config=cfg,
        seed=seed,
        rng=rng,
        deck=deck,
        players=[PlayerState(name=n) for n in names],
        sink=sink,
    )
    state.emit("GAME_START", {"players": list(names), "seed": seed})
    return state


def is_game_over(state: GameState) -> bool:
    return any(p.total_score >= state.config.target_score for p in state.players)


def winner_names(state: GameState) -> list[str]:
    best = max(p.total_score for p in state.players)
    return [p.name for p in state.players if p.total_score == best]


def play_round(state: GameState, chooser: ChoiceProvider, selector: SelectionProvider) -> RoundOutcome:
    """Play one full round, then check for game over and pass the deal."""
    if state.winners is not None:
        raise ValueError("Game already ended.")

    state.round_number += 1
    outcome = RoundController(state, chooser, selector).play()
    state.rounds.append(outcome)

    # Only checked once every player's score for the round is in.
    if is_game_over(state):
        state.winners = winner_names(state)
        outcome.game_over = True
        outcome.winners = list(state.winners)
        state.emit(
            "GAME_END",
            {
                "winners": list(state.winners),
                "final_scores": [{"name": p.name, "score": p.total_score} for p in state.players],
                "rounds": state.round_number,
            },
        )

    state.dealer_index = (state.dealer_index + 1) % len(state.players)
    return outcome


def run_game(
    state: GameState,
    chooser: ChoiceProvider,
    selector: SelectionProvider,
    max_rounds: int | None = None,
) -> list[str]:
    """Play rounds until someone reaches the target score.

    `max_rounds` is a safety valve for scripted play; when it is hit the
    game is left unfinished and an empty list is returned.
    """
    while state.winners is None:
        if max_rounds is not None and state.round_number >= max_rounds:
            return []
        play_round(state, chooser, selector)
    return list(state.winners)
