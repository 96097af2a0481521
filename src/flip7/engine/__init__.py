"""Deterministic, headless rules engine for Flip Seven.

IMPORTANT: This package must never read from or write to the console.
"""

from .collaborators import Choice, ChoiceProvider, EventSink, SelectionProvider
from .deck import Deck, DeckInvariantError, build_deck
from .game import GameConfig, GameState, new_game, play_round, run_game
from .player import PlayerState
from .round import RoundController, RoundOutcome
from .scoring import score_round
from .types import ActionCard, Card, DeckComposition, ModifierCard, NumberCard

__all__ = [
    "ActionCard",
    "Card",
    "Choice",
    "ChoiceProvider",
    "Deck",
    "DeckComposition",
    "DeckInvariantError",
    "EventSink",
    "GameConfig",
    "GameState",
    "ModifierCard",
    "NumberCard",
    "PlayerState",
    "RoundController",
    "RoundOutcome",
    "SelectionProvider",
    "build_deck",
    "new_game",
    "play_round",
    "run_game",
    "score_round",
]
