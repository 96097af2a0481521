from __future__ import annotations

from .game import GameState
from .player import PlayerState
from .types import card_to_str


def _player_to_dict(p: PlayerState) -> dict[str, object]:
    return {
        "name": p.name,
        "total_score": p.total_score,
        "numbers": list(p.numbers),
        "modifiers": [card_to_str(m) for m in p.modifiers],
        "extra_life": p.extra_life,
        "frozen": p.frozen,
        "busted": p.busted,
        "stayed": p.stayed,
    }


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game state."""
    return {
        "seed": state.seed,
        "round_number": state.round_number,
        "dealer_index": state.dealer_index,
        "winners": state.winners,
        "players": [_player_to_dict(p) for p in state.players],
        "deck": {
            "draw": [card_to_str(c) for c in state.deck.draw_pile],
            "discard": [card_to_str(c) for c in state.deck.discard_pile],
            "reshuffles": state.deck.reshuffles,
        },
        "event_log": list(state.event_log),
    }
