from __future__ import annotations

from typing import Callable, Mapping

_BANNER = "===================="


def describe(event_type: str, payload: Mapping[str, object]) -> list[str]:
    """Human-readable lines for one engine event (may be empty)."""
    p = payload
    if event_type == "ROUND_START":
        return ["", _BANNER, f"Round {p['round']} | Dealer: {p['dealer']}", _BANNER]
    if event_type == "DRAW":
        return [f"-> {p['player']} draws: {p['card']}"]
    if event_type == "ACTION_FREEZE":
        return [f"FREEZE! {p['receiver']} is out for this round and scores 0."]
    if event_type == "ACTION_SECOND_CHANCE_TAKEN":
        return [f"{p['player']} takes a SECOND CHANCE (cancels one duplicate)."]
    if event_type == "ACTION_SECOND_CHANCE_GIVEN":
        return [f"{p['from']} gives the SECOND CHANCE to {p['to']}."]
    if event_type == "ACTION_SECOND_CHANCE_DISCARDED":
        return ["SECOND CHANCE discarded (nobody can take it)."]
    if event_type == "ACTION_FLIP_THREE":
        return [f"FLIP THREE! {p['receiver']} must draw 3 cards."]
    if event_type == "SECOND_CHANCE_USED":
        return [f"Duplicate {p['duplicate']} cancelled by {p['player']}'s SECOND CHANCE."]
    if event_type == "BUST_DUPLICATE":
        return [f"Duplicate {p['duplicate']}: {p['player']} busts (0 points this round)."]
    if event_type == "FLIP7":
        return [f"FLIP 7! {p['player']} has 7 numbers, the round stops now."]
    if event_type == "CHOICE" and p["choice"] == "stay":
        return [f"{p['player']} stays."]
    if event_type == "ROUND_END":
        return ["", "=== End of round ==="]
    if event_type == "ROUND_SCORE":
        return [f"{p['player']} scores {p['gained']} points (total = {p['total']})"]
    if event_type == "GAME_END":
        winners = p["winners"]
        assert isinstance(winners, list)
        return ["", "=== GAME OVER ===", f"Winner(s): {', '.join(str(w) for w in winners)} (best final score)"]
    return []


class ConsoleReporter:
    """Event sink that narrates the game on the terminal."""

    def __init__(self, output_fn: Callable[[str], None] | None = None) -> None:
        self._output = output_fn or print

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        for line in describe(event_type, payload):
            self._output(line)
