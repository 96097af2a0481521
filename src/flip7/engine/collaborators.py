from __future__ import annotations

from typing import Literal, Mapping, Protocol, Sequence

from .player import PlayerState

Choice = Literal["hit", "stay"]


class ChoiceProvider(Protocol):
    def ask_hit_or_stay(self, player: PlayerState, potential: int) -> Choice: ...


class SelectionProvider(Protocol):
    def choose_player(self, candidates: Sequence[PlayerState], prompt: str) -> int | None:
        """Return an index into `candidates`, or None to decline."""
        ...


class EventSink(Protocol):
    def log(self, event_type: str, payload: Mapping[str, object]) -> None: ...
