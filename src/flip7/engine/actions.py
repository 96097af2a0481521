from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .types import ActionCard

if TYPE_CHECKING:
    from .round import RoundController


@dataclass(frozen=True)
class ActionResult:
    round_ended: bool = False
    force_draw: bool = False


def _second_chance_recipient(table: RoundController, receiver: int) -> int | None:
    players = table.state.players
    candidates = [
        i for i, p in enumerate(players) if i != receiver and p.is_active and not p.extra_life
    ]
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]

    k = table.selector.choose_player(
        [players[i] for i in candidates],
        f"Extra SECOND_CHANCE: {players[receiver].name} must give it to another active player",
    )
    if k is None:
        return None
    if not 0 <= k < len(candidates):
        raise ValueError(f"Selection {k} is not one of the {len(candidates)} offered players.")
    return candidates[k]


def _freeze(table: RoundController, receiver: int) -> ActionResult:
    player = table.state.players[receiver]
    player.freeze()
    table.emit("ACTION_FREEZE", receiver=player.name)
    return ActionResult()


def _second_chance(table: RoundController, receiver: int) -> ActionResult:
    player = table.state.players[receiver]
    if not player.extra_life:
        player.grant_extra_life()
        table.emit("ACTION_SECOND_CHANCE_TAKEN", player=player.name)
        return ActionResult(force_draw=True)

    other = _second_chance_recipient(table, receiver)
    if other is None:
        table.emit("ACTION_SECOND_CHANCE_DISCARDED", by=player.name)
    else:
        target = table.state.players[other]
        target.grant_extra_life()
        table.emit("ACTION_SECOND_CHANCE_GIVEN", **{"from": player.name, "to": target.name})
    return ActionResult(force_draw=True)


def _flip_three(table: RoundController, receiver: int) -> ActionResult:
    player = table.state.players[receiver]
    table.emit("ACTION_FLIP_THREE", receiver=player.name)
    for _ in range(table.state.config.flip_three_draws):
        if table.resolve_draw(receiver, phase="flip_three") == "round_ended":
            return ActionResult(round_ended=True)
        if not player.is_active:
            break
    return ActionResult()


def resolve_action(table: RoundController, card: ActionCard, receiver: int) -> ActionResult:
    """Apply an action card drawn by `receiver`.

    The card goes to the discard pile before its effect resolves.
    """
    table.state.deck.discard(card)
    if card.action == "freeze":
        return _freeze(table, receiver)
    if card.action == "second_chance":
        return _second_chance(table, receiver)
    if card.action == "flip_three":
        return _flip_three(table, receiver)
    raise ValueError(f"Unknown action card: {card.action}")
