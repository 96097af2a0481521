from __future__ import annotations

from typing import TYPE_CHECKING

from .player import PlayerState

if TYPE_CHECKING:
    from .game import GameConfig

FLIP7_COUNT = 7
FLIP7_BONUS = 15


def score_round(player: PlayerState, config: GameConfig | None = None) -> int:
    """Points a player banks for the current row.

    x2 doubles only the number cards; +N bonuses and the Flip Seven bonus are
    added afterwards. Callers decide whether the player is eligible to score.
    """
    flip7_count = config.flip7_count if config is not None else FLIP7_COUNT
    flip7_bonus = config.flip7_bonus if config is not None else FLIP7_BONUS

    number_sum = sum(player.numbers)
    doubles = sum(1 for m in player.modifiers if m.modifier == "x2")
    add_bonus = sum(m.bonus for m in player.modifiers if m.modifier == "plus")
    flip_bonus = flip7_bonus if len(player.numbers) >= flip7_count else 0
    return number_sum * (2**doubles) + add_bonus + flip_bonus


def round_points(player: PlayerState, config: GameConfig | None = None) -> int:
    if player.eliminated:
        return 0
    return score_round(player, config)
