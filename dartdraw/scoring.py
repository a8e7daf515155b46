"""Skill scores used to rank players."""

from typing import Callable

from .constants import MPR_WEIGHT, SORT_COMBO, SORT_KEYS, SORT_MPR, SORT_PPD
from .models import Player


def combo_score(player: Player) -> float:
    """
    Composite rating across game types.

    combo = ppd + mpr * 10

    Example:
        >>> combo_score(Player('Ann Lee', ppd=3, mpr=5))
        53
    """
    return player.ppd + player.mpr * MPR_WEIGHT


def ppd_score(player: Player) -> float:
    """Points per dart (x01 games)."""
    return player.ppd


def mpr_score(player: Player) -> float:
    """Marks per round (Cricket)."""
    return player.mpr


SCORE_FUNCTIONS: dict[str, Callable[[Player], float]] = {
    SORT_COMBO: combo_score,
    SORT_PPD: ppd_score,
    SORT_MPR: mpr_score,
}


def get_score_function(sort_key: str) -> Callable[[Player], float]:
    """Look up the score function for a sort key ('combo', 'ppd' or 'mpr')."""
    try:
        return SCORE_FUNCTIONS[sort_key]
    except KeyError:
        raise ValueError(
            f'Invalid sort key: {sort_key} (expected one of {", ".join(SORT_KEYS)})'
        ) from None


def player_stat(player: Player, sort_key: str = SORT_COMBO) -> float:
    """Score a player by the given sort key."""
    return get_score_function(sort_key)(player)


def sort_by_skill(players: list[Player], sort_key: str = SORT_COMBO) -> list[Player]:
    """
    Sort players strongest first.

    The sort is stable, so players with equal scores keep their roster order.
    """
    return sorted(players, key=get_score_function(sort_key), reverse=True)


def format_stat(player: Player, sort_key: str = SORT_COMBO) -> str:
    """Label such as 'Combo: 53.00' for display next to a player."""
    label = 'Combo' if sort_key == SORT_COMBO else sort_key.upper()
    return f'{label}: {player_stat(player, sort_key):.2f}'
