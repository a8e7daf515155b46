"""Manual edits to draw groups.

All edits are pure: they return a new DrawGroups and never change the size
of any group or the set of players across groups.
"""

import logging
import random
from typing import Optional

from .errors import GroupIndexError, TournamentCompletedError
from .models import DrawGroups

logger = logging.getLogger('dartdraw.groups')


def ensure_editable(tournament_id: str, completed: bool) -> None:
    """
    Guard for mutating operations.

    Raises:
        TournamentCompletedError: If the tournament is completed
    """
    if completed:
        raise TournamentCompletedError(tournament_id)


def _check_position(groups: DrawGroups, group_name: str, index: int) -> None:
    try:
        group = groups.get(group_name)
    except KeyError:
        raise GroupIndexError(
            f'Unknown group: {group_name} (expected one of {", ".join(groups.names)})'
        ) from None
    if not 0 <= index < len(group):
        raise GroupIndexError(
            f'Position {index} is out of range for group {group_name} (size {len(group)})'
        )


def swap(
    groups: DrawGroups,
    group_from: str,
    index_from: int,
    group_to: str,
    index_to: int,
) -> DrawGroups:
    """
    Exchange the occupants of two positions.

    Works within one group or across groups, including empty pick slots.

    Args:
        groups: Current groups
        group_from: Name of the source group
        index_from: Position in the source group
        group_to: Name of the target group
        index_to: Position in the target group

    Returns:
        New DrawGroups with the two occupants exchanged

    Raises:
        GroupIndexError: If a group name or position is invalid
    """
    _check_position(groups, group_from, index_from)
    _check_position(groups, group_to, index_to)

    if group_from == group_to:
        slots = list(groups.get(group_from).slots)
        slots[index_from], slots[index_to] = slots[index_to], slots[index_from]
        return groups.replace(group_from, tuple(slots))

    from_slots = list(groups.get(group_from).slots)
    to_slots = list(groups.get(group_to).slots)
    from_slots[index_from], to_slots[index_to] = to_slots[index_to], from_slots[index_from]
    return groups.replace(group_from, tuple(from_slots)).replace(group_to, tuple(to_slots))


def shuffle(
    groups: DrawGroups,
    group_name: str,
    rng: Optional[random.Random] = None,
) -> DrawGroups:
    """
    Apply one uniform random permutation to a single group.

    Raises:
        GroupIndexError: If the group does not exist
    """
    try:
        slots = list(groups.get(group_name).slots)
    except KeyError:
        raise GroupIndexError(f'Unknown group: {group_name}') from None

    (rng or random).shuffle(slots)
    logger.debug(f'Shuffled group {group_name} ({len(slots)} slots)')
    return groups.replace(group_name, tuple(slots))
