"""Team assembly from draw groups, and the reverse mapping for stored teams."""

import logging
import math
from typing import Optional

from .constants import AVAILABLE_TEAM_NAME, GROUP_AVAILABLE, TEAM_NAME_JOINER
from .errors import DrawValidationError
from .models import DrawGroups, Group, Player, Slot, Team
from .strategies import DrawStrategy

logger = logging.getLogger('dartdraw.assembler')


def team_name(players: list[Player]) -> str:
    """Join member first names: 'Ann and Bob'."""
    return TEAM_NAME_JOINER.join(p.first_name for p in players)


def assemble(groups: DrawGroups) -> list[Team]:
    """
    Pair team-forming groups positionally.

    Index i yields one team holding the occupant at i of every team group,
    in group order. Indices with no occupant are skipped. A pick pool with
    occupants is appended as the 'Available' pseudo-team.

    Example:
        A = [Dan, Ann], B = [Bob, Cy]
        -> [Team('Dan and Bob', ...), Team('Ann and Cy', ...)]
    """
    team_groups = groups.team_groups
    width = max((len(g) for g in team_groups), default=0)

    teams = []
    for i in range(width):
        members = [g.slots[i] for g in team_groups if i < len(g) and g.slots[i] is not None]
        if not members:
            continue
        teams.append(Team(name=team_name(members), players=tuple(p.name for p in members)))

    pool = groups.pool
    if pool is not None and pool.players:
        teams.append(
            Team(name=AVAILABLE_TEAM_NAME, players=tuple(p.name for p in pool.players))
        )
    return teams


def generate_teams(groups: DrawGroups, strategy: DrawStrategy) -> list[Team]:
    """
    Assemble teams after checking the groups can form them.

    Raises:
        DrawValidationError: If every group is empty, or fewer team groups
            hold players than the strategy requires
    """
    if groups.is_empty():
        raise DrawValidationError('No players to form teams')

    filled = [g.name for g in groups.team_groups if g.players]
    if len(filled) < strategy.min_filled_groups:
        empty = [g.name for g in groups.team_groups if not g.players]
        raise DrawValidationError(
            f'{strategy.name} needs players in groups {", ".join(g.name for g in groups.team_groups)}'
            f' (empty: {", ".join(empty)})'
        )
    return assemble(groups)


def teams_cover_roster(teams: list[Team], roster: list[Player]) -> bool:
    """True when the stored teams hold exactly the roster's players."""
    team_names = sorted(name for team in teams for name in team.players)
    return team_names == sorted(p.name for p in roster)


def restore_groups(
    teams: list[Team],
    roster: list[Player],
    strategy: DrawStrategy,
) -> Optional[DrawGroups]:
    """
    Rebuild groups from previously stored teams.

    Member k of each team goes to team group k. For the pick strategies a
    solo team is placed in the seeded group with an empty pick slot beside
    it, and the 'Available' team becomes the pool.

    Returns:
        DrawGroups, or None when the teams are empty or do not cover the
        roster (the caller should partition again)
    """
    if not teams or not roster or not teams_cover_roster(teams, roster):
        return None

    by_name = {p.name: p for p in roster}
    names = strategy.team_groups
    slots: dict[str, list[Slot]] = {name: [] for name in names}
    pool: list[Slot] = []

    for team in teams:
        members = [by_name[name] for name in team.players]
        if strategy.has_pool and team.name == AVAILABLE_TEAM_NAME:
            pool.extend(members)
            continue
        if len(members) > len(names):
            logger.warning(
                f'Stored team {team.name} has {len(members)} players, '
                f'{strategy.name} allows {len(names)}'
            )
            return None

        row: dict[str, Slot] = {name: None for name in names}
        if strategy.has_pool and len(members) == 1:
            row[strategy.seeded_group] = members[0]
        else:
            for name, member in zip(names, members):
                row[name] = member

        for name in names:
            slots[name].append(row[name])

    if strategy.has_pool:
        # The pick group always offers one slot per top-half player
        pick_slots = slots[strategy.pick_group]
        pick_slots.extend([None] * (math.ceil(len(roster) / 2) - len(pick_slots)))
    else:
        # Trailing gaps only come from shorter teams; drop them
        for name in names:
            while slots[name] and slots[name][-1] is None:
                slots[name].pop()

    groups = [Group(name=name, slots=tuple(slots[name])) for name in names]
    if strategy.has_pool:
        groups.append(Group(name=GROUP_AVAILABLE, slots=tuple(pool), forms_teams=False))
    return DrawGroups(groups=tuple(groups))
