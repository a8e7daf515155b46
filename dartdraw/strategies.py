"""
Partition strategies for turning a roster into draw groups.

Every strategy follows the same pipeline:

    order roster -> split into contiguous chunks -> route chunks to groups
    -> reverse weakest-first groups -> add empty pick slots

Each named tournament type is one DrawStrategy configuration of that
pipeline rather than its own implementation.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Optional

from .constants import (
    DISPLAY_NAME_TO_TYPE,
    GROUP_A,
    GROUP_AVAILABLE,
    GROUP_B,
    GROUP_C,
    GROUP_PLAYER1,
    GROUP_PLAYER2,
    SORT_COMBO,
    TOURNAMENT_TYPES,
)
from .errors import UnknownStrategyError
from .models import DrawGroups, Group, Player, Slot
from .scoring import get_score_function, sort_by_skill

logger = logging.getLogger('dartdraw.strategies')

# Roster ordering policies
ORDER_SKILL = 'skill'
ORDER_RANDOM = 'random'
ORDER_ROSTER = 'roster'

# Split policies
SPLIT_HALVES = 'halves'
SPLIT_THIRDS = 'thirds'
SPLIT_ALTERNATE = 'alternate'


@dataclass(frozen=True)
class DrawStrategy:
    """
    Configuration of one tournament type.

    Attributes:
        key: Registry key (e.g. 'parity_draw')
        name: Display name (e.g. 'Parity Draw')
        team_groups: Team-forming group names, in pairing order
        ordering: How the roster is ordered before splitting
        split: How the ordered roster is cut into chunks
        chunk_targets: Group receiving each chunk, in chunk order
        reversed_groups: Groups stored weakest-first
        pick_group: Group starting as empty slots, filled from the pool
        min_filled_groups: Team groups that must hold a player before teams
            can be generated
    """
    key: str
    name: str
    team_groups: tuple[str, ...]
    ordering: str = ORDER_SKILL
    split: str = SPLIT_HALVES
    chunk_targets: tuple[str, ...] = ()
    reversed_groups: frozenset[str] = field(default_factory=frozenset)
    pick_group: Optional[str] = None
    min_filled_groups: int = 1

    @property
    def uses_skill(self) -> bool:
        return self.ordering == ORDER_SKILL

    @property
    def has_pool(self) -> bool:
        return self.pick_group is not None

    @property
    def seeded_group(self) -> Optional[str]:
        """For pick strategies, the team group filled automatically."""
        if not self.has_pool:
            return None
        for name in self.team_groups:
            if name != self.pick_group:
                return name
        return None

    @property
    def group_names(self) -> tuple[str, ...]:
        if self.has_pool:
            return self.team_groups + (GROUP_AVAILABLE,)
        return self.team_groups

    def partition(
        self,
        roster: list[Player],
        sort_key: str = SORT_COMBO,
        rng: Optional[random.Random] = None,
    ) -> DrawGroups:
        """
        Split a roster into this strategy's groups.

        Args:
            roster: Players in roster order
            sort_key: 'combo', 'ppd' or 'mpr' (ignored by non-skill strategies)
            rng: Random source for the blind draw (default: module random)

        Returns:
            DrawGroups covering every roster player exactly once
        """
        ordered = self._order(list(roster), sort_key, rng)
        chunks = _split(ordered, self.split)

        slots: dict[str, list[Slot]] = {name: [] for name in self.group_names}
        for target, chunk in zip(self.chunk_targets, chunks):
            slots[target] = list(chunk)

        for name in self.reversed_groups:
            slots[name].reverse()

        if self.pick_group is not None:
            # One empty slot per player in the top half
            slots[self.pick_group] = [None] * len(chunks[0])

        groups = tuple(
            Group(name=name, slots=tuple(slots[name]), forms_teams=name != GROUP_AVAILABLE)
            for name in self.group_names
        )
        logger.debug(
            f'{self.name}: partitioned {len(roster)} players by {sort_key} into '
            + ', '.join(f'{g.name}={len(g.players)}' for g in groups)
        )
        return DrawGroups(groups=groups)

    def _order(
        self, players: list[Player], sort_key: str, rng: Optional[random.Random]
    ) -> list[Player]:
        if self.ordering == ORDER_SKILL:
            return sort_by_skill(players, sort_key)
        if self.ordering == ORDER_RANDOM:
            (rng or random).shuffle(players)
            return players
        return players


def _split(players: list[Player], policy: str) -> list[list[Player]]:
    """Cut an ordered player list into chunks."""
    n = len(players)
    if policy == SPLIT_HALVES:
        middle = math.ceil(n / 2)
        return [players[:middle], players[middle:]]
    if policy == SPLIT_THIRDS:
        third = math.ceil(n / 3)
        return [players[:third], players[third:third * 2], players[third * 2:]]
    if policy == SPLIT_ALTERNATE:
        return [players[0::2], players[1::2]]
    raise ValueError(f'Invalid split policy: {policy}')


AB_DRAW = DrawStrategy(
    key='ab_draw',
    name=TOURNAMENT_TYPES['ab_draw'],
    team_groups=(GROUP_A, GROUP_B),
    chunk_targets=(GROUP_A, GROUP_B),
)

BLIND_DRAW = DrawStrategy(
    key='blind_draw',
    name=TOURNAMENT_TYPES['blind_draw'],
    team_groups=(GROUP_A, GROUP_B),
    ordering=ORDER_RANDOM,
    chunk_targets=(GROUP_A, GROUP_B),
)

PARTNER_BRING = DrawStrategy(
    key='partner_bring',
    name=TOURNAMENT_TYPES['partner_bring'],
    team_groups=(GROUP_PLAYER1, GROUP_PLAYER2),
    ordering=ORDER_ROSTER,
    split=SPLIT_ALTERNATE,
    chunk_targets=(GROUP_PLAYER1, GROUP_PLAYER2),
)

# B is stored weakest-first, so A[i] meets the weakest remaining B player
PARITY_DRAW = DrawStrategy(
    key='parity_draw',
    name=TOURNAMENT_TYPES['parity_draw'],
    team_groups=(GROUP_A, GROUP_B),
    chunk_targets=(GROUP_A, GROUP_B),
    reversed_groups=frozenset({GROUP_B}),
    min_filled_groups=2,
)

LOW_PLAYER_PICK = DrawStrategy(
    key='low_player_pick',
    name=TOURNAMENT_TYPES['low_player_pick'],
    team_groups=(GROUP_A, GROUP_B),
    chunk_targets=(GROUP_AVAILABLE, GROUP_B),
    reversed_groups=frozenset({GROUP_B}),
    pick_group=GROUP_A,
    min_filled_groups=2,
)

HIGH_PLAYER_PICK = DrawStrategy(
    key='high_player_pick',
    name=TOURNAMENT_TYPES['high_player_pick'],
    team_groups=(GROUP_A, GROUP_B),
    chunk_targets=(GROUP_A, GROUP_AVAILABLE),
    reversed_groups=frozenset({GROUP_AVAILABLE}),
    pick_group=GROUP_B,
    min_filled_groups=2,
)

ABC_DRAW_TRIOS = DrawStrategy(
    key='abc_draw_trios',
    name=TOURNAMENT_TYPES['abc_draw_trios'],
    team_groups=(GROUP_A, GROUP_B, GROUP_C),
    split=SPLIT_THIRDS,
    chunk_targets=(GROUP_A, GROUP_B, GROUP_C),
)

STRATEGIES: dict[str, DrawStrategy] = {
    s.key: s
    for s in (
        AB_DRAW,
        BLIND_DRAW,
        PARTNER_BRING,
        PARITY_DRAW,
        LOW_PLAYER_PICK,
        HIGH_PLAYER_PICK,
        ABC_DRAW_TRIOS,
    )
}


def get_strategy(key_or_name: str) -> DrawStrategy:
    """
    Look up a strategy by registry key or display name.

    Accepts 'parity_draw' as well as the stored tournament type 'Parity Draw'.

    Raises:
        UnknownStrategyError: If nothing matches
    """
    if key_or_name in STRATEGIES:
        return STRATEGIES[key_or_name]
    key = DISPLAY_NAME_TO_TYPE.get(key_or_name)
    if key is None:
        raise UnknownStrategyError(key_or_name)
    return STRATEGIES[key]


def partition(
    roster: list[Player],
    strategy: DrawStrategy | str,
    sort_key: str = SORT_COMBO,
    rng: Optional[random.Random] = None,
) -> DrawGroups:
    """
    Partition a roster with the given strategy.

    Regenerating discards any manual edits made to earlier groups.

    Example:
        groups = partition(players, 'ab_draw', sort_key='ppd')
    """
    if isinstance(strategy, str):
        strategy = get_strategy(strategy)
    # Validate the key even for strategies that ignore it
    get_score_function(sort_key)
    return strategy.partition(roster, sort_key=sort_key, rng=rng)
