"""
Draw session: the per-tournament workflow around the pure draw functions.

A session starts Uninitialized and moves to Initialized(tournament_id) the
first time it loads a tournament. Loading the same tournament again keeps
the in-memory groups; loading a different one re-derives them.

Every mutation is a pure computation followed by an awaited store write.
On a completed tournament mutations are no-ops that return the current
state and never touch the store.
"""

import logging
import random
from enum import Enum
from typing import Optional

from .assembler import assemble, generate_teams, restore_groups
from .config import get_config, get_default_sort_key
from .errors import DrawValidationError, PersistenceError
from .groups import shuffle as shuffle_group
from .groups import swap as swap_slots
from .models import DrawGroups, Group, Player, Team
from .payouts import FeeTotals, PayoutSchedule, build_payout_schedule, compute_fee_totals
from .roster import add_listed_player, add_player, remove_player, toggle_paid
from .schemas import PlayerRecord, TournamentRecord
from .scoring import get_score_function
from .store import TournamentStore
from .strategies import DrawStrategy, get_strategy
from .validators import validate_roster

logger = logging.getLogger('dartdraw.session')


class SessionState(Enum):
    UNINITIALIZED = 'uninitialized'
    INITIALIZED = 'initialized'


class DrawSession:
    """
    Team draw for one tournament at a time.

    Usage:
        session = DrawSession(store)
        await session.open('spring-doubles')
        await session.partition('ppd')
        await session.swap('A', 0, 'B', 1)
        print(session.teams)
    """

    def __init__(
        self,
        store: TournamentStore,
        strategy: DrawStrategy | str | None = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            store: Persistence collaborator
            strategy: Force a strategy instead of the tournament's own type
            rng: Random source for blind draws and shuffles
        """
        self.store = store
        self._strategy_override = get_strategy(strategy) if isinstance(strategy, str) else strategy
        self.rng = rng or random.Random()

        self.tournament: Optional[TournamentRecord] = None
        self.tournament_id: Optional[str] = None
        self.strategy: Optional[DrawStrategy] = self._strategy_override
        self.sort_key: str = get_default_sort_key()
        self.groups = DrawGroups()
        self.teams: list[Team] = []
        self.stale = False

    @property
    def state(self) -> SessionState:
        if self.tournament_id is None:
            return SessionState.UNINITIALIZED
        return SessionState.INITIALIZED

    @property
    def completed(self) -> bool:
        return bool(self.tournament and self.tournament.tournament_completed)

    @property
    def roster(self) -> list[Player]:
        return self.tournament.roster if self.tournament else []

    async def open(self, tournament_id: str) -> DrawGroups:
        """Fetch a tournament from the store and load it."""
        return await self.load(await self.store.get(tournament_id))

    async def load(self, tournament: TournamentRecord) -> DrawGroups:
        """
        Load a tournament record.

        Groups are only re-derived when the tournament identity changes:
        stored teams that cover the roster are restored, otherwise the
        roster is partitioned afresh and the teams written back.

        Raises:
            PersistenceError: If a fresh partition cannot be stored
        """
        if self.tournament_id == tournament.id:
            self.tournament = tournament
            return self.groups

        self.tournament = tournament
        self.tournament_id = tournament.id
        self.strategy = self._strategy_override or get_strategy(
            tournament.tournament_type or get_config().default_strategy
        )
        self.sort_key = get_default_sort_key()
        self.stale = False

        for error in validate_roster(tournament.roster):
            logger.warning(f'Tournament {tournament.id}: {error}')

        restored = restore_groups(tournament.team_list, tournament.roster, self.strategy)
        if restored is not None:
            logger.debug(f'Restored {self.strategy.name} groups for {tournament.id} from stored teams')
            self.groups = restored
            self.teams = tournament.team_list
            return self.groups

        self.groups = self.strategy.partition(tournament.roster, self.sort_key, self.rng)
        self.teams = assemble(self.groups)
        if tournament.roster and not self.completed:
            await self._persist(teams=self.teams)
        return self.groups

    async def partition(self, sort_key: Optional[str] = None) -> DrawGroups:
        """
        Re-draw the groups, discarding manual edits.

        Args:
            sort_key: 'combo', 'ppd' or 'mpr' (default: the current key)

        Raises:
            DrawValidationError: If sort_key is not a known rating; nothing
                is changed or stored
        """
        self._require_loaded()
        if self._skip_if_completed('partition'):
            return self.groups

        sort_key = sort_key or self.sort_key
        try:
            get_score_function(sort_key)
        except ValueError as e:
            raise DrawValidationError(str(e)) from e
        groups = self.strategy.partition(self.roster, sort_key, self.rng)
        self.sort_key = sort_key
        return await self._apply(groups)

    async def swap(self, group_from: str, index_from: int, group_to: str, index_to: int) -> DrawGroups:
        """Exchange two group positions and store the re-derived teams."""
        self._require_loaded()
        if self._skip_if_completed('swap'):
            return self.groups
        return await self._apply(swap_slots(self.groups, group_from, index_from, group_to, index_to))

    async def shuffle(self, group_name: str) -> DrawGroups:
        """Randomly reorder one group and store the re-derived teams."""
        self._require_loaded()
        if self._skip_if_completed('shuffle'):
            return self.groups
        return await self._apply(shuffle_group(self.groups, group_name, self.rng))

    async def generate_teams(self) -> list[Team]:
        """
        Validate the current groups and store their teams.

        Raises:
            DrawValidationError: If the groups cannot form teams; stored
                teams are left untouched
            PersistenceError: If the store write fails
        """
        self._require_loaded()
        if self._skip_if_completed('generate_teams'):
            return self.teams
        teams = generate_teams(self.groups, self.strategy)
        self.teams = teams
        await self._persist(teams=teams)
        return teams

    async def flush(self) -> TournamentRecord:
        """Retry storing the in-memory roster and teams after a PersistenceError."""
        self._require_loaded()
        if self.completed:
            return self.tournament
        return await self._persist(players=self.roster, teams=self.teams)

    async def add_player(self, name: str, ppd, mpr) -> list[Player]:
        """
        Add a manually entered player and re-draw.

        Raises:
            DrawValidationError: If the entry is malformed; nothing changes
        """
        self._require_loaded()
        if self._skip_if_completed('add_player'):
            return self.roster
        return await self._replace_roster(add_player(self.roster, name, ppd, mpr))

    async def add_listed_player(self, player: Player) -> list[Player]:
        """Add a player found in a leaderboard search and re-draw."""
        self._require_loaded()
        if self._skip_if_completed('add_listed_player'):
            return self.roster
        return await self._replace_roster(add_listed_player(self.roster, player))

    async def remove_player(self, name: str) -> list[Player]:
        """Remove an unpaid player and re-draw."""
        self._require_loaded()
        if self._skip_if_completed('remove_player'):
            return self.roster
        return await self._replace_roster(remove_player(self.roster, name))

    async def toggle_paid(self, name: str) -> list[Player]:
        """Flip a player's paid flag; groups and teams are kept."""
        self._require_loaded()
        if self._skip_if_completed('toggle_paid'):
            return self.roster
        roster = toggle_paid(self.roster, name)
        self.groups = _refresh_players(self.groups, roster)
        record = await self._persist(players=roster)
        return record.roster

    def fee_totals(self) -> FeeTotals:
        """Fee totals for the loaded tournament."""
        self._require_loaded()
        t = self.tournament
        return compute_fee_totals(
            self.roster,
            entry_fee=t.entry_fee,
            bar_contribution=t.bar_contribution,
            usage_fee=t.usage_fee,
            bonus_money=t.bonus_money,
        )

    def payout_schedule(self) -> PayoutSchedule:
        """Suggested payouts for the loaded tournament (display only)."""
        totals = self.fee_totals()
        return build_payout_schedule(
            totals.prize_pool,
            payout_spots=self.tournament.payout_spots,
            entry_fee=self.tournament.entry_fee,
        )

    def _require_loaded(self) -> None:
        if self.state is SessionState.UNINITIALIZED:
            raise RuntimeError('DrawSession has no tournament loaded: call open() or load() first')

    def _skip_if_completed(self, operation: str) -> bool:
        if self.completed:
            logger.info(f'Ignoring {operation}: tournament {self.tournament_id} is completed')
            return True
        return False

    async def _apply(self, groups: DrawGroups) -> DrawGroups:
        """Adopt edited groups, re-derive teams, and store them."""
        self.groups = groups
        self.teams = assemble(groups)
        await self._persist(teams=self.teams)
        return self.groups

    async def _replace_roster(self, roster: list[Player]) -> list[Player]:
        """Store a changed roster with a fresh draw in one write."""
        groups = self.strategy.partition(roster, self.sort_key, self.rng)
        self.groups = groups
        self.teams = assemble(groups)
        record = await self._persist(players=roster, teams=self.teams)
        return record.roster

    async def _persist(
        self,
        players: Optional[list[Player]] = None,
        teams: Optional[list[Team]] = None,
    ) -> TournamentRecord:
        try:
            record = await self.store.update(self.tournament_id, players=players, teams=teams)
        except PersistenceError:
            self.stale = True
            if players is not None:
                # Keep the edited roster in memory for a retry
                self.tournament = self.tournament.model_copy(
                    update={'players': [PlayerRecord.from_player(p) for p in players]}
                )
            logger.error(f'Tournament {self.tournament_id} not stored; in-memory draw is ahead of the store')
            raise
        self.tournament = record
        self.stale = False
        return record


def _refresh_players(groups: DrawGroups, roster: list[Player]) -> DrawGroups:
    """Swap in updated Player objects (e.g. paid flag) without moving anyone."""
    by_name = {p.name: p for p in roster}
    return DrawGroups(
        groups=tuple(
            Group(
                name=g.name,
                slots=tuple(by_name.get(p.name, p) if p is not None else None for p in g.slots),
                forms_teams=g.forms_teams,
            )
            for g in groups.groups
        )
    )
