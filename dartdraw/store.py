"""
Tournament persistence.

The draw engine treats storage as an opaque async read-modify-write:
update() takes new players and/or teams for one tournament and returns
the stored record. Every write is all-or-nothing.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .config import get_persistence_timeout
from .errors import PersistenceError
from .models import Player, Team
from .schemas import PlayerRecord, TeamRecord, TournamentRecord, TournamentsFile
from .utils import load_json, save_json

logger = logging.getLogger('dartdraw.store')


class TournamentStore(ABC):
    """
    Base class for tournament stores.

    Subclasses implement _read() and _write(); this class adds the timeout
    and turns storage failures into PersistenceError.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else get_persistence_timeout()

    @abstractmethod
    async def _read(self, tournament_id: str) -> Optional[TournamentRecord]:
        """Return the stored record, or None if there is none."""

    @abstractmethod
    async def _write(self, record: TournamentRecord) -> TournamentRecord:
        """Store a complete record and return what was stored."""

    async def get(self, tournament_id: str) -> TournamentRecord:
        """
        Fetch one tournament.

        Raises:
            PersistenceError: If the tournament is missing or the read fails
        """
        record = await self._guard(self._read(tournament_id), tournament_id, 'read')
        if record is None:
            raise PersistenceError(f'Tournament not found: {tournament_id}', tournament_id)
        return record

    async def create(self, record: TournamentRecord) -> TournamentRecord:
        """Store a new tournament."""
        return await self._guard(self._write(record), record.id, 'create')

    async def update(
        self,
        tournament_id: str,
        players: Optional[list[Player]] = None,
        teams: Optional[list[Team]] = None,
    ) -> TournamentRecord:
        """
        Replace the roster and/or teams of a tournament.

        Args:
            tournament_id: Tournament to update
            players: New roster (unchanged if None)
            teams: New teams (unchanged if None)

        Returns:
            The stored record after the write

        Raises:
            PersistenceError: If the tournament is missing, the write fails,
                or it takes longer than the store timeout
        """
        current = await self.get(tournament_id)
        data = current.model_dump()
        if players is not None:
            data['players'] = [PlayerRecord.from_player(p).model_dump() for p in players]
        if teams is not None:
            data['teams'] = [TeamRecord.from_team(t).model_dump() for t in teams]

        try:
            updated = TournamentRecord.model_validate(data)
        except ValueError as e:
            raise PersistenceError(f'Rejected update for {tournament_id}: {e}', tournament_id) from e

        stored = await self._guard(self._write(updated), tournament_id, 'update')
        logger.debug(
            f'Stored tournament {tournament_id} ({len(stored.players)} players, {len(stored.teams)} teams)'
        )
        return stored

    async def _guard(self, operation, tournament_id: str, action: str):
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout)
        except PersistenceError:
            raise
        except asyncio.TimeoutError as e:
            logger.error(f'Timed out after {self.timeout}s during {action} of {tournament_id}')
            raise PersistenceError(
                f'Timed out during {action} of tournament {tournament_id}', tournament_id
            ) from e
        except (OSError, ValueError, TypeError) as e:
            logger.error(f'Failed {action} of tournament {tournament_id}: {e}')
            raise PersistenceError(
                f'Failed {action} of tournament {tournament_id}: {e}', tournament_id
            ) from e


class InMemoryTournamentStore(TournamentStore):
    """Store holding records in a dict, for tests and one-off runs."""

    def __init__(self, records: Optional[list[TournamentRecord]] = None, timeout: Optional[float] = None):
        super().__init__(timeout=timeout)
        self._records: dict[str, TournamentRecord] = {}
        for record in records or []:
            self._records[record.id] = record.model_copy(deep=True)
        self.write_count = 0

    async def _read(self, tournament_id: str) -> Optional[TournamentRecord]:
        record = self._records.get(tournament_id)
        return record.model_copy(deep=True) if record is not None else None

    async def _write(self, record: TournamentRecord) -> TournamentRecord:
        self._records[record.id] = record.model_copy(deep=True)
        self.write_count += 1
        return record.model_copy(deep=True)


class JsonTournamentStore(TournamentStore):
    """
    Store backed by a tournaments.json file.

    File access runs in a worker thread; an asyncio lock serializes
    read-modify-write cycles within one process. A write that outlives
    the store timeout still finishes before the next one starts.
    """

    def __init__(self, path: Path | str, timeout: Optional[float] = None):
        super().__init__(timeout=timeout)
        self.path = Path(path)
        self._lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()

    def _load(self) -> TournamentsFile:
        if not self.path.exists():
            return TournamentsFile()
        return load_json(self.path, schema=TournamentsFile)

    async def _read(self, tournament_id: str) -> Optional[TournamentRecord]:
        data = await asyncio.to_thread(self._load)
        return data.tournaments.get(tournament_id)

    async def _write(self, record: TournamentRecord) -> TournamentRecord:
        # The lock is held until the file is written, even if the caller
        # times out, so a later write always lands after this one.
        task = asyncio.ensure_future(self._locked_write(record))
        self._pending.add(task)
        task.add_done_callback(self._write_finished)
        return await asyncio.shield(task)

    async def _locked_write(self, record: TournamentRecord) -> TournamentRecord:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
            data.tournaments[record.id] = record
            await asyncio.to_thread(save_json, self.path, data)
        return record

    def _write_finished(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f'Write to {self.path} finished with {task.exception()!r}')

    async def list_tournaments(self) -> list[TournamentRecord]:
        """All stored tournaments, in file order."""
        data = await self._guard(asyncio.to_thread(self._load), '*', 'list')
        return list(data.tournaments.values())
