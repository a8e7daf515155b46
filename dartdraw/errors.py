"""Exceptions raised by the draw engine."""

from typing import Optional


class DrawError(Exception):
    """Base class for team draw and payout errors."""


class DrawValidationError(DrawError):
    """Rejected input: malformed player entry or an unusable set of groups."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.message = message
        self.errors = errors or [message]
        super().__init__(self.message)


class PersistenceError(DrawError):
    """
    The tournament store rejected or timed out a write.

    In-memory groups and teams are kept; the store is stale until a retry succeeds.
    """

    def __init__(self, message: str, tournament_id: Optional[str] = None):
        self.message = message
        self.tournament_id = tournament_id
        super().__init__(self.message)


class TournamentCompletedError(DrawError):
    """Attempted mutation of a completed tournament."""

    def __init__(self, tournament_id: str):
        self.tournament_id = tournament_id
        super().__init__(f'Tournament {tournament_id} is completed and read-only')


class InsufficientPrizePoolError(DrawError):
    """The payout floor reservation exceeds the prize pool."""

    def __init__(self, prize_pool, floor_total):
        self.prize_pool = prize_pool
        self.floor_total = floor_total
        super().__init__(
            f'Prize pool ${prize_pool} cannot cover the floor reservation of ${floor_total}'
        )


class UnknownStrategyError(DrawError, KeyError):
    """No registered strategy matches the requested key or display name."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Unknown tournament type: {key}')

    def __str__(self) -> str:
        return f'Unknown tournament type: {self.key}'


class GroupIndexError(DrawError, IndexError):
    """A swap referenced a group or position that does not exist."""
