from .models import Player, Team, Group, DrawGroups
from .scoring import combo_score, ppd_score, mpr_score, player_stat, sort_by_skill
from .strategies import DrawStrategy, STRATEGIES, get_strategy, partition
from .groups import swap, shuffle
from .assembler import assemble, generate_teams, restore_groups
from .payouts import (
    FeeTotals,
    PayoutSchedule,
    compute_fee_totals,
    calculate_payouts,
    build_payout_schedule,
    ordinal,
)
from .roster import add_player, remove_player, toggle_paid, filter_players
from .errors import (
    DrawError,
    DrawValidationError,
    PersistenceError,
    TournamentCompletedError,
    InsufficientPrizePoolError,
    UnknownStrategyError,
    GroupIndexError,
)
from .store import TournamentStore, InMemoryTournamentStore, JsonTournamentStore
from .session import DrawSession, SessionState

__all__ = [
    # Models
    'Player',
    'Team',
    'Group',
    'DrawGroups',
    # Score function
    'combo_score',
    'ppd_score',
    'mpr_score',
    'player_stat',
    'sort_by_skill',
    # Partition strategies
    'DrawStrategy',
    'STRATEGIES',
    'get_strategy',
    'partition',
    # Group editor
    'swap',
    'shuffle',
    # Team assembler
    'assemble',
    'generate_teams',
    'restore_groups',
    # Payouts
    'FeeTotals',
    'PayoutSchedule',
    'compute_fee_totals',
    'calculate_payouts',
    'build_payout_schedule',
    'ordinal',
    # Roster
    'add_player',
    'remove_player',
    'toggle_paid',
    'filter_players',
    # Errors
    'DrawError',
    'DrawValidationError',
    'PersistenceError',
    'TournamentCompletedError',
    'InsufficientPrizePoolError',
    'UnknownStrategyError',
    'GroupIndexError',
    # Persistence and workflow
    'TournamentStore',
    'InMemoryTournamentStore',
    'JsonTournamentStore',
    'DrawSession',
    'SessionState',
]
