"""Tournament tools configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import TournamentConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent / 'data' / 'tournament_config.json'


@lru_cache(maxsize=1)
def get_config() -> TournamentConfig:
    """
    Load configuration from data/tournament_config.json.

    Configuration is cached after first load.

    Returns:
        TournamentConfig object with validated settings

    Raises:
        FileNotFoundError: If tournament_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from dartdraw.config import get_config
        config = get_config()
        print(f"Default payout spots: {config.default_payout_spots}")
    """
    return load_json(CONFIG_PATH, schema=TournamentConfig)


def get_default_fees() -> dict[str, float]:
    """Get the fee defaults applied to tournaments that leave them unset."""
    config = get_config()
    return {
        'entry_fee': config.default_entry_fee,
        'bar_contribution': config.default_bar_contribution,
        'usage_fee': config.default_usage_fee,
        'bonus_money': config.default_bonus_money,
    }


def get_default_payout_spots() -> int:
    """Get the default number of paid places."""
    return get_config().default_payout_spots


def get_default_sort_key() -> str:
    """Get the sort key used for a fresh draw."""
    return get_config().default_sort_key


def get_persistence_timeout() -> float:
    """Get the store write timeout in seconds."""
    return get_config().persistence_timeout


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
