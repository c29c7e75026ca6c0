"""League configuration management."""

import logging
from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig, ScoringRules
from .utils import load_json

logger = logging.getLogger('futsal_league.config')

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load. A missing file means the
    built-in defaults (standard bonus schedule, 2-point defense award,
    top-5 boards).

    Returns:
        LeagueConfig object with validated settings

    Raises:
        ValueError: If config file has invalid structure

    Example:
        from futsal_league.config import get_config
        config = get_config()
        print(f"Defense award: {config.rules.defense_award_points}")
    """
    if not CONFIG_PATH.exists():
        logger.debug(f'No config at {CONFIG_PATH}; using defaults')
        return LeagueConfig()
    return load_json(CONFIG_PATH, schema=LeagueConfig)


def get_scoring_rules() -> ScoringRules:
    """Get the point values used for scoring."""
    return get_config().rules


def get_state_path() -> Path:
    """Get the default league state file path."""
    return Path(get_config().state_path)


def get_log_dir() -> Path:
    """Get the directory log files are written to."""
    return Path(get_config().log_dir)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
