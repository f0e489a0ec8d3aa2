"""Engine configuration management."""

import logging
from functools import lru_cache

from .constants import DATA_DIR
from .schemas import EngineConfig
from .utils import load_json

logger = logging.getLogger('statdrop.config')

CONFIG_PATH = DATA_DIR / 'engine_config.json'


@lru_cache(maxsize=1)
def get_config() -> EngineConfig:
    """
    Load engine configuration from data/engine_config.json.

    Configuration is cached after first load. When the file doesn't exist
    the built-in defaults are used.

    Returns:
        EngineConfig object with validated settings

    Raises:
        ValueError: If the config file has invalid structure

    Example:
        from statdrop.config import get_config
        config = get_config()
        print(f"Playoffs start week {config.default_playoff_start_week}")
    """
    if not CONFIG_PATH.exists():
        logger.debug(f'No config at {CONFIG_PATH}, using defaults')
        return EngineConfig()
    return load_json(CONFIG_PATH, schema=EngineConfig)


def get_default_playoff_start_week() -> int:
    """Get the playoff start week used when a season doesn't record one."""
    return get_config().default_playoff_start_week


def get_default_playoff_teams_count() -> int:
    """Get the playoff field size used when a season doesn't record one."""
    return get_config().default_playoff_teams_count


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
