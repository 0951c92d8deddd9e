import os
import sys
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv
from loguru import logger

# Load .env at startup
load_dotenv()


def _get_env_bool(key: str, default: bool) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    return val.lower() in {"1", "true", "yes", "on"}


def _get_env_float(key: str, default: float) -> float:
    val = os.getenv(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


@dataclass(frozen=True)
class Config:
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    tick_hz: int = int(os.getenv("TICK_HZ", "60"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # World extents are symmetric: x in [-width, width], y in [-height, height]
    world_width: float = _get_env_float("WORLD_WIDTH", 100.0)
    world_height: float = _get_env_float("WORLD_HEIGHT", 100.0)
    # Ship / projectile tuning
    ship_health: float = max(0.0, _get_env_float("SHIP_HEALTH", 100.0))
    ship_fire_rate: float = max(0.0, _get_env_float("SHIP_FIRE_RATE", 1.0))  # shots per 60 ticks; 0 = single shot
    projectile_damage: float = _get_env_float("PROJECTILE_DAMAGE", 10.0)
    # Remove ships whose health reached zero at the end of the tick
    reap_destroyed: bool = _get_env_bool("REAP_DESTROYED", True)


CONFIG = Config()


def reload_from_env() -> Config:
    """Reload environment variables from .env and rebuild CONFIG.

    Returns the new CONFIG instance.
    """
    load_dotenv(override=True)
    global CONFIG
    CONFIG = Config()
    return CONFIG


def configure_logging(level: Optional[str] = None) -> None:
    """Route loguru output to a single stderr sink at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=(level or CONFIG.log_level).upper())
