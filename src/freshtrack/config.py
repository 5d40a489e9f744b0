"""Settings from the environment / .env and logging setup"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "products"
DEFAULT_LOW_STOCK_THRESHOLD = 5
DEFAULT_TIMEOUT = 10
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(ValueError):
    """Required settings are missing"""


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_key: str
    table: str = DEFAULT_TABLE
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    timeout: int = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(env_path: Optional[str] = None) -> Settings:
    """Read settings, loading ``.env`` first (existing variables win).

    Raises:
        ConfigError: SUPABASE_URL or SUPABASE_KEY is not set
    """
    load_dotenv(env_path or find_dotenv(usecwd=True))

    url = os.getenv("SUPABASE_URL", "").strip()
    key = os.getenv("SUPABASE_KEY", "").strip()
    missing = [name for name, value in (("SUPABASE_URL", url), ("SUPABASE_KEY", key)) if not value]
    if missing:
        raise ConfigError(f"missing settings: {', '.join(missing)} (run freshtrack-setup or edit .env)")

    return Settings(
        supabase_url=url,
        supabase_key=key,
        table=os.getenv("FRESHTRACK_TABLE") or DEFAULT_TABLE,
        low_stock_threshold=_int_env("FRESHTRACK_LOW_STOCK_THRESHOLD", DEFAULT_LOW_STOCK_THRESHOLD),
        timeout=_int_env("FRESHTRACK_TIMEOUT", DEFAULT_TIMEOUT),
        log_level=log_level_from_env(),
    )


def log_level_from_env() -> str:
    return (os.getenv("FRESHTRACK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not a number, using %d", name, raw, default)
        return default


def setup_logging(level: str = DEFAULT_LOG_LEVEL):
    """Configure the root logger once, for command line use."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
