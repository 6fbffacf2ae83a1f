"""Runtime configuration sourced from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional

logger = logging.getLogger(__name__)

POSTGRES_COMPONENTS = (
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
)

_TRUE_VALUES = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"", "0", "false", "f", "no", "n", "off"})


@dataclass(frozen=True)
class Settings:
    database_url: Optional[str]
    sql_echo: bool
    pool_pre_ping: bool
    log_level: str
    # Raw POSTGRES_* values; the engine layer assembles and validates them
    postgres: Dict[str, Optional[str]] = field(default_factory=dict)


def _env_flag(name: str, default: bool = False) -> bool:
    """Read the boolean environment variable ``name``.

    Unset variables give ``default``. A value outside the known spellings
    is logged and also gives ``default``.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    token = raw.strip().lower()
    if token in _TRUE_VALUES:
        return True
    if token in _FALSE_VALUES:
        return False
    logger.warning("Unrecognised value %r for %s; using %s", raw, name, default)
    return default


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings for this process."""
    return Settings(
        database_url=os.getenv("DATABASE_URL") or None,
        sql_echo=_env_flag("CLUSTERSTORE_SQL_ECHO"),
        pool_pre_ping=_env_flag("CLUSTERSTORE_POOL_PRE_PING", default=True),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        postgres={name: os.getenv(name) or None for name in POSTGRES_COMPONENTS},
    )


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()


def configure_logging(level: str | None = None) -> int:
    """Install a basic root handler at the configured level and return that level."""
    level_name = (level or get_settings().log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=log_level)
    logging.getLogger("clusterstore").setLevel(log_level)
    return log_level
