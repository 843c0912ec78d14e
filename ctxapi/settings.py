from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
import logging
import math
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    environment: str
    log_level: str
    host: str
    port: int
    database_url: Optional[str]
    db_max_connections: int
    gbp_to_usd_rate: float
    eur_to_usd_rate: float


def parse_int_env(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError:
        logger.warning("Invalid %s value '%s'; defaulting to %s", name, raw_value, default)
        return default


def parse_float_env(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        value = float(raw_value)
    except ValueError:
        logger.warning("Invalid %s value '%s'; defaulting to %s", name, raw_value, default)
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning("%s must be a finite positive number, got %s; defaulting to %s", name, value, default)
        return default
    return value


@lru_cache
def get_settings() -> Settings:
    return Settings(
        environment=os.getenv("ENVIRONMENT", "").lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=parse_int_env("PORT", 3000),
        database_url=os.getenv("DATABASE_URL") or None,
        db_max_connections=max(1, parse_int_env("DB_MAX_CONNECTIONS", 1)),
        gbp_to_usd_rate=parse_float_env("GBP_TO_USD_RATE", 1.3),
        eur_to_usd_rate=parse_float_env("EUR_TO_USD_RATE", 1.2),
    )
