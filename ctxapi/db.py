"""Database utilities for todo persistence.

Smoke check:
  - Without DATABASE_URL: start the app, POST /todo/, then GET /todo/{id}.
  - With DATABASE_URL set: POST /todo/, restart the server, then GET /todo/{id}.
"""

from __future__ import annotations

import logging
from typing import Optional

import asyncpg

logger = logging.getLogger(__name__)

_pool: Optional[asyncpg.Pool] = None


def is_enabled() -> bool:
    return _pool is not None


def get_pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("Database pool is not initialized")
    return _pool


async def init_db(database_url: str, max_connections: int = 1) -> None:
    global _pool

    if _pool is not None:
        return

    _pool = await asyncpg.create_pool(dsn=database_url, min_size=1, max_size=max_connections)
    async with _pool.acquire() as conn:
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS todos (
                id BIGSERIAL PRIMARY KEY,
                title TEXT NOT NULL,
                description TEXT NOT NULL,
                done BOOLEAN NOT NULL DEFAULT FALSE,
                created_at TIMESTAMP NOT NULL DEFAULT NOW()
            );
            """
        )
    logger.info("Database initialized for todo persistence (max_connections=%s)", max_connections)


async def close_db() -> None:
    global _pool

    if _pool is None:
        return

    await _pool.close()
    _pool = None
    logger.info("Database pool closed")


async def select_one_plus_one() -> int:
    return await get_pool().fetchval("SELECT 1 + 1 AS sum;")
