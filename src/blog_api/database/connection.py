"""
Database connection and pool management
"""

import asyncpg
import logging

from blog_api.config.settings import DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE, DB_COMMAND_TIMEOUT

logger = logging.getLogger(__name__)

POSTS_TABLE = "blog_posts"

CREATE_POSTS_TABLE = f"""
    CREATE TABLE IF NOT EXISTS {POSTS_TABLE} (
        id UUID PRIMARY KEY,
        author JSONB NOT NULL,
        title TEXT NOT NULL,
        content TEXT NOT NULL,
        created TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""


async def create_pool(database_url: str) -> asyncpg.Pool:
    """Open a connection pool and make sure the posts table exists"""
    pool = await asyncpg.create_pool(
        database_url,
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
        command_timeout=DB_COMMAND_TIMEOUT,
        statement_cache_size=0  # pgbouncer compatibility
    )

    # Test connection and bootstrap schema
    async with pool.acquire() as conn:
        await conn.fetchval("SELECT 1")
        await conn.execute(CREATE_POSTS_TABLE)

    logger.info("Database initialized successfully")
    return pool


async def close_pool(pool: asyncpg.Pool):
    """Close database connection pool"""
    if pool:
        await pool.close()
    logger.info("Database connections closed")
