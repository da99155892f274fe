"""
Database connection and pool management
"""

import asyncpg
import logging
from blog_api.config.settings import (
    DATABASE_URL,
    DB_POOL_MIN_SIZE,
    DB_POOL_MAX_SIZE,
    DB_COMMAND_TIMEOUT,
    SEED_SAMPLE_DATA,
)
from blog_api.database.schema import create_posts_table, seed_sample_posts

logger = logging.getLogger(__name__)

# Global database pool
db_pool = None

async def init_database():
    """Initialize database connection pool, posts table and sample data"""
    global db_pool
    db_pool = await asyncpg.create_pool(
        DATABASE_URL,
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
        command_timeout=DB_COMMAND_TIMEOUT,
        statement_cache_size=0  # Fix for pgbouncer compatibility
    )

    async with db_pool.acquire() as conn:
        await conn.fetchval("SELECT 1")
        await create_posts_table(conn)
        if SEED_SAMPLE_DATA:
            await seed_sample_posts(conn)

    logger.info("Database initialized successfully")


async def close_database():
    """Close database connection pool"""
    global db_pool
    if db_pool:
        await db_pool.close()
        db_pool = None
    logger.info("Database connections closed")

def get_db_pool():
    """Get the database pool instance"""
    return db_pool
