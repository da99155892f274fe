#!/usr/bin/env python3
"""
Database initialization tool: creates the posts table and seeds sample posts
"""

import argparse
import asyncio
import os
import sys

import asyncpg

from blog_api.database.schema import create_posts_table, seed_sample_posts


async def initialize(database_url: str, seed: bool = True) -> int:
    """
    Create the posts table and optionally seed it

    Args:
        database_url: PostgreSQL DSN
        seed: Insert sample posts when the table is empty

    Returns:
        Number of sample posts inserted
    """
    conn = await asyncpg.connect(database_url)
    try:
        await create_posts_table(conn)
        print("✅ Posts table ready")
        if not seed:
            return 0
        inserted = await seed_sample_posts(conn)
        if inserted:
            print(f"✅ Inserted {inserted} sample posts")
        else:
            print("ℹ️  Posts table not empty, sample data skipped")
        return inserted
    finally:
        await conn.close()
        print("Database connection closed")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Initialize the blog posts database")
    parser.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL"),
        help="PostgreSQL DSN (default: $DATABASE_URL)",
    )
    parser.add_argument("--no-seed", action="store_true", help="Only create the table")
    args = parser.parse_args(argv)

    if not args.database_url:
        parser.error("--database-url or DATABASE_URL is required")

    try:
        asyncio.run(initialize(args.database_url, seed=not args.no_seed))
    except (OSError, asyncpg.PostgresError) as e:
        print(f"❌ Error: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
