"""
Posts table definition and sample data seeding
"""

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

CREATE_POSTS_TABLE = """
    CREATE TABLE IF NOT EXISTS posts (
        id SERIAL PRIMARY KEY,
        title TEXT NOT NULL CHECK (title <> ''),
        content TEXT NOT NULL CHECK (content <> ''),
        author_id TEXT NOT NULL CHECK (author_id <> ''),
        category TEXT NOT NULL CHECK (category <> ''),
        tags TEXT NOT NULL DEFAULT '',
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""

INSERT_SAMPLE_POST = """
    INSERT INTO posts (title, content, author_id, category, tags, created_at, updated_at)
    VALUES ($1, $2, $3, $4, $5, NOW(), NOW())
"""

SAMPLE_POSTS: List[Dict[str, str]] = [
    {
        "title": "Getting Started with Web Development",
        "content": (
            "Web development is an exciting journey that combines creativity with technical skills. "
            "In this post, we'll explore the fundamentals of HTML, CSS, and JavaScript that every "
            "aspiring web developer should know. From creating your first webpage to understanding "
            "responsive design principles, this guide will set you on the path to becoming a "
            "proficient web developer."
        ),
        "author_id": "john_doe",
        "category": "Digital and Tech",
        "tags": "web development,programming,tutorial",
    },
    {
        "title": "The Future of Artificial Intelligence",
        "content": (
            "Artificial Intelligence is rapidly transforming our world, from autonomous vehicles to "
            "smart home assistants. This technology is not just about robots; it's about creating "
            "systems that can learn, adapt, and make decisions. As we move forward, AI will continue "
            "to shape industries, create new opportunities, and challenge our understanding of "
            "what's possible."
        ),
        "author_id": "jane_smith",
        "category": "Digital and Tech",
        "tags": "AI,technology,future",
    },
    {
        "title": "Building Scalable Web Applications",
        "content": (
            "Scalability is a crucial aspect of modern web applications. This post covers the "
            "fundamental principles of building applications that can handle growth and increased "
            "load. We'll discuss database optimization, caching strategies, load balancing, and "
            "microservices architecture."
        ),
        "author_id": "tech_guru",
        "category": "Digital and Tech",
        "tags": "scalability,architecture,web development",
    },
]


async def create_posts_table(conn) -> None:
    """Create the posts table if it does not exist yet"""
    await conn.execute(CREATE_POSTS_TABLE)
    logger.info("Posts table ready")


async def seed_sample_posts(conn) -> int:
    """
    Insert the sample posts when the posts table is empty

    The emptiness check and the inserts are separate statements, so two
    processes starting at the same time may both seed.

    Returns:
        Number of posts inserted
    """
    count = await conn.fetchval("SELECT COUNT(*) FROM posts")
    if count:
        logger.info(f"Posts table already holds {count} rows, skipping sample data")
        return 0

    async with conn.transaction():
        for post in SAMPLE_POSTS:
            await conn.execute(
                INSERT_SAMPLE_POST,
                post["title"],
                post["content"],
                post["author_id"],
                post["category"],
                post["tags"],
            )

    logger.info(f"Inserted {len(SAMPLE_POSTS)} sample posts")
    return len(SAMPLE_POSTS)
