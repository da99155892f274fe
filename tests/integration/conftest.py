"""
Fixtures for the live PostgreSQL suite
Only runs when TEST_DATABASE_URL points at a disposable database.
"""

import os

import httpx
import pytest
import pytest_asyncio

from blog_api.app import app
from blog_api.database import connection

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest_asyncio.fixture
async def live_client(monkeypatch):
    """ASGI client over a real pool; the posts table starts empty"""
    monkeypatch.setattr(connection, "DATABASE_URL", TEST_DATABASE_URL)
    monkeypatch.setattr(connection, "SEED_SAMPLE_DATA", False)
    await connection.init_database()
    async with connection.get_db_pool().acquire() as conn:
        await conn.execute("DELETE FROM posts")

    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as client:
        yield client

    await connection.close_database()


@pytest.fixture
def sample_post():
    return {
        "title": "Getting Started with Web Development",
        "content": "HTML, CSS and JavaScript fundamentals.",
        "authorId": "john_doe",
        "category": "Digital and Tech",
        "tags": "web development,programming,tutorial",
    }
