"""
Schema bootstrap and init-db tool tests
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from blog_api.database import schema
from blog_api.tools import init_db


def fake_connection(existing_rows: int):
    conn = MagicMock()
    conn.fetchval = AsyncMock(return_value=existing_rows)
    conn.execute = AsyncMock(return_value="INSERT 0 1")
    conn.close = AsyncMock()
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=transaction)
    transaction.__aexit__ = AsyncMock(return_value=False)
    conn.transaction = MagicMock(return_value=transaction)
    return conn


class TestSeeding:

    @pytest.mark.asyncio
    async def test_empty_table_gets_sample_posts(self):
        conn = fake_connection(existing_rows=0)

        inserted = await schema.seed_sample_posts(conn)

        assert inserted == len(schema.SAMPLE_POSTS)
        assert conn.execute.await_count == len(schema.SAMPLE_POSTS)
        first_call = conn.execute.await_args_list[0]
        assert first_call.args[1] == "Getting Started with Web Development"
        assert first_call.args[3] == "john_doe"

    @pytest.mark.asyncio
    async def test_populated_table_is_left_alone(self):
        conn = fake_connection(existing_rows=4)

        assert await schema.seed_sample_posts(conn) == 0
        conn.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_table_is_idempotent_ddl(self):
        conn = fake_connection(existing_rows=0)

        await schema.create_posts_table(conn)

        ddl = conn.execute.await_args.args[0]
        assert "CREATE TABLE IF NOT EXISTS posts" in ddl
        assert "CHECK (title <> '')" in ddl

    def test_sample_posts_satisfy_required_fields(self):
        for post in schema.SAMPLE_POSTS:
            for column in ("title", "content", "author_id", "category"):
                assert post[column].strip()


class TestInitDbTool:

    @pytest.mark.asyncio
    async def test_initialize_creates_and_seeds(self, monkeypatch):
        conn = fake_connection(existing_rows=0)
        monkeypatch.setattr(init_db.asyncpg, "connect", AsyncMock(return_value=conn))

        inserted = await init_db.initialize("postgresql://example/blog", seed=True)

        assert inserted == len(schema.SAMPLE_POSTS)
        conn.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_initialize_without_seed(self, monkeypatch):
        conn = fake_connection(existing_rows=0)
        monkeypatch.setattr(init_db.asyncpg, "connect", AsyncMock(return_value=conn))

        assert await init_db.initialize("postgresql://example/blog", seed=False) == 0
        conn.fetchval.assert_not_awaited()

    def test_requires_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(SystemExit):
            init_db.main([])
