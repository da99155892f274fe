"""
End-to-end checks of the posts API against PostgreSQL
"""

import asyncio
import os

import pytest

from blog_api.database import connection
from blog_api.database.schema import SAMPLE_POSTS, seed_sample_posts

pytestmark = pytest.mark.skipif(not os.getenv("TEST_DATABASE_URL"), reason="TEST_DATABASE_URL not set")


async def create(client, **fields):
    response = await client.post("/api/posts", json=fields)
    assert response.status_code == 201, response.text
    return response.json()


class TestPostLifecycle:

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, live_client, sample_post):
        created = await create(live_client, **sample_post)

        response = await live_client.get(f"/api/posts/{created['id']}")

        assert response.status_code == 200
        fetched = response.json()
        assert fetched == created
        for key, value in sample_post.items():
            assert fetched[key] == value
        assert fetched["createdAt"] == fetched["updatedAt"]

    @pytest.mark.asyncio
    async def test_tags_default_to_empty(self, live_client, sample_post):
        del sample_post["tags"]

        created = await create(live_client, **sample_post)

        assert created["tags"] == ""

    @pytest.mark.asyncio
    async def test_missing_field_persists_nothing(self, live_client, sample_post):
        del sample_post["authorId"]

        response = await live_client.post("/api/posts", json=sample_post)

        assert response.status_code == 400
        assert (await live_client.get("/api/posts")).json() == []

    @pytest.mark.asyncio
    async def test_update_keeps_created_at(self, live_client, sample_post):
        created = await create(live_client, **sample_post)
        await asyncio.sleep(0.01)

        response = await live_client.put(
            f"/api/posts/{created['id']}",
            json={"title": "Edited", "content": "New body", "authorId": "editor", "category": "Life"},
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["title"] == "Edited"
        assert updated["tags"] == ""
        assert updated["createdAt"] == created["createdAt"]
        assert updated["updatedAt"] > created["updatedAt"]

    @pytest.mark.asyncio
    async def test_unknown_id_is_404_everywhere(self, live_client, sample_post):
        assert (await live_client.get("/api/posts/999999")).status_code == 404
        assert (await live_client.put("/api/posts/999999", json=sample_post)).status_code == 404
        assert (await live_client.delete("/api/posts/999999")).status_code == 404

    @pytest.mark.asyncio
    async def test_deleted_ids_are_not_reused(self, live_client, sample_post):
        first = await create(live_client, **sample_post)

        response = await live_client.delete(f"/api/posts/{first['id']}")
        assert response.json() == {"message": "Post deleted successfully"}
        assert (await live_client.get(f"/api/posts/{first['id']}")).status_code == 404

        second = await create(live_client, **sample_post)
        assert second["id"] > first["id"]


class TestSearchAndFilter:

    @pytest.mark.asyncio
    async def test_search_category_and_both(self, live_client):
        ai_tech = await create(live_client, title="The Future of AI", content="Models", authorId="a", category="Digital and Tech")
        ai_tags = await create(live_client, title="Weekend", content="Hiking", authorId="b", category="Life", tags="ai,outdoors")
        plain = await create(live_client, title="Scalable apps", content="Caching", authorId="c", category="Digital and Tech")

        searched = (await live_client.get("/api/posts", params={"search": "AI"})).json()
        assert {post["id"] for post in searched} == {ai_tech["id"], ai_tags["id"]}

        by_category = (await live_client.get("/api/posts", params={"category": "Digital and Tech"})).json()
        assert {post["id"] for post in by_category} == {ai_tech["id"], plain["id"]}

        both = (await live_client.get("/api/posts", params={"search": "ai", "category": "Digital and Tech"})).json()
        assert [post["id"] for post in both] == [ai_tech["id"]]

    @pytest.mark.asyncio
    async def test_category_is_exact_match(self, live_client):
        await create(live_client, title="T", content="C", authorId="a", category="Digital and Tech")

        response = await live_client.get("/api/posts", params={"category": "digital and tech"})

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_wildcards_in_search_match_literally(self, live_client):
        await create(live_client, title="Save 100% today", content="C", authorId="a", category="Deals")
        await create(live_client, title="Save 1000 today", content="C", authorId="a", category="Deals")

        response = await live_client.get("/api/posts", params={"search": "100%"})

        assert [post["title"] for post in response.json()] == ["Save 100% today"]

    @pytest.mark.asyncio
    async def test_newest_first(self, live_client):
        older = await create(live_client, title="Older", content="C", authorId="a", category="X")
        newer = await create(live_client, title="Newer", content="C", authorId="a", category="X")

        listed = (await live_client.get("/api/posts")).json()

        assert [post["id"] for post in listed] == [newer["id"], older["id"]]

    @pytest.mark.asyncio
    async def test_categories_sorted_distinct(self, live_client):
        for category in ["Tech", "Tech", "Life"]:
            await create(live_client, title="T", content="C", authorId="a", category=category)

        response = await live_client.get("/api/categories")

        assert response.json() == ["Life", "Tech"]


class TestSeeding:

    @pytest.mark.asyncio
    async def test_seed_only_into_empty_table(self, live_client):
        async with connection.get_db_pool().acquire() as conn:
            assert await seed_sample_posts(conn) == len(SAMPLE_POSTS)
            assert await seed_sample_posts(conn) == 0

        listed = (await live_client.get("/api/posts")).json()
        assert len(listed) == len(SAMPLE_POSTS)
