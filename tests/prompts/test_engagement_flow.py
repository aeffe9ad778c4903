import os
import asyncio
import uuid
from decimal import Decimal

import pytest
from alembic import command
from alembic.config import Config
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from prompthub.features.prompts import cache
from prompthub.main import create_app
from prompthub.platform.db.models import User
from prompthub.platform.db.session import get_session
from prompthub.platform.security import create_access_token


class _MemoryRedis:
    def __init__(self) -> None:
        self.store: dict[str, str] = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value

    async def incr(self, key):
        value = int(self.store.get(key, "0")) + 1
        self.store[key] = str(value)
        return value


@pytest.mark.asyncio
async def test_prompt_engagement_flow(monkeypatch: pytest.MonkeyPatch) -> None:
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    redis = _MemoryRedis()
    monkeypatch.setattr(cache, "get_redis", lambda: redis)

    engine = create_async_engine(database_url, pool_pre_ping=True)
    try:
        async with engine.begin() as connection:
            await connection.execute(text("DROP SCHEMA IF EXISTS public CASCADE"))
            await connection.execute(text("CREATE SCHEMA public"))

        alembic_cfg = Config("alembic.ini")
        await asyncio.to_thread(command.upgrade, alembic_cfg, "head")

        sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
        author_id = str(uuid.uuid4())
        fan_id = str(uuid.uuid4())
        async with sessionmaker() as session:
            session.add_all([User(id=author_id), User(id=fan_id)])
            await session.commit()

        async def _session():
            async with sessionmaker() as session:
                yield session

        app = create_app()
        app.dependency_overrides[get_session] = _session
        author = {"Authorization": f"Bearer {create_access_token(author_id)}"}
        fan = {"Authorization": f"Bearer {create_access_token(fan_id)}"}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            profile = await client.post("/api/v1/profiles/me", headers=author, json={"username": "author"})
            assert profile.status_code == 201
            taken = await client.post("/api/v1/profiles/me", headers=fan, json={"username": "Author"})
            assert taken.status_code == 409
            available = await client.get("/api/v1/profiles/username-available", params={"username": "fan"})
            assert available.json()["available"] is True

            created_a = await client.post(
                "/api/v1/prompts",
                headers=author,
                json={"title": "A", "prompt_text": "Explain {topic}", "category": "education"},
            )
            assert created_a.status_code == 201
            assert created_a.json()["username"] == "author"
            prompt_a = created_a.json()["id"]

            created_b = await client.post(
                "/api/v1/prompts",
                headers=author,
                json={
                    "title": "B",
                    "prompt_text": "Refactor {code}",
                    "category": "coding",
                    "is_paid": True,
                    "price": "10.00",
                },
            )
            assert created_b.status_code == 201
            prompt_b = created_b.json()["id"]

            steps = await client.post(
                f"/api/v1/prompts/{prompt_a}/steps",
                headers=author,
                json={"steps": [{"step_number": 1, "step_text": "Pick a topic"}]},
            )
            assert steps.status_code == 201
            foreign_steps = await client.post(
                f"/api/v1/prompts/{prompt_a}/steps",
                headers=fan,
                json={"steps": [{"step_number": 2, "step_text": "Nope"}]},
            )
            assert foreign_steps.status_code == 403

            first_trending = await client.get("/api/v1/prompts/trending", params={"timeframe": "all"})
            assert first_trending.status_code == 200
            assert [p["id"] for p in first_trending.json()] == [prompt_b, prompt_a]

            liked = await client.post(f"/api/v1/prompts/{prompt_a}/like", headers=fan)
            assert liked.json() == {"prompt_id": prompt_a, "is_liked": True, "likes_count": 1}

            trending = await client.get("/api/v1/prompts/trending", params={"timeframe": "all"})
            assert [p["id"] for p in trending.json()] == [prompt_a, prompt_b]
            assert trending.json()[0]["engagement_score"] == 2

            comment = await client.post(
                f"/api/v1/prompts/{prompt_b}/comments",
                headers=fan,
                json={"text": "Nice"},
            )
            assert comment.status_code == 201
            reply = await client.post(
                f"/api/v1/prompts/{prompt_b}/comments",
                headers=author,
                json={"text": "Thanks", "parent_id": comment.json()["id"]},
            )
            assert reply.status_code == 201

            detail_b = await client.get(f"/api/v1/prompts/{prompt_b}")
            assert detail_b.json()["comments_count"] == 2

            foreign_delete = await client.delete(f"/api/v1/comments/{comment.json()['id']}", headers=author)
            assert foreign_delete.status_code == 403
            removed = await client.delete(f"/api/v1/comments/{comment.json()['id']}", headers=fan)
            assert removed.status_code == 204
            detail_b = await client.get(f"/api/v1/prompts/{prompt_b}")
            assert detail_b.json()["comments_count"] == 0

            unliked = await client.post(f"/api/v1/prompts/{prompt_a}/like", headers=fan)
            assert unliked.json()["is_liked"] is False
            assert unliked.json()["likes_count"] == 0

            view = await client.post(f"/api/v1/prompts/{prompt_a}/views")
            assert view.json()["views_count"] == 1
            view = await client.post(f"/api/v1/prompts/{prompt_a}/views", headers=fan)
            assert view.json()["views_count"] == 2

            saved = await client.post(f"/api/v1/prompts/{prompt_a}/save", headers=fan)
            assert saved.json()["is_saved"] is True
            saved_ids = await client.get("/api/v1/saved/me", headers=fan)
            assert saved_ids.json() == [prompt_a]

            collection = await client.post(
                "/api/v1/collections",
                headers=fan,
                json={"name": "Favourites"},
            )
            assert collection.status_code == 201
            collection_id = collection.json()["id"]
            added = await client.post(
                f"/api/v1/collections/{collection_id}/prompts",
                headers=fan,
                json={"prompt_id": prompt_a},
            )
            assert added.status_code == 204
            added_again = await client.post(
                f"/api/v1/collections/{collection_id}/prompts",
                headers=fan,
                json={"prompt_id": prompt_a},
            )
            assert added_again.status_code == 409
            assert added_again.json()["error"]["code"] == "CONFLICT"

            hidden = await client.get(f"/api/v1/collections/{collection_id}", headers=author)
            assert hidden.status_code == 404
            mine = await client.get(f"/api/v1/collections/{collection_id}", headers=fan)
            assert [p["id"] for p in mine.json()["prompts"]] == [prompt_a]

            free_purchase = await client.post(f"/api/v1/prompts/{prompt_a}/purchase", headers=fan)
            assert free_purchase.status_code == 409
            own_purchase = await client.post(f"/api/v1/prompts/{prompt_b}/purchase", headers=author)
            assert own_purchase.status_code == 403
            bought = await client.post(f"/api/v1/prompts/{prompt_b}/purchase", headers=fan)
            assert bought.status_code == 201
            assert Decimal(bought.json()["purchase_price"]) == Decimal("10.00")
            bought_again = await client.post(f"/api/v1/prompts/{prompt_b}/purchase", headers=fan)
            assert bought_again.status_code == 409

            dashboard = await client.get("/api/v1/dashboard", headers=author)
            assert dashboard.status_code == 200
            body = dashboard.json()
            assert body["total_prompts"] == 2
            assert body["total_views"] == 2
            assert body["paid_prompts"] == 1
            assert Decimal(body["gross_earnings"]) == Decimal("10.00")
            assert Decimal(body["net_earnings"]) == Decimal("6.00")
            assert body["top_prompts"][0]["id"] == prompt_a

            analytics = await client.get("/api/v1/analytics")
            assert analytics.json()["total_views"] == 2
            assert analytics.json()["recent_prompts"] == 2
            assert analytics.json()["active_creators"] == 1

            foreign_prompt_delete = await client.delete(f"/api/v1/prompts/{prompt_a}", headers=fan)
            assert foreign_prompt_delete.status_code == 403
            deleted = await client.delete(f"/api/v1/prompts/{prompt_a}", headers=author)
            assert deleted.status_code == 204
            gone = await client.get(f"/api/v1/prompts/{prompt_a}")
            assert gone.status_code == 404
    finally:
        await engine.dispose()
