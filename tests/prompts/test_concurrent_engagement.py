import os
import asyncio
import uuid

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from prompthub.features.comments.services import add_comment, delete_comment
from prompthub.features.likes.services import toggle_like
from prompthub.features.prompts import cache
from prompthub.platform.db.models import Comment, Like, Prompt, User
from prompthub.platform.errors import NotFoundError


class _NullRedis:
    async def get(self, key):
        return None

    async def set(self, key, value, ex=None):
        return None

    async def incr(self, key):
        return 1


async def _fresh_schema(engine) -> None:
    async with engine.begin() as connection:
        await connection.execute(text("DROP SCHEMA IF EXISTS public CASCADE"))
        await connection.execute(text("CREATE SCHEMA public"))

    alembic_cfg = Config("alembic.ini")
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")


@pytest.mark.asyncio
async def test_double_unlike_keeps_counter_in_step(monkeypatch: pytest.MonkeyPatch) -> None:
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    monkeypatch.setattr(cache, "get_redis", lambda: _NullRedis())

    engine = create_async_engine(database_url, pool_pre_ping=True)
    try:
        await _fresh_schema(engine)
        sessionmaker = async_sessionmaker(engine, expire_on_commit=False)

        author_id, fan_id, other_id = (str(uuid.uuid4()) for _ in range(3))
        async with sessionmaker() as session:
            session.add_all([User(id=author_id), User(id=fan_id), User(id=other_id)])
            await session.flush()
            prompt = Prompt(user_id=author_id, title="Liked", prompt_text="text")
            session.add(prompt)
            await session.commit()
            prompt_id = prompt.id

        for liker in (fan_id, other_id):
            async with sessionmaker() as session:
                await toggle_like(session, user_id=liker, prompt_id=prompt_id)

        async def _unlike():
            async with sessionmaker() as session:
                return await toggle_like(session, user_id=fan_id, prompt_id=prompt_id)

        await asyncio.gather(_unlike(), _unlike())

        async with sessionmaker() as session:
            rows = await session.execute(select(func.count()).select_from(Like).where(Like.prompt_id == prompt_id))
            counter = await session.execute(select(Prompt.likes_count).where(Prompt.id == prompt_id))
            like_rows = int(rows.scalar() or 0)
            assert like_rows >= 1
            assert counter.scalar() == like_rows
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_double_thread_delete_keeps_counter_in_step(monkeypatch: pytest.MonkeyPatch) -> None:
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    monkeypatch.setattr(cache, "get_redis", lambda: _NullRedis())

    engine = create_async_engine(database_url, pool_pre_ping=True)
    try:
        await _fresh_schema(engine)
        sessionmaker = async_sessionmaker(engine, expire_on_commit=False)

        author_id, fan_id = str(uuid.uuid4()), str(uuid.uuid4())
        async with sessionmaker() as session:
            session.add_all([User(id=author_id), User(id=fan_id)])
            await session.flush()
            prompt = Prompt(user_id=author_id, title="Discussed", prompt_text="text")
            session.add(prompt)
            await session.commit()
            prompt_id = prompt.id

        async with sessionmaker() as session:
            root, _ = await add_comment(session, user_id=fan_id, prompt_id=prompt_id, text="First")
            await add_comment(session, user_id=author_id, prompt_id=prompt_id, text="Reply", parent_id=root.id)
            await add_comment(session, user_id=author_id, prompt_id=prompt_id, text="Unrelated")

        async def _delete():
            async with sessionmaker() as session:
                await delete_comment(session, user_id=fan_id, comment_id=root.id)

        results = await asyncio.gather(_delete(), _delete(), return_exceptions=True)
        assert all(r is None or isinstance(r, NotFoundError) for r in results)

        async with sessionmaker() as session:
            rows = await session.execute(
                select(func.count()).select_from(Comment).where(Comment.prompt_id == prompt_id)
            )
            counter = await session.execute(select(Prompt.comments_count).where(Prompt.id == prompt_id))
            assert rows.scalar() == 1
            assert counter.scalar() == 1
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_usernames_differing_only_in_case_cannot_both_be_claimed() -> None:
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    from sqlalchemy.exc import IntegrityError

    from prompthub.features.profiles.services import create_profile
    from prompthub.platform.errors import ConflictError

    engine = create_async_engine(database_url, pool_pre_ping=True)
    try:
        await _fresh_schema(engine)
        sessionmaker = async_sessionmaker(engine, expire_on_commit=False)

        first_id, second_id = str(uuid.uuid4()), str(uuid.uuid4())
        async with sessionmaker() as session:
            session.add_all([User(id=first_id), User(id=second_id)])
            await session.commit()

        async def _claim(user_id: str, username: str):
            async with sessionmaker() as session:
                return await create_profile(session, user_id=user_id, fields={"username": username})

        results = await asyncio.gather(
            _claim(first_id, "Author"),
            _claim(second_id, "author"),
            return_exceptions=True,
        )

        refused = [r for r in results if isinstance(r, (ConflictError, IntegrityError))]
        assert len(refused) == 1
        assert len(results) - len(refused) == 1
    finally:
        await engine.dispose()
