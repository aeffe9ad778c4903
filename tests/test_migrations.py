import os
import asyncio

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import create_async_engine


@pytest.mark.asyncio
async def test_migrations_apply_cleanly() -> None:
    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set")

    engine = create_async_engine(database_url, pool_pre_ping=True)
    try:
        async with engine.begin() as connection:
            await connection.execute(text("DROP SCHEMA IF EXISTS public CASCADE"))
            await connection.execute(text("CREATE SCHEMA public"))

        alembic_cfg = Config("alembic.ini")
        await asyncio.to_thread(command.upgrade, alembic_cfg, "head")

        expected_tables = {
            "alembic_version",
            "users",
            "profiles",
            "prompts",
            "prompt_steps",
            "likes",
            "comments",
            "saved_prompts",
            "collections",
            "collection_prompts",
            "prompt_purchases",
            "prompt_views",
            "ad_revenue",
            "withdrawal_requests",
            "user_monetization",
        }

        async with engine.connect() as connection:
            tables = await connection.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))
            enums = await connection.execute(text("SELECT typname FROM pg_type WHERE typname = 'prompt_category'"))

        assert expected_tables.issubset(tables)
        assert enums.scalar() == "prompt_category"
    finally:
        await engine.dispose()
