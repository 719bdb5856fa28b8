"""Database engine lifecycle tests."""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from kz_tax_engine import database


class TestDatabaseLifecycle:
    """Test engine creation, schema setup and disposal."""

    @pytest.mark.asyncio
    async def test_create_tables_and_dispose(self, monkeypatch):
        monkeypatch.setattr(
            database,
            "get_engine",
            lambda: create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool),
        )
        await database.dispose_db()

        await database.create_tables()
        engine, factory = database.init_db()
        assert database.init_db()[0] is engine

        async with factory() as session:
            count = await session.scalar(text("SELECT count(*) FROM transactions"))
            assert count == 0
            await session.execute(text("SELECT user_id FROM user_profile"))

        await database.dispose_db()
        assert database._engine is None

    def test_sqlite_engine_has_no_pool_sizing(self):
        engine = database.get_engine("sqlite+aiosqlite:///:memory:")
        assert engine.url.drivername == "sqlite+aiosqlite"
