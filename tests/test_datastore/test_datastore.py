"""Tests for the datastore: engine factory, client lifecycle and table helpers."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect, text

from qrmint.config.settings import DatabaseConfig
from qrmint.datastore.client import Datastore
from qrmint.datastore.engines import create_engine
from qrmint.datastore.migrations import drop_all_tables, run_auto_migrate

MEMORY_DSN = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Engine factory
# ---------------------------------------------------------------------------


class TestCreateEngine:
    async def test_create_sqlite_engine(self) -> None:
        engine = create_engine(DatabaseConfig(dsn=MEMORY_DSN))
        assert engine.dialect.name == "sqlite"
        await engine.dispose()

    async def test_engine_echo_flag(self) -> None:
        engine = create_engine(DatabaseConfig(dsn=MEMORY_DSN, debug_sql=True))
        assert engine.echo is True
        await engine.dispose()

    async def test_key_applied_as_password(self) -> None:
        config = DatabaseConfig(dsn="postgresql+asyncpg://qrmint@db.internal/qrmint", key="s3cret")
        engine = create_engine(config)
        assert engine.url.password == "s3cret"
        assert engine.url.username == "qrmint"
        await engine.dispose()


# ---------------------------------------------------------------------------
# Datastore client
# ---------------------------------------------------------------------------


class TestDatastore:
    async def test_open_close(self) -> None:
        ds = Datastore(DatabaseConfig(dsn=MEMORY_DSN))
        assert not ds.is_open
        await ds.open()
        assert ds.is_open
        await ds.close()
        assert not ds.is_open

    async def test_session_executes(self) -> None:
        ds = Datastore(DatabaseConfig(dsn=MEMORY_DSN))
        await ds.open()
        async with ds.session() as session:
            result = await session.execute(text("SELECT 1"))
            assert result.scalar() == 1
        await ds.close()

    async def test_open_leaves_schema_to_migrations(self) -> None:
        ds = Datastore(DatabaseConfig(dsn=MEMORY_DSN))
        await ds.open()
        async with ds.engine.connect() as conn:
            assert await conn.run_sync(lambda c: inspect(c).get_table_names()) == []
        await ds.close()

    def test_session_before_open_raises(self) -> None:
        ds = Datastore(DatabaseConfig(dsn=MEMORY_DSN))
        with pytest.raises(RuntimeError, match="not open"):
            ds.session()

    def test_engine_before_open_raises(self) -> None:
        ds = Datastore(DatabaseConfig(dsn=MEMORY_DSN))
        with pytest.raises(RuntimeError, match="not open"):
            _ = ds.engine


# ---------------------------------------------------------------------------
# Table helpers
# ---------------------------------------------------------------------------


class TestMigrations:
    async def test_auto_migrate_and_drop(self) -> None:
        engine = create_engine(DatabaseConfig(dsn=MEMORY_DSN))

        def _tables(sync_conn):
            return inspect(sync_conn).get_table_names()

        await run_auto_migrate(engine)
        async with engine.connect() as conn:
            assert "qr_codes" in await conn.run_sync(_tables)

        await drop_all_tables(engine)
        async with engine.connect() as conn:
            assert "qr_codes" not in await conn.run_sync(_tables)

        await engine.dispose()
