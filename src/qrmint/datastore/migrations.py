"""Table creation helpers.

For production deployments the Alembic scripts under ``alembic/`` are the
source of truth; these helpers cover development and tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from qrmint.engine.models.base import Base

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


async def run_auto_migrate(engine: AsyncEngine) -> None:
    """Create all tables defined by ORM models.

    Args:
        engine: The async SQLAlchemy engine to migrate.
    """
    import qrmint.engine.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all_tables(engine: AsyncEngine) -> None:
    """Drop all tables (test/dev utility only).

    Args:
        engine: The async SQLAlchemy engine.
    """
    import qrmint.engine.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
