"""Pytest fixtures for integration tests.

Provides async database fixtures for testing the repository and service
against a temporary SQLite database file. Production deployments use
PostgreSQL through asyncpg; the schema and statements are portable so the
same behavior is exercised here through aiosqlite.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any, AsyncGenerator

import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from projtrack.config import DatabaseConfig
from projtrack.database.connection import create_schema, get_engine
from projtrack.database.repository import ProjectRepository
from projtrack.database.schema import (
    category_table,
    material_table,
    project_category_table,
    step_table,
)
from projtrack.service import ProjectService


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a SQLite engine on a fresh database file with all tables.

    Yields:
        Configured AsyncEngine instance.
    """
    config = DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'projects.db'}")
    test_engine = get_engine(config)
    await create_schema(test_engine)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture
async def repository(engine: AsyncEngine) -> ProjectRepository:
    """Repository bound to the test engine."""
    return ProjectRepository(engine)


@pytest_asyncio.fixture
async def service(repository: ProjectRepository) -> ProjectService:
    """Service bound to the test repository."""
    return ProjectService(repository)


class ChildRows:
    """Inserts material, step and category rows outside the repository."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def _insert(self, table: Any, **values: Any) -> int:
        async with self.engine.begin() as conn:
            result = await conn.execute(insert(table).values(**values))
            return int(result.inserted_primary_key[0])

    async def material(
        self,
        project_id: int,
        name: str,
        num_required: int | None = None,
        cost: Decimal | None = None,
    ) -> int:
        return await self._insert(
            material_table,
            project_id=project_id,
            material_name=name,
            num_required=num_required,
            cost=cost,
        )

    async def step(self, project_id: int, text: str, order: int) -> int:
        return await self._insert(
            step_table, project_id=project_id, step_text=text, step_order=order
        )

    async def category(self, name: str) -> int:
        return await self._insert(category_table, category_name=name)

    async def link(self, project_id: int, category_id: int) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(
                insert(project_category_table).values(
                    project_id=project_id, category_id=category_id
                )
            )


@pytest_asyncio.fixture
async def child_rows(engine: AsyncEngine) -> ChildRows:
    """Helper for seeding rows the repository only ever reads."""
    return ChildRows(engine)
