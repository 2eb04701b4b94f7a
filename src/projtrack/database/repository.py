"""Project aggregate repository for projtrack.

Provides transactional create, read, update and delete operations over the
project table and its material, step and project_category relations. Each
operation checks out its own connection and runs in its own transaction.

The repository reports "no matching row" as data (None or a not_found
MutationResult); deciding that a missing id is an error is left to
ProjectService.
"""

from __future__ import annotations

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from projtrack.database.connection import transaction
from projtrack.database.mapping import (
    bind_id,
    category_from_row,
    material_from_row,
    project_from_row,
    project_params,
    step_from_row,
)
from projtrack.database.schema import (
    category_table,
    material_table,
    project_category_table,
    project_table,
    step_table,
)
from projtrack.entities import Category, Material, Project, Step
from projtrack.exceptions import DataAccessError
from projtrack.results import MutationResult

logger = structlog.get_logger(__name__)


class ProjectRepository:
    """Transactional access to project aggregates.

    Attributes:
        engine: Async engine each operation checks a connection out of.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def insert(self, project: Project) -> Project:
        """Insert a project and assign its generated id.

        Args:
            project: Project whose five scalar fields are persisted.

        Returns:
            The same Project with project_id set.

        Raises:
            DataAccessError: If the insert fails; nothing is persisted.
        """
        async with transaction(self.engine) as conn:
            params = project_params(project)
            result = await conn.execute(insert(project_table).values(**params))
            project_id = result.inserted_primary_key[0]

        project.project_id = int(project_id)

        logger.info(
            "project_inserted",
            project_id=project.project_id,
            name=project.project_name,
        )

        return project

    async def fetch_all(self) -> list[Project]:
        """List every project ordered by name.

        Only the scalar fields are loaded; materials, steps and categories
        are left empty.

        Returns:
            List of Project instances ordered by project_name.
        """
        stmt = select(project_table).order_by(project_table.c.project_name)

        async with transaction(self.engine) as conn:
            result = await conn.execute(stmt)
            projects = [project_from_row(row) for row in result.mappings()]

        logger.debug("projects_fetched", count=len(projects))
        return projects

    async def fetch_by_id(self, project_id: int) -> Project | None:
        """Load a full project aggregate.

        The project row and its three collections are read inside one
        transaction so the aggregate is a consistent snapshot.

        Args:
            project_id: Id of the project to load.

        Returns:
            The Project with materials, steps and categories attached, or
            None if no project has that id.
        """
        stmt = select(project_table).where(project_table.c.project_id == bind_id(project_id))

        async with transaction(self.engine) as conn:
            result = await conn.execute(stmt)
            row = result.mappings().one_or_none()

            if row is None:
                project = None
            else:
                project = project_from_row(row)
                project.materials = await self._fetch_materials(conn, project_id)
                project.steps = await self._fetch_steps(conn, project_id)
                project.categories = await self._fetch_categories(conn, project_id)

        if project is None:
            logger.debug("project_absent", project_id=project_id)
        else:
            logger.debug(
                "project_fetched",
                project_id=project_id,
                materials=len(project.materials),
                steps=len(project.steps),
                categories=len(project.categories),
            )

        return project

    async def update(self, project: Project) -> MutationResult:
        """Replace the five scalar fields of one project row.

        Args:
            project: Project carrying the id to match and the new values.

        Returns:
            MutationResult tagged ok when exactly one row changed,
            not_found when none matched, error when the statement failed.
        """
        try:
            async with transaction(self.engine) as conn:
                stmt = (
                    update(project_table)
                    .where(project_table.c.project_id == bind_id(project.project_id))
                    .values(**project_params(project))
                )
                result = await conn.execute(stmt)
                rowcount = _single_row(result.rowcount, "update")
        except DataAccessError as e:
            logger.error("project_update_failed", project_id=project.project_id, error=str(e))
            return MutationResult.failed(project.project_id, e)

        mutation = MutationResult.from_rowcount(project.project_id, rowcount)
        if mutation.ok:
            logger.info("project_updated", project_id=project.project_id)
        else:
            logger.warning("project_not_found", project_id=project.project_id, operation="update")

        return mutation

    async def delete(self, project_id: int) -> MutationResult:
        """Delete one project row.

        Dependent material, step and project_category rows are removed by
        the store's cascading foreign keys.

        Args:
            project_id: Id of the project to delete.

        Returns:
            MutationResult with the same convention as update.
        """
        try:
            async with transaction(self.engine) as conn:
                stmt = delete(project_table).where(
                    project_table.c.project_id == bind_id(project_id)
                )
                result = await conn.execute(stmt)
                rowcount = _single_row(result.rowcount, "delete")
        except DataAccessError as e:
            logger.error("project_delete_failed", project_id=project_id, error=str(e))
            return MutationResult.failed(project_id, e)

        mutation = MutationResult.from_rowcount(project_id, rowcount)
        if mutation.ok:
            logger.info("project_deleted", project_id=project_id)
        else:
            logger.warning("project_not_found", project_id=project_id, operation="delete")

        return mutation

    async def _fetch_materials(self, conn: AsyncConnection, project_id: int) -> list[Material]:
        stmt = (
            select(material_table)
            .where(material_table.c.project_id == project_id)
            .order_by(material_table.c.material_id)
        )
        result = await conn.execute(stmt)
        return [material_from_row(row) for row in result.mappings()]

    async def _fetch_steps(self, conn: AsyncConnection, project_id: int) -> list[Step]:
        stmt = (
            select(step_table)
            .where(step_table.c.project_id == project_id)
            .order_by(step_table.c.step_order, step_table.c.step_id)
        )
        result = await conn.execute(stmt)
        return [step_from_row(row) for row in result.mappings()]

    async def _fetch_categories(self, conn: AsyncConnection, project_id: int) -> list[Category]:
        stmt = (
            select(category_table)
            .join(
                project_category_table,
                project_category_table.c.category_id == category_table.c.category_id,
            )
            .where(project_category_table.c.project_id == project_id)
            .order_by(category_table.c.category_name)
        )
        result = await conn.execute(stmt)
        return [category_from_row(row) for row in result.mappings()]


def _single_row(rowcount: int, operation: str) -> int:
    """Reject statements that touched more than one project row."""
    if rowcount > 1:
        raise DataAccessError(f"Project {operation} affected {rowcount} rows, expected at most 1")
    return rowcount
