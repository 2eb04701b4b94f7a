"""Project service for projtrack.

Thin policy layer over ProjectRepository: a project id with no matching
row becomes NotFoundError, and listings are returned in ascending id order
whatever order the store produced them in.

Example usage:
    >>> repository = ProjectRepository(engine)
    >>> service = ProjectService(repository)
    >>> project = await service.add(Project(project_name="Bookshelf"))
    >>> await service.get_by_id(project.project_id)
"""

from __future__ import annotations

import structlog

from projtrack.database.repository import ProjectRepository
from projtrack.entities import Project
from projtrack.exceptions import NotFoundError
from projtrack.results import MutationResult, MutationStatus

logger = structlog.get_logger(__name__)


class ProjectService:
    """Existence-enforcing operations on project aggregates.

    Attributes:
        repository: Repository the service delegates storage to.
    """

    def __init__(self, repository: ProjectRepository) -> None:
        self.repository = repository

    async def add(self, project: Project) -> Project:
        """Persist a new project and return it with its assigned id."""
        return await self.repository.insert(project)

    async def list(self) -> list[Project]:
        """List all projects (scalar fields only) in ascending id order."""
        projects = await self.repository.fetch_all()
        return sorted(projects, key=lambda p: p.project_id)

    async def get_by_id(self, project_id: int) -> Project:
        """Load the full aggregate for a project.

        Raises:
            NotFoundError: If no project has that id.
        """
        project = await self.repository.fetch_by_id(project_id)
        if project is None:
            logger.info("project_lookup_missed", project_id=project_id)
            raise NotFoundError(project_id)
        return project

    async def update(self, project: Project) -> None:
        """Replace the scalar fields of an existing project.

        The refreshed aggregate is not returned; call get_by_id to reload it.

        Raises:
            NotFoundError: If no project has project.project_id.
            DataAccessError: If the update statement failed.
        """
        result = await self.repository.update(project)
        _require_one_row(result)

    async def delete(self, project_id: int) -> None:
        """Delete an existing project.

        Raises:
            NotFoundError: If no project has that id.
            DataAccessError: If the delete statement failed.
        """
        result = await self.repository.delete(project_id)
        _require_one_row(result)


def _require_one_row(result: MutationResult) -> None:
    if result.status is MutationStatus.not_found:
        raise NotFoundError(result.project_id)
    if result.status is MutationStatus.error:
        raise result.error
