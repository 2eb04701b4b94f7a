"""Database layer for projtrack.

This module handles engine creation, scoped transactions, table metadata,
row mapping and the project aggregate repository.

Public API:
    get_engine: Create an AsyncEngine from DatabaseConfig.
    transaction: Scoped connection and transaction for one unit of work.
    create_schema / drop_schema: Create or drop the project tables.
    ProjectRepository: Transactional CRUD over project aggregates.
    metadata: SQLAlchemy MetaData holding every table.
"""

from projtrack.database.connection import (
    create_schema,
    drop_schema,
    get_engine,
    transaction,
)
from projtrack.database.repository import ProjectRepository
from projtrack.database.schema import (
    category_table,
    material_table,
    metadata,
    project_category_table,
    project_table,
    step_table,
)

__all__ = [
    "get_engine",
    "transaction",
    "create_schema",
    "drop_schema",
    "ProjectRepository",
    "metadata",
    "project_table",
    "material_table",
    "step_table",
    "category_table",
    "project_category_table",
]
