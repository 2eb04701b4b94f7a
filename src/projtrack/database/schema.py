"""Table definitions for the project aggregate.

The project table owns materials and steps by foreign key; categories are
independent and linked through the project_category association table.
Dependent rows are removed by the store when their project is deleted.

Example:
    >>> from projtrack.database.schema import metadata
    >>> async with engine.begin() as conn:
    ...     await conn.run_sync(metadata.create_all)
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)

metadata = MetaData()

project_table = Table(
    "project",
    metadata,
    Column("project_id", Integer, primary_key=True, autoincrement=True),
    Column("project_name", String(128), nullable=False),
    Column("estimated_hours", Numeric(7, 2)),
    Column("actual_hours", Numeric(7, 2)),
    Column("difficulty", Integer),
    Column("notes", Text),
)

material_table = Table(
    "material",
    metadata,
    Column("material_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "project_id",
        Integer,
        ForeignKey("project.project_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("material_name", String(128), nullable=False),
    Column("num_required", Integer),
    Column("cost", Numeric(7, 2)),
)

step_table = Table(
    "step",
    metadata,
    Column("step_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "project_id",
        Integer,
        ForeignKey("project.project_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("step_text", Text, nullable=False),
    Column("step_order", Integer, nullable=False),
)

category_table = Table(
    "category",
    metadata,
    Column("category_id", Integer, primary_key=True, autoincrement=True),
    Column("category_name", String(128), nullable=False, unique=True),
)

project_category_table = Table(
    "project_category",
    metadata,
    Column(
        "project_id",
        Integer,
        ForeignKey("project.project_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "category_id",
        Integer,
        ForeignKey("category.category_id", ondelete="CASCADE"),
        nullable=False,
    ),
    PrimaryKeyConstraint("project_id", "category_id"),
)
