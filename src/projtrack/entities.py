"""Plain entity types returned by the repository and service layers.

These dataclasses carry no database state; the repository builds them from
result rows through the mapping functions in ``projtrack.database.mapping``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class Material:
    """A material needed by one project."""

    material_id: int | None = None
    project_id: int | None = None
    material_name: str | None = None
    num_required: int | None = None
    cost: Decimal | None = None


@dataclass
class Step:
    """One ordered instruction of a project."""

    step_id: int | None = None
    project_id: int | None = None
    step_text: str | None = None
    step_order: int | None = None


@dataclass
class Category:
    """A category shared between projects through project_category."""

    category_id: int | None = None
    category_name: str | None = None


@dataclass
class Project:
    """A project aggregate.

    The scalar fields map to the project table. The three collections are
    only populated by a fetch by id; listings leave them empty.

    Attributes:
        project_id: Store-generated identity, None until inserted.
        project_name: Display name.
        estimated_hours: Planned effort, two decimal places.
        actual_hours: Spent effort, two decimal places.
        difficulty: 1 to 5 by convention.
        notes: Free text.
        materials: Materials attached to the project.
        steps: Steps in step_order.
        categories: Categories linked through project_category.
    """

    project_id: int | None = None
    project_name: str | None = None
    estimated_hours: Decimal | None = None
    actual_hours: Decimal | None = None
    difficulty: int | None = None
    notes: str | None = None
    materials: list[Material] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
