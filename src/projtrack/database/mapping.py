"""Parameter binding and row extraction for the project aggregate.

Values are validated and normalized here before SQLAlchemy binds them as
statement parameters. Result rows are turned into entities by one explicit
mapping function per entity. Any value of the wrong type surfaces as
DataAccessError.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Mapping

import pydantic
from pydantic import Field, TypeAdapter

from projtrack.entities import Category, Material, Project, Step
from projtrack.exceptions import DataAccessError

HOURS_SCALE = Decimal("0.01")

# NUMERIC(7,2): finite, at most seven digits in total
_numeric_7_2 = TypeAdapter(
    Annotated[Decimal, Field(max_digits=7, decimal_places=2, allow_inf_nan=False)]
)


def bind_value(value: Any, expected_type: type, column: str) -> Any:
    """Validate a single value before it is bound to ``column``.

    Args:
        value: The value to bind, or None for SQL NULL.
        expected_type: int, str or Decimal.
        column: Column name, used in error messages.

    Returns:
        The value to bind. Decimals are quantized to two places.

    Raises:
        DataAccessError: If the value does not match expected_type.
    """
    if value is None:
        return None

    # bool is an int subclass but never a valid column value here
    if isinstance(value, bool):
        raise _type_mismatch(value, expected_type, column)

    if expected_type is Decimal:
        if not isinstance(value, (Decimal, int)):
            raise _type_mismatch(value, expected_type, column)
        return to_decimal(value, column)

    if not isinstance(value, expected_type):
        raise _type_mismatch(value, expected_type, column)
    return value


def bind_id(value: Any) -> int:
    """Validate a project id used in a WHERE clause."""
    if value is None:
        raise DataAccessError("project_id is required")
    return bind_value(value, int, "project_id")


def project_params(project: Project) -> dict[str, Any]:
    """Build the parameter mapping for the five scalar project columns."""
    return {
        "project_name": bind_value(project.project_name, str, "project_name"),
        "estimated_hours": bind_value(project.estimated_hours, Decimal, "estimated_hours"),
        "actual_hours": bind_value(project.actual_hours, Decimal, "actual_hours"),
        "difficulty": bind_value(project.difficulty, int, "difficulty"),
        "notes": bind_value(project.notes, str, "notes"),
    }


def to_decimal(value: Any, column: str) -> Decimal:
    """Convert a numeric value to a Decimal with two decimal places.

    The quantized value must fit the NUMERIC(7,2) columns. NaN, infinities
    and values with more than five integer digits raise DataAccessError.
    """
    try:
        quantized = Decimal(value).quantize(HOURS_SCALE)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise DataAccessError(f"Invalid numeric value for {column}: {value!r}") from e

    try:
        return _numeric_7_2.validate_python(quantized)
    except pydantic.ValidationError as e:
        raise DataAccessError(
            f"Numeric value out of range for {column}: {value!r}"
        ) from e


def project_from_row(row: Mapping[str, Any]) -> Project:
    """Map a project row to a Project with empty collections."""
    return Project(
        project_id=_int(row, "project_id"),
        project_name=_str(row, "project_name"),
        estimated_hours=_decimal(row, "estimated_hours"),
        actual_hours=_decimal(row, "actual_hours"),
        difficulty=_int(row, "difficulty"),
        notes=_str(row, "notes"),
    )


def material_from_row(row: Mapping[str, Any]) -> Material:
    """Map a material row to a Material."""
    return Material(
        material_id=_int(row, "material_id"),
        project_id=_int(row, "project_id"),
        material_name=_str(row, "material_name"),
        num_required=_int(row, "num_required"),
        cost=_decimal(row, "cost"),
    )


def step_from_row(row: Mapping[str, Any]) -> Step:
    """Map a step row to a Step."""
    return Step(
        step_id=_int(row, "step_id"),
        project_id=_int(row, "project_id"),
        step_text=_str(row, "step_text"),
        step_order=_int(row, "step_order"),
    )


def category_from_row(row: Mapping[str, Any]) -> Category:
    """Map a category row to a Category."""
    return Category(
        category_id=_int(row, "category_id"),
        category_name=_str(row, "category_name"),
    )


# Column readers: absent columns and NULLs map to None


def _int(row: Mapping[str, Any], column: str) -> int | None:
    value = row.get(column)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DataAccessError(f"Invalid integer in column {column}: {value!r}") from e


def _str(row: Mapping[str, Any], column: str) -> str | None:
    value = row.get(column)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DataAccessError(f"Invalid text in column {column}: {value!r}")
    return value


def _decimal(row: Mapping[str, Any], column: str) -> Decimal | None:
    value = row.get(column)
    if value is None:
        return None
    if isinstance(value, float):
        # Drivers without native decimals hand back floats
        value = repr(value)
    return to_decimal(value, column)


def _type_mismatch(value: Any, expected_type: type, column: str) -> DataAccessError:
    return DataAccessError(
        f"Column {column} expects {expected_type.__name__}, "
        f"got {type(value).__name__}: {value!r}"
    )
