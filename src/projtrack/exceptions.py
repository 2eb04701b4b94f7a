"""Exception hierarchy for projtrack.

DataAccessError wraps every statement or connection failure raised inside
a repository transaction. NotFoundError is raised by the service layer
when an id has no matching project row. ValidationError is raised by the
input layer when text cannot be coerced to the expected type.
"""

from __future__ import annotations


class ProjtrackError(Exception):
    """Base exception for projtrack errors."""

    pass


class DataAccessError(ProjtrackError):
    """Raised when a database statement or connection fails.

    The underlying driver or SQLAlchemy exception is chained as
    ``__cause__``.
    """

    pass


class NotFoundError(ProjtrackError):
    """Raised when a project id has no matching row.

    Attributes:
        project_id: The id that was looked up.
    """

    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"Project with ID={project_id} does not exist.")


class ValidationError(ProjtrackError):
    """Raised when user-supplied text cannot be coerced to a value.

    Attributes:
        value: The offending raw input.
    """

    def __init__(self, value: str, reason: str = "is not a valid number"):
        self.value = value
        super().__init__(f"{value} {reason}.")
