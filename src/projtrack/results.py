"""Tagged result exchanged between the repository and the service.

Update and delete report how many rows they touched instead of raising on
a missing id; the service decides what a missing id means.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from projtrack.exceptions import DataAccessError


class MutationStatus(enum.Enum):
    """Outcome of a single-row update or delete.

    States:
        ok: Exactly one row was affected.
        not_found: No row matched the id.
        error: The statement failed and was rolled back.
    """

    ok = "ok"
    not_found = "not_found"
    error = "error"


@dataclass(frozen=True)
class MutationResult:
    """Result of a repository update or delete.

    Attributes:
        status: Tagged outcome.
        project_id: Id the mutation targeted.
        affected_rows: Row count reported by the store.
        error: The rolled-back failure when status is error.
    """

    status: MutationStatus
    project_id: int
    affected_rows: int = 0
    error: DataAccessError | None = None

    @classmethod
    def from_rowcount(cls, project_id: int, rowcount: int) -> MutationResult:
        """Build a result from an affected-row count."""
        if rowcount == 1:
            return cls(MutationStatus.ok, project_id, rowcount)
        return cls(MutationStatus.not_found, project_id, rowcount)

    @classmethod
    def failed(cls, project_id: int, error: DataAccessError) -> MutationResult:
        """Build a result for a statement that was rolled back."""
        return cls(MutationStatus.error, project_id, 0, error)

    @property
    def ok(self) -> bool:
        return self.status is MutationStatus.ok
