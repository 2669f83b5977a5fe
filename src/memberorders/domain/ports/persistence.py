"""Ports for persisting member-order submissions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from memberorders.domain.model import MemberOrderSubmission

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from memberorders.domain.model import SubmissionStatus


class SubmissionNotFoundError(LookupError):
    """Raised when a status write targets a submission that does not exist."""

    def __init__(self, submission_id: str) -> None:
        super().__init__(f"Member order not found: {submission_id}")
        self.submission_id = submission_id


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class SubmissionRepository(Repository[MemberOrderSubmission], Protocol):
    """Persistence contract for member-order submissions."""

    def list_by_status(self, status: SubmissionStatus) -> Sequence[MemberOrderSubmission]:
        """Return submissions in ``status`` ordered by creation time, oldest first."""
        ...

    def set_status(
        self,
        submission_id: str,
        *,
        status: SubmissionStatus,
        updated_at: datetime,
    ) -> None: ...
