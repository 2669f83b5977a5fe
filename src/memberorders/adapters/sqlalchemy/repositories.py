"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select, update

from memberorders.adapters.sqlalchemy.mappings import member_order_table
from memberorders.domain.model import MemberOrderSubmission
from memberorders.domain.ports.persistence import SubmissionNotFoundError

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy import CursorResult
    from sqlalchemy.orm import Session

    from memberorders.domain.model import SubmissionStatus


class SqlAlchemySubmissionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: MemberOrderSubmission) -> None:
        self.session.add(entity)

    def get(self, submission_id: str) -> MemberOrderSubmission | None:
        return self.session.get(MemberOrderSubmission, submission_id)

    def list_by_status(self, status: SubmissionStatus) -> list[MemberOrderSubmission]:
        stmt = (
            select(MemberOrderSubmission)
            .where(member_order_table.c.status == status)
            .order_by(member_order_table.c.created_at.asc(), member_order_table.c.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def set_status(
        self,
        submission_id: str,
        *,
        status: SubmissionStatus,
        updated_at: datetime,
    ) -> None:
        stmt = (
            update(member_order_table)
            .where(member_order_table.c.id == submission_id)
            .values(status=status, updated_at=updated_at)
        )
        result = cast("CursorResult[tuple[()]]", self.session.execute(stmt))
        if result.rowcount == 0:
            raise SubmissionNotFoundError(submission_id)


if TYPE_CHECKING:
    from memberorders.domain.ports.persistence import SubmissionRepository

    def _repository_check(session: Session) -> SubmissionRepository:
        return SqlAlchemySubmissionRepository(session)
