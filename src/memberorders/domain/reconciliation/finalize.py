"""Write the final status onto every raw submission of a group."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from .contracts import FinalizeResult

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from memberorders.domain.model import MemberOrderSubmission, SubmissionStatus
    from memberorders.domain.ports.unit_of_work import SubmissionUnitOfWork

log = getLogger(__name__)

DEFAULT_MAX_CONCURRENT_WRITES = 16


def _write_status(
    unit_of_work_factory: Callable[[], SubmissionUnitOfWork],
    submission_id: str,
    *,
    status: SubmissionStatus,
    updated_at: datetime,
) -> None:
    with unit_of_work_factory() as uow:
        uow.repositories.submissions.set_status(
            submission_id, status=status, updated_at=updated_at
        )
        uow.commit()


async def finalize_submissions(
    unit_of_work_factory: Callable[[], SubmissionUnitOfWork],
    submissions: Sequence[MemberOrderSubmission],
    *,
    status: SubmissionStatus,
    now: datetime,
    max_concurrency: int = DEFAULT_MAX_CONCURRENT_WRITES,
) -> FinalizeResult:
    """Set ``status`` on each submission; writes are independent of each other."""

    semaphore = asyncio.Semaphore(max_concurrency)

    async def _finalize_one(submission: MemberOrderSubmission) -> None:
        async with semaphore:
            await asyncio.to_thread(
                _write_status,
                unit_of_work_factory,
                submission.id,
                status=status,
                updated_at=now,
            )

    results = await asyncio.gather(
        *(_finalize_one(submission) for submission in submissions),
        return_exceptions=True,
    )

    outcome = FinalizeResult(status=status)
    for submission, result in zip(submissions, results, strict=True):
        if isinstance(result, BaseException):
            log.error(
                "Failed to mark member order %s as %s (plan=%s, order=%s): %s",
                submission.id,
                status,
                submission.plan_id,
                submission.order_id,
                result,
            )
            outcome.failed[submission.id] = str(result) or type(result).__name__
            continue
        outcome.updated.append(submission.id)
    return outcome
