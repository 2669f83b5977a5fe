"""Load the pending submissions a run works on."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from memberorders.domain.model import SubmissionStatus

from .errors import SubmissionFetchError

if TYPE_CHECKING:
    from collections.abc import Callable

    from memberorders.domain.model import MemberOrderSubmission
    from memberorders.domain.ports.unit_of_work import SubmissionUnitOfWork

log = getLogger(__name__)


def fetch_pending_submissions(
    unit_of_work_factory: Callable[[], SubmissionUnitOfWork],
) -> list[MemberOrderSubmission]:
    """Return every pending submission, oldest first.

    Ordering matters: grouping lets later submissions from the same participant
    overwrite earlier ones.
    """

    try:
        with unit_of_work_factory() as uow:
            submissions = list(
                uow.repositories.submissions.list_by_status(SubmissionStatus.PENDING)
            )
    except Exception as exc:
        raise SubmissionFetchError("Failed to fetch pending member orders") from exc

    log.info("Fetched %d pending member orders", len(submissions))
    return submissions
