"""Orchestrator for member-order reconciliation.

One run fetches every pending submission, groups them by plan/order pair and
drives each group through ``validate -> merge -> persist -> finalize``. Groups
run concurrently and never cancel each other; each yields a ``GroupOutcome``
collected into the run's ``RunReport``. Only a failed fetch fails the run.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from memberorders.domain.model import MEMBER_ORDERS_KEY, SubmissionStatus

from .contracts import GroupOutcome, GroupStage, GroupStatus, RunReport
from .eligibility import check_eligibility
from .errors import GroupAbortedError, PlanUpdateError
from .fetch import fetch_pending_submissions
from .finalize import DEFAULT_MAX_CONCURRENT_WRITES, finalize_submissions
from .grouping import group_submissions
from .merge import merge_order_detail
from .persist import persist_order_detail

if TYPE_CHECKING:
    from collections.abc import Callable

    from memberorders.domain.model import JsonObject
    from memberorders.domain.ports.listings import ListingService
    from memberorders.domain.ports.unit_of_work import SubmissionUnitOfWork

    from .contracts import PlanGroup

log = getLogger(__name__)

DEFAULT_MAX_CONCURRENT_GROUPS = 8


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class ReconciliationEngine:
    """Run one reconciliation pass over all pending member orders."""

    unit_of_work_factory: Callable[[], SubmissionUnitOfWork]
    listings: ListingService
    clock: Clock = field(default=_utcnow)
    max_concurrent_groups: int = DEFAULT_MAX_CONCURRENT_GROUPS
    max_concurrent_writes: int = DEFAULT_MAX_CONCURRENT_WRITES
    dry_run: bool = False

    async def run(self) -> RunReport:
        """Process every pending group; raises ``SubmissionFetchError`` if loading fails."""

        submissions = await asyncio.to_thread(
            fetch_pending_submissions, self.unit_of_work_factory
        )
        groups = group_submissions(submissions)
        report = RunReport(fetched=len(submissions))
        if not groups:
            log.info("No pending member orders to reconcile")
            return report

        log.info(
            "Reconciling %d member orders across %d plan groups%s",
            len(submissions),
            len(groups),
            " (dry run)" if self.dry_run else "",
        )
        semaphore = asyncio.Semaphore(self.max_concurrent_groups)

        async def _bounded(group: PlanGroup) -> GroupOutcome:
            async with semaphore:
                return await self._process_group_safely(group)

        async with asyncio.TaskGroup() as task_group:
            tasks = [task_group.create_task(_bounded(group)) for group in groups]

        report.outcomes.extend(task.result() for task in tasks)
        log.info("Reconciliation finished: %s", report.summary())
        return report

    async def _process_group_safely(self, group: PlanGroup) -> GroupOutcome:
        try:
            return await self.process_group(group)
        except Exception as exc:
            log.exception(
                "Unexpected error while reconciling plan %s (order %s)",
                group.plan_id,
                group.order_id,
            )
            return GroupOutcome(
                plan_id=group.plan_id,
                order_id=group.order_id,
                status=GroupStatus.FAILED,
                stage=GroupStage.PENDING,
                submission_ids=group.submission_ids,
                reason=str(exc) or type(exc).__name__,
            )

    async def process_group(self, group: PlanGroup) -> GroupOutcome:
        """Run the pipeline for one group, stage by stage."""

        outcome = GroupOutcome(
            plan_id=group.plan_id,
            order_id=group.order_id,
            status=GroupStatus.FAILED,
            stage=GroupStage.PENDING,
            submission_ids=group.submission_ids,
        )

        try:
            decision = await check_eligibility(group, self.listings)
        except GroupAbortedError as exc:
            log.error("Skipping member orders of plan %s: %s", group.plan_id, exc)
            outcome.status = GroupStatus.ABORTED
            outcome.reason = exc.reason
            return outcome
        outcome.stage = GroupStage.VALIDATED

        if not decision.eligible:
            outcome.reason = f"order state {decision.order_state!r} is not eligible"
            if self.dry_run:
                log.info(
                    "Dry run: would cancel %d member orders of plan %s (order %s)",
                    len(group.submissions),
                    group.plan_id,
                    group.order_id,
                )
                outcome.status = GroupStatus.SKIPPED
                return outcome
            return await self._finalize(
                group, outcome, status=SubmissionStatus.CANCELED, success=GroupStatus.CANCELED
            )

        merged = merge_order_detail(decision.order_detail, group.entries_by_participant)
        outcome.stage = GroupStage.MERGED
        _log_merged_sample(group, merged)

        if self.dry_run:
            log.info(
                "Dry run: would merge %d participants into plan %s (order %s)",
                len(group.entries_by_participant),
                group.plan_id,
                group.order_id,
            )
            outcome.status = GroupStatus.SKIPPED
            return outcome

        try:
            await persist_order_detail(
                self.listings,
                plan_id=group.plan_id,
                order_id=group.order_id,
                order_detail=merged,
            )
        except PlanUpdateError as exc:
            log.error("%s: %s; member orders stay pending", exc, exc.__cause__)
            outcome.reason = str(exc)
            return outcome
        outcome.stage = GroupStage.PERSISTED

        return await self._finalize(
            group, outcome, status=SubmissionStatus.COMPLETED, success=GroupStatus.MERGED
        )

    async def _finalize(
        self,
        group: PlanGroup,
        outcome: GroupOutcome,
        *,
        status: SubmissionStatus,
        success: GroupStatus,
    ) -> GroupOutcome:
        result = await finalize_submissions(
            self.unit_of_work_factory,
            group.submissions,
            status=status,
            now=self.clock(),
            max_concurrency=self.max_concurrent_writes,
        )
        outcome.stage = GroupStage.FINALIZED
        outcome.status = success
        outcome.finalized = len(result.updated)
        outcome.failed_writes = len(result.failed)
        if not result.complete:
            outcome.reason = f"{len(result.failed)} status writes failed"
        log.info(
            "Marked %d member orders of plan %s (order %s) as %s",
            outcome.finalized,
            group.plan_id,
            group.order_id,
            status,
        )
        return outcome


def _log_merged_sample(group: PlanGroup, merged: JsonObject) -> None:
    if not merged:
        return
    first_day = next(iter(merged))
    record = merged[first_day]
    member_orders = record.get(MEMBER_ORDERS_KEY) if isinstance(record, dict) else None
    log.debug(
        "Merged order detail for plan %s (order %s), day %s: %s",
        group.plan_id,
        group.order_id,
        first_day,
        member_orders,
    )
