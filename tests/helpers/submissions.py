"""Reusable fakes and helpers for member-order reconciliation tests."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Literal

from memberorders.domain.model import (
    Listing,
    MemberOrderSubmission,
    SubmissionStatus,
)
from memberorders.domain.ports.persistence import SubmissionNotFoundError
from memberorders.domain.ports.unit_of_work import SubmissionRepositories

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from types import TracebackType

    from memberorders.domain.model import JsonObject, JsonValue

BASE_TIME = datetime(2024, 1, 1, 8, tzinfo=UTC)
FIXED_NOW = datetime(2024, 1, 2, 12, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_submission(
    submission_id: str,
    *,
    plan_id: str = "plan-1",
    participant_id: str = "user-a",
    order_id: str = "order-1",
    plan_data: JsonObject | None = None,
    minutes: int = 0,
    status: SubmissionStatus = SubmissionStatus.PENDING,
) -> MemberOrderSubmission:
    """Create a submission created ``minutes`` after ``BASE_TIME``."""

    return MemberOrderSubmission(
        id=submission_id,
        plan_id=plan_id,
        participant_id=participant_id,
        order_id=order_id,
        plan_data=plan_data if plan_data is not None else {},
        status=status,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def day_data(participant_id: str, items: JsonValue, *days: str) -> JsonObject:
    """Build ``plan_data`` holding the same items for each of ``days``."""

    return {day: {participant_id: items} for day in days}


def make_plan(plan_id: str, *, order_id: str | None, order_detail: JsonValue) -> Listing:
    metadata: dict[str, JsonValue] = {"orderDetail": order_detail}
    if order_id is not None:
        metadata["orderId"] = order_id
    return Listing(id=plan_id, metadata=metadata)


def make_order(order_id: str, *, state: str) -> Listing:
    return Listing(id=order_id, metadata={"orderState": state})


class FakeSubmissionRepository:
    """In-memory submission store; keeps copies so callers cannot mutate stored state."""

    def __init__(self, initial: Iterable[MemberOrderSubmission] | None = None) -> None:
        self._items: dict[str, MemberOrderSubmission] = {}
        self._lock = threading.Lock()
        self.fail_ids: set[str] = set()
        self.list_error: Exception | None = None
        self.status_writes: list[tuple[str, SubmissionStatus]] = []
        for item in initial or ():
            self.add(item)

    def add(self, entity: MemberOrderSubmission) -> None:
        self._items[entity.id] = replace(entity, plan_data=dict(entity.plan_data))

    def get(self, submission_id: str) -> MemberOrderSubmission:
        return self._items[submission_id]

    def status_of(self, submission_id: str) -> SubmissionStatus:
        return self._items[submission_id].status

    def list_by_status(self, status: SubmissionStatus) -> list[MemberOrderSubmission]:
        if self.list_error is not None:
            raise self.list_error
        matching = [item for item in self._items.values() if item.status is status]
        matching.sort(key=lambda item: (item.created_at, item.id))
        return [replace(item) for item in matching]

    def set_status(
        self,
        submission_id: str,
        *,
        status: SubmissionStatus,
        updated_at: datetime,
    ) -> None:
        if submission_id in self.fail_ids:
            raise RuntimeError(f"write rejected for {submission_id}")
        with self._lock:
            current = self._items.get(submission_id)
            if current is None:
                raise SubmissionNotFoundError(submission_id)
            self._items[submission_id] = replace(current, status=status, updated_at=updated_at)
            self.status_writes.append((submission_id, status))


class FakeSubmissionUnitOfWork:
    """Unit of work wrapper around a shared fake repository."""

    def __init__(self, repository: FakeSubmissionRepository) -> None:
        self._repositories = SubmissionRepositories(submissions=repository)
        self.committed = False
        self.rolled_back = False

    @property
    def repositories(self) -> SubmissionRepositories:
        return self._repositories

    def __enter__(self) -> FakeSubmissionUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True


class FakeListingService:
    """In-memory listing service recording metadata updates."""

    def __init__(self, listings: Iterable[Listing] = ()) -> None:
        self.listings: dict[str, Listing] = {listing.id: listing for listing in listings}
        self.failing_gets: set[str] = set()
        self.failing_updates: set[str] = set()
        self.requested: list[str] = []
        self.updates: list[tuple[str, dict[str, JsonValue]]] = []

    async def get_listing(self, listing_id: str) -> Listing | None:
        self.requested.append(listing_id)
        if listing_id in self.failing_gets:
            raise ConnectionError(f"listing service unavailable for {listing_id}")
        return self.listings.get(listing_id)

    async def update_listing_metadata(
        self,
        listing_id: str,
        metadata: Mapping[str, JsonValue],
    ) -> None:
        if listing_id in self.failing_updates:
            raise ConnectionError(f"update rejected for {listing_id}")
        existing = self.listings[listing_id]
        self.updates.append((listing_id, dict(metadata)))
        self.listings[listing_id] = Listing(
            id=listing_id, metadata={**existing.metadata, **metadata}
        )


if TYPE_CHECKING:
    from memberorders.domain.ports.listings import ListingService
    from memberorders.domain.ports.persistence import SubmissionRepository
    from memberorders.domain.ports.unit_of_work import SubmissionUnitOfWork

    _check_repo: SubmissionRepository = FakeSubmissionRepository()
    _check_uow: SubmissionUnitOfWork = FakeSubmissionUnitOfWork(FakeSubmissionRepository())
    _check_listings: ListingService = FakeListingService()
