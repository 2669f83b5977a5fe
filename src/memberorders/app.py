"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from memberorders.adapters.flex import FlexListingService
from memberorders.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemySubmissionUnitOfWork,
    is_started,
    startup,
)
from memberorders.config import get_flex_config, get_reconcile_config
from memberorders.domain.ports.unit_of_work import SubmissionUnitOfWork
from memberorders.domain.reconciliation import ReconciliationEngine, RunReport

if TYPE_CHECKING:
    from memberorders.config import ReconcileConfig
    from memberorders.domain.ports.listings import ListingService

UnitOfWorkFactory = Callable[[], SubmissionUnitOfWork]


log = getLogger(__name__)


def initialise_storage(*, database_uri: str | None = None) -> None:
    """Create the submission tables if needed and configure the adapter."""

    if not is_started():
        startup(database_uri=database_uri)


def reconcile_member_orders(
    *,
    listings: ListingService | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: ReconcileConfig | None = None,
    dry_run: bool = False,
) -> RunReport:
    """Merge pending member orders into their plans using the configured adapters."""

    effective_config = config or get_reconcile_config()
    if unit_of_work_factory is None:
        initialise_storage()
    effective_uow = unit_of_work_factory or SqlAlchemySubmissionUnitOfWork
    log.info(
        "Starting member order reconciliation: max_groups=%s, max_writes=%s, dry_run=%s",
        effective_config.max_concurrent_groups,
        effective_config.max_concurrent_writes,
        dry_run,
    )

    report = asyncio.run(
        _run(
            listings=listings,
            unit_of_work_factory=effective_uow,
            config=effective_config,
            dry_run=dry_run,
        )
    )

    log.info(f"Finished member order reconciliation: {report.summary()}")
    return report


async def _run(
    *,
    listings: ListingService | None,
    unit_of_work_factory: UnitOfWorkFactory,
    config: ReconcileConfig,
    dry_run: bool,
) -> RunReport:
    if listings is not None:
        return await _build_engine(listings, unit_of_work_factory, config, dry_run).run()

    async with FlexListingService(config=get_flex_config()) as service:
        return await _build_engine(service, unit_of_work_factory, config, dry_run).run()


def _build_engine(
    listings: ListingService,
    unit_of_work_factory: UnitOfWorkFactory,
    config: ReconcileConfig,
    dry_run: bool,
) -> ReconciliationEngine:
    return ReconciliationEngine(
        unit_of_work_factory=unit_of_work_factory,
        listings=listings,
        max_concurrent_groups=config.max_concurrent_groups,
        max_concurrent_writes=config.max_concurrent_writes,
        dry_run=dry_run,
    )
