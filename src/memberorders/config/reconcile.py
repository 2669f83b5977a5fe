"""Concurrency limits for reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass

from memberorders.domain.reconciliation.engine import DEFAULT_MAX_CONCURRENT_GROUPS
from memberorders.domain.reconciliation.finalize import DEFAULT_MAX_CONCURRENT_WRITES

from .env import optional_positive_int


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    max_concurrent_groups: int = DEFAULT_MAX_CONCURRENT_GROUPS
    max_concurrent_writes: int = DEFAULT_MAX_CONCURRENT_WRITES


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        max_concurrent_groups=optional_positive_int(
            "MEMBERORDERS_MAX_CONCURRENT_GROUPS", DEFAULT_MAX_CONCURRENT_GROUPS
        ),
        max_concurrent_writes=optional_positive_int(
            "MEMBERORDERS_MAX_CONCURRENT_WRITES", DEFAULT_MAX_CONCURRENT_WRITES
        ),
    )
