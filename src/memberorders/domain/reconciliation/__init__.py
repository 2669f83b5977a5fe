"""Reconciliation of member-order submissions into shared plans.

Stages, leaf-first:
1) fetch pending submissions, oldest first
2) group them per plan/order pair, latest submission per participant wins
3) check the plan and its parent order are still eligible
4) merge participants' day entries into the plan's order detail
5) persist the merged detail onto the plan listing
6) finalize every raw submission as completed or canceled
"""

from __future__ import annotations

from .contracts import (
    EligibilityDecision,
    FinalizeResult,
    GroupOutcome,
    GroupStage,
    GroupStatus,
    PlanGroup,
    RunReport,
)
from .eligibility import check_eligibility
from .engine import ReconciliationEngine
from .errors import (
    GroupAbortedError,
    MissingOrderDetailError,
    MissingOrderIdError,
    OrderMismatchError,
    OrderNotFoundError,
    PlanNotFoundError,
    PlanUpdateError,
    ReconciliationError,
    SubmissionFetchError,
)
from .fetch import fetch_pending_submissions
from .finalize import finalize_submissions
from .grouping import group_submissions
from .merge import merge_order_detail
from .persist import persist_order_detail

__all__ = [
    "EligibilityDecision",
    "FinalizeResult",
    "GroupAbortedError",
    "GroupOutcome",
    "GroupStage",
    "GroupStatus",
    "MissingOrderDetailError",
    "MissingOrderIdError",
    "OrderMismatchError",
    "OrderNotFoundError",
    "PlanGroup",
    "PlanNotFoundError",
    "PlanUpdateError",
    "ReconciliationEngine",
    "ReconciliationError",
    "RunReport",
    "SubmissionFetchError",
    "check_eligibility",
    "fetch_pending_submissions",
    "finalize_submissions",
    "group_submissions",
    "merge_order_detail",
    "persist_order_detail",
]
