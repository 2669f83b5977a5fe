"""Error taxonomy for reconciliation runs.

- ``SubmissionFetchError`` is fatal for the whole run.
- ``GroupAbortedError`` subclasses skip one plan/order group and leave its
  submissions pending for the next run.
- ``PlanUpdateError`` marks a group failed after a successful merge; its
  submissions stay pending as well.
"""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for reconciliation failures."""


class SubmissionFetchError(ReconciliationError):
    """Raised when pending submissions cannot be loaded."""


class GroupAbortedError(ReconciliationError):
    """Raised when a plan/order group cannot be validated."""

    reason = "group aborted"

    def __init__(self, *, plan_id: str, order_id: str | None, detail: str | None = None) -> None:
        self.plan_id = plan_id
        self.order_id = order_id
        message = f"{self.reason}: plan={plan_id}, order={order_id}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class PlanNotFoundError(GroupAbortedError):
    reason = "plan listing not found"


class MissingOrderIdError(GroupAbortedError):
    reason = "plan listing has no order id"


class MissingOrderDetailError(GroupAbortedError):
    reason = "plan listing has no order detail"


class OrderMismatchError(GroupAbortedError):
    reason = "submissions reference a different order than the plan"


class OrderNotFoundError(GroupAbortedError):
    reason = "order listing not found"


class PlanUpdateError(ReconciliationError):
    """Raised when the merged order detail cannot be written to the plan."""

    def __init__(self, *, plan_id: str, order_id: str) -> None:
        self.plan_id = plan_id
        self.order_id = order_id
        super().__init__(f"Failed to update order detail: plan={plan_id}, order={order_id}")
