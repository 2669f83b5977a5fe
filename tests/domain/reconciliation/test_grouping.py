from __future__ import annotations

from memberorders.domain.model import DayEntry
from memberorders.domain.reconciliation import group_submissions
from tests.helpers.submissions import day_data, make_submission


def test_latest_submission_replaces_participant_entries() -> None:
    earlier = make_submission(
        "sub-1",
        participant_id="user-b",
        plan_data={
            "2024-01-01": {"user-b": {"foodId": "soup"}},
            "2024-01-02": {"user-b": {"foodId": "salad"}},
        },
        minutes=0,
    )
    later = make_submission(
        "sub-2",
        participant_id="user-b",
        plan_data=day_data("user-b", {"foodId": "rice"}, "2024-01-01"),
        minutes=5,
    )

    (group,) = group_submissions([earlier, later])

    # the whole earlier plan is dropped, including days the later one omits
    assert group.entries_by_participant == {
        "user-b": {"2024-01-01": DayEntry(participant_id="user-b", items={"foodId": "rice"})}
    }
    assert group.submission_ids == ("sub-1", "sub-2")


def test_groups_are_keyed_by_plan_and_order_pair() -> None:
    submissions = [
        make_submission("sub-1", plan_id="plan-1", order_id="order-1"),
        make_submission("sub-2", plan_id="plan-2", order_id="order-2", minutes=1),
        make_submission("sub-3", plan_id="plan-1", order_id="order-old", minutes=2),
        make_submission("sub-4", plan_id="plan-1", order_id="order-1", minutes=3),
    ]

    groups = group_submissions(submissions)

    assert [group.key for group in groups] == [
        ("plan-1", "order-1"),
        ("plan-2", "order-2"),
        ("plan-1", "order-old"),
    ]
    assert groups[0].submission_ids == ("sub-1", "sub-4")


def test_participants_are_kept_apart_within_a_group() -> None:
    submissions = [
        make_submission(
            "sub-1",
            participant_id="user-a",
            plan_data=day_data("user-a", {"foodId": "soup"}, "2024-01-01"),
        ),
        make_submission(
            "sub-2",
            participant_id="user-b",
            plan_data=day_data("user-b", {"foodId": "rice"}, "2024-01-01"),
            minutes=1,
        ),
    ]

    (group,) = group_submissions(submissions)

    assert set(group.entries_by_participant) == {"user-a", "user-b"}


def test_no_submissions_means_no_groups() -> None:
    assert group_submissions([]) == ()
