"""Apply / approve / reject against a real (SQLite) database."""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy import delete, func, select

from leave_management.core.enums import LeaveStatus, Role
from leave_management.core.exceptions import (
    InsufficientBalance,
    InvalidDateRange,
    InvalidTransition,
    NoBalanceRecord,
    NotFoundError,
    OverlappingRequest,
    UnknownLeaveType,
)
from leave_management.models import LeaveBalance, LeaveRequest
from leave_management.services.leave_workflow import LeaveWorkflow, count_days

from conftest import make_balance, make_leave_type, make_user, remaining_days


@pytest.fixture
async def employee(db):
    return await make_user(db)


@pytest.fixture
async def manager(db):
    return await make_user(
        db, name="Mia Manager", email="mia@acme.com", role=Role.MANAGER
    )


@pytest.fixture
async def casual(db, employee):
    type_id = await make_leave_type(db, name="Casual Leave", max_days=12)
    await make_balance(db, employee, type_id, 12)
    return type_id


@pytest.fixture
def workflow(uow):
    return LeaveWorkflow(uow)


async def _request_count(db) -> int:
    return await db.scalar(select(func.count(LeaveRequest.id)))


def test_count_days_is_inclusive():
    assert count_days(date(2026, 1, 5), date(2026, 1, 5)) == 1
    assert count_days(date(2026, 1, 5), date(2026, 1, 7)) == 3
    assert count_days(date(2026, 2, 27), date(2026, 3, 2)) == 4


# ── Apply ─────────────────────────────────────────────────────────────────────


async def test_apply_creates_pending_request_and_debits_balance(
    db, workflow, employee, casual
):
    leave_request = await workflow.apply(
        employee, casual, date(2026, 1, 5), date(2026, 1, 7), "Family trip"
    )

    assert leave_request.status == LeaveStatus.PENDING
    assert leave_request.total_days == 3
    assert leave_request.reason == "Family trip"
    assert leave_request.leave_type.name == "Casual Leave"
    assert leave_request.reviewed_by is None
    assert await remaining_days(db, employee, casual) == 9


async def test_apply_single_day(db, workflow, employee, casual):
    leave_request = await workflow.apply(
        employee, casual, date(2026, 1, 5), date(2026, 1, 5)
    )

    assert leave_request.total_days == 1
    assert await remaining_days(db, employee, casual) == 11


async def test_apply_drops_time_of_day(db, workflow, employee, casual):
    leave_request = await workflow.apply(
        employee,
        casual,
        datetime(2026, 1, 5, 18, 30, tzinfo=timezone.utc),
        datetime(2026, 1, 6, 8, 0, tzinfo=timezone.utc),
    )

    assert leave_request.start_date == date(2026, 1, 5)
    assert leave_request.end_date == date(2026, 1, 6)
    assert leave_request.total_days == 2


async def test_apply_can_use_the_whole_balance(db, workflow, employee, casual):
    await workflow.apply(employee, casual, date(2026, 3, 1), date(2026, 3, 12))
    assert await remaining_days(db, employee, casual) == 0


async def test_apply_rejects_reversed_dates(db, workflow, employee, casual):
    with pytest.raises(InvalidDateRange):
        await workflow.apply(employee, casual, date(2026, 1, 7), date(2026, 1, 5))

    assert await _request_count(db) == 0
    assert await remaining_days(db, employee, casual) == 12


async def test_apply_rejects_unknown_leave_type(db, workflow, employee, casual):
    with pytest.raises(UnknownLeaveType, match="Invalid leave type"):
        await workflow.apply(employee, 999, date(2026, 1, 5), date(2026, 1, 5))

    assert await _request_count(db) == 0


async def test_apply_without_balance_row(db, workflow, employee):
    sick = await make_leave_type(db, name="Sick Leave", max_days=10)

    with pytest.raises(NoBalanceRecord):
        await workflow.apply(employee, sick, date(2026, 1, 5), date(2026, 1, 5))

    assert await _request_count(db) == 0


async def test_apply_insufficient_balance_reports_available_and_requested(
    db, workflow, employee, casual
):
    with pytest.raises(InsufficientBalance) as exc_info:
        await workflow.apply(employee, casual, date(2026, 1, 1), date(2026, 1, 13))

    assert exc_info.value.message == (
        "Insufficient leave balance. Available: 12 days, Requested: 13 days"
    )
    assert await _request_count(db) == 0
    assert await remaining_days(db, employee, casual) == 12


async def test_insufficient_balance_is_checked_before_overlap(
    db, workflow, employee, casual
):
    await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 14))

    with pytest.raises(InsufficientBalance):
        await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))


class TestOverlap:
    async def test_touching_end_date_overlaps(self, db, workflow, employee, casual):
        await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))

        with pytest.raises(OverlappingRequest):
            await workflow.apply(employee, casual, date(2026, 1, 7), date(2026, 1, 9))

        assert await _request_count(db) == 1
        assert await remaining_days(db, employee, casual) == 9

    async def test_touching_start_date_overlaps(self, db, workflow, employee, casual):
        await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))

        with pytest.raises(OverlappingRequest):
            await workflow.apply(employee, casual, date(2026, 1, 3), date(2026, 1, 5))

    async def test_containing_span_overlaps(self, db, workflow, employee, casual):
        await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))

        with pytest.raises(OverlappingRequest):
            await workflow.apply(employee, casual, date(2026, 1, 3), date(2026, 1, 10))

        assert await _request_count(db) == 1
        assert await remaining_days(db, employee, casual) == 9

    async def test_adjacent_range_is_allowed(self, db, workflow, employee, casual):
        await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))
        await workflow.apply(employee, casual, date(2026, 1, 8), date(2026, 1, 10))

        assert await _request_count(db) == 2
        assert await remaining_days(db, employee, casual) == 6

    async def test_overlap_spans_leave_types(self, db, workflow, employee, casual):
        sick = await make_leave_type(db, name="Sick Leave", max_days=10)
        await make_balance(db, employee, sick, 10)
        await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))

        with pytest.raises(OverlappingRequest):
            await workflow.apply(employee, sick, date(2026, 1, 6), date(2026, 1, 6))

    async def test_approved_request_still_blocks(
        self, db, workflow, employee, manager, casual
    ):
        first = await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))
        await workflow.approve(first.id, manager)

        with pytest.raises(OverlappingRequest):
            await workflow.apply(employee, casual, date(2026, 1, 6), date(2026, 1, 6))

    async def test_rejected_request_does_not_block(
        self, db, workflow, employee, manager, casual
    ):
        first = await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))
        await workflow.reject(first.id, manager)

        second = await workflow.apply(
            employee, casual, date(2026, 1, 5), date(2026, 1, 7)
        )
        assert second.status == LeaveStatus.PENDING

    async def test_other_users_do_not_block(self, db, workflow, employee, casual):
        bob = await make_user(db, name="Bob", email="bob@acme.com")
        await make_balance(db, bob, casual, 12)
        await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))

        leave_request = await workflow.apply(
            bob, casual, date(2026, 1, 5), date(2026, 1, 7)
        )
        assert leave_request.user_id == bob


# ── Approve / reject ──────────────────────────────────────────────────────────


async def test_casual_leave_end_to_end(db, workflow, employee, manager, casual):
    first = await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 7))
    assert await remaining_days(db, employee, casual) == 9

    result = await workflow.approve(first.id, manager)
    assert result.status == LeaveStatus.APPROVED
    assert result.message == "Leave request for Alice Employee has been approved"
    assert await remaining_days(db, employee, casual) == 9

    second = await workflow.apply(employee, casual, date(2026, 2, 2), date(2026, 2, 3))
    assert await remaining_days(db, employee, casual) == 7

    result = await workflow.reject(second.id, manager)
    assert result.status == LeaveStatus.REJECTED
    assert result.message == (
        "Leave request for Alice Employee has been rejected and balance restored"
    )
    assert await remaining_days(db, employee, casual) == 9


async def test_rejected_dates_can_be_applied_for_again(
    db, workflow, employee, manager, casual
):
    first = await workflow.apply(employee, casual, date(2026, 1, 1), date(2026, 1, 5))
    assert first.total_days == 5
    assert await remaining_days(db, employee, casual) == 7

    await workflow.reject(first.id, manager)
    assert await remaining_days(db, employee, casual) == 12

    second = await workflow.apply(
        employee, casual, date(2026, 1, 1), date(2026, 1, 5)
    )
    assert second.status == LeaveStatus.PENDING
    assert await remaining_days(db, employee, casual) == 7


async def test_approve_records_reviewer(db, uow, workflow, employee, manager, casual):
    leave_request = await workflow.apply(
        employee, casual, date(2026, 1, 5), date(2026, 1, 5)
    )
    await workflow.approve(leave_request.id, manager)

    stored = await uow.leave_requests.get(leave_request.id)
    assert stored.status == LeaveStatus.APPROVED
    assert stored.reviewed_by == manager
    assert stored.reviewed_at is not None


async def test_approve_twice_is_an_invalid_transition(
    db, workflow, employee, manager, casual
):
    leave_request = await workflow.apply(
        employee, casual, date(2026, 1, 5), date(2026, 1, 5)
    )
    await workflow.approve(leave_request.id, manager)

    with pytest.raises(
        InvalidTransition, match="Cannot approve leave with status: APPROVED"
    ):
        await workflow.approve(leave_request.id, manager)


async def test_reject_after_approve_keeps_balance(
    db, workflow, employee, manager, casual
):
    leave_request = await workflow.apply(
        employee, casual, date(2026, 1, 5), date(2026, 1, 6)
    )
    await workflow.approve(leave_request.id, manager)

    with pytest.raises(
        InvalidTransition, match="Cannot reject leave with status: APPROVED"
    ):
        await workflow.reject(leave_request.id, manager)

    assert await remaining_days(db, employee, casual) == 10


async def test_reject_twice_restores_only_once(
    db, uow, workflow, employee, manager, casual
):
    leave_request = await workflow.apply(
        employee, casual, date(2026, 1, 5), date(2026, 1, 6)
    )
    leave_id = leave_request.id
    await workflow.reject(leave_id, manager)

    with pytest.raises(InvalidTransition):
        await workflow.reject(leave_id, manager)
    with pytest.raises(InvalidTransition):
        await workflow.approve(leave_id, manager)

    assert await remaining_days(db, employee, casual) == 12
    stored = await uow.leave_requests.get(leave_id)
    assert stored.status == LeaveStatus.REJECTED


async def test_unknown_request_is_not_found(workflow, manager):
    with pytest.raises(NotFoundError):
        await workflow.approve(404, manager)
    with pytest.raises(NotFoundError):
        await workflow.reject(404, manager)


async def test_reject_without_balance_row_still_rejects(
    db, uow, workflow, employee, manager, casual
):
    leave_request = await workflow.apply(
        employee, casual, date(2026, 1, 5), date(2026, 1, 6)
    )
    await db.execute(delete(LeaveBalance).where(LeaveBalance.user_id == employee))
    await db.commit()

    result = await workflow.reject(leave_request.id, manager)

    assert result.status == LeaveStatus.REJECTED
    assert await remaining_days(db, employee, casual) is None


# ── Listing ───────────────────────────────────────────────────────────────────


async def test_list_for_user_is_newest_first(db, workflow, employee, casual):
    first = await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 5))
    second = await workflow.apply(employee, casual, date(2026, 2, 5), date(2026, 2, 5))

    requests = await workflow.list_for_user(employee)

    assert [lr.id for lr in requests] == [second.id, first.id]


async def test_list_pending_is_oldest_first_and_skips_decided(
    db, workflow, employee, manager, casual
):
    first = await workflow.apply(employee, casual, date(2026, 1, 5), date(2026, 1, 5))
    second = await workflow.apply(employee, casual, date(2026, 2, 5), date(2026, 2, 5))
    third = await workflow.apply(employee, casual, date(2026, 3, 5), date(2026, 3, 5))
    await workflow.approve(second.id, manager)

    pending = await workflow.list_pending()

    assert [lr.id for lr in pending] == [first.id, third.id]
    assert all(lr.user.name == "Alice Employee" for lr in pending)
