"""Leave request workflow: apply, approve, reject.

Status moves PENDING -> APPROVED or PENDING -> REJECTED and never again.
A request's days are debited from the balance once, when it is applied for;
rejecting it is the only way they come back.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from leave_management.core.enums import LeaveStatus
from leave_management.core.exceptions import (
    InvalidDateRange,
    InvalidTransition,
    NoBalanceRecord,
    NotFoundError,
    OverlappingRequest,
    UnknownLeaveType,
)
from leave_management.models.leave_request import LeaveRequest
from leave_management.repositories import UnitOfWork
from leave_management.services.balance_store import BalanceStore

logger = logging.getLogger(__name__)


@dataclass
class ApprovalResult:
    leave_id: int
    status: LeaveStatus
    message: str


def as_date(value: date | datetime) -> date:
    """Drop the time of day, keeping the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def count_days(start_date: date | datetime, end_date: date | datetime) -> int:
    """Inclusive number of calendar days between two dates."""
    return (as_date(end_date) - as_date(start_date)).days + 1


class LeaveWorkflow:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.balances = BalanceStore(uow.balances)

    async def apply(
        self,
        user_id: int,
        leave_type_id: int,
        start_date: date | datetime,
        end_date: date | datetime,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        start, end = as_date(start_date), as_date(end_date)

        async with self.uow.transaction():
            if start > end:
                raise InvalidDateRange("Start date must be before or equal to end date")

            leave_type = await self.uow.leave_types.get(leave_type_id)
            if leave_type is None:
                raise UnknownLeaveType("Invalid leave type")

            total_days = count_days(start, end)

            balance = await self.balances.get(user_id, leave_type_id, for_update=True)
            if balance is None:
                raise NoBalanceRecord("Leave balance not found for this leave type")

            self.balances.ensure_sufficient(balance, total_days)

            if await self.uow.leave_requests.has_overlap(user_id, start, end):
                raise OverlappingRequest(
                    "You already have a leave request for overlapping dates"
                )

            leave_request = await self.uow.leave_requests.add(
                LeaveRequest(
                    user_id=user_id,
                    leave_type_id=leave_type_id,
                    start_date=start,
                    end_date=end,
                    total_days=total_days,
                    reason=reason,
                    status=LeaveStatus.PENDING,
                    applied_at=datetime.now(timezone.utc),
                )
            )
            self.balances.debit(balance, total_days)

        logger.info(
            "User %d applied for %d day(s) of %r (%s..%s), request %d",
            user_id,
            total_days,
            leave_type.name,
            start,
            end,
            leave_request.id,
        )
        return leave_request

    async def approve(
        self, leave_id: int, reviewer_id: Optional[int] = None
    ) -> ApprovalResult:
        """Approve a pending request. The balance was already debited on apply."""
        async with self.uow.transaction():
            leave_request = await self._transition(
                leave_id, LeaveStatus.APPROVED, reviewer_id
            )
            employee = leave_request.user.name

        logger.info("Leave request %d approved by %s", leave_id, reviewer_id)
        return ApprovalResult(
            leave_id=leave_request.id,
            status=LeaveStatus.APPROVED,
            message=f"Leave request for {employee} has been approved",
        )

    async def reject(
        self, leave_id: int, reviewer_id: Optional[int] = None
    ) -> ApprovalResult:
        """Reject a pending request and give its days back."""
        async with self.uow.transaction():
            leave_request = await self._transition(
                leave_id, LeaveStatus.REJECTED, reviewer_id
            )
            employee = leave_request.user.name

            balance = await self.balances.get(
                leave_request.user_id, leave_request.leave_type_id, for_update=True
            )
            if balance is not None:
                self.balances.credit(balance, leave_request.total_days)
            else:
                logger.warning(
                    "No balance to restore for rejected leave request %d", leave_id
                )

        logger.info("Leave request %d rejected by %s", leave_id, reviewer_id)
        return ApprovalResult(
            leave_id=leave_request.id,
            status=LeaveStatus.REJECTED,
            message=f"Leave request for {employee} has been rejected and balance restored",
        )

    async def list_for_user(self, user_id: int) -> list[LeaveRequest]:
        return await self.uow.leave_requests.list_for_user(user_id)

    async def list_pending(self) -> list[LeaveRequest]:
        return await self.uow.leave_requests.list_pending()

    async def _transition(
        self, leave_id: int, target: LeaveStatus, reviewer_id: Optional[int]
    ) -> LeaveRequest:
        leave_request = await self.uow.leave_requests.get(leave_id)
        if leave_request is None:
            raise NotFoundError("Leave request not found")

        current = LeaveStatus(leave_request.status)
        if not current.can_transition_to(target):
            verb = "approve" if target is LeaveStatus.APPROVED else "reject"
            raise InvalidTransition(
                f"Cannot {verb} leave with status: {current.value}"
            )

        leave_request.status = target
        leave_request.reviewed_at = datetime.now(timezone.utc)
        leave_request.reviewed_by = reviewer_id
        return leave_request
