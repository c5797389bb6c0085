from datetime import date, datetime
from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from leave_management.core.enums import LeaveStatus
from leave_management.models.leave_request import LeaveRequest


class LeaveRequestRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, leave_id: int) -> Optional[LeaveRequest]:
        result = await self.db.execute(
            select(LeaveRequest)
            .where(LeaveRequest.id == leave_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add(self, leave_request: LeaveRequest) -> LeaveRequest:
        self.db.add(leave_request)
        await self.db.flush()
        await self.db.refresh(leave_request, attribute_names=["user", "leave_type"])
        return leave_request

    async def has_overlap(self, user_id: int, start_date: date, end_date: date) -> bool:
        """True if the user has a non-rejected request intersecting [start, end].

        Bounds are inclusive, so a request ending on the new start date counts.
        """
        result = await self.db.execute(
            select(LeaveRequest.id)
            .where(
                LeaveRequest.user_id == user_id,
                LeaveRequest.status != LeaveStatus.REJECTED,
                LeaveRequest.start_date <= end_date,
                LeaveRequest.end_date >= start_date,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_for_user(
        self, user_id: int, limit: Optional[int] = None
    ) -> list[LeaveRequest]:
        query = (
            select(LeaveRequest)
            .where(LeaveRequest.user_id == user_id)
            .order_by(LeaveRequest.applied_at.desc(), LeaveRequest.id.desc())
            .execution_options(populate_existing=True)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_pending(self) -> list[LeaveRequest]:
        result = await self.db.execute(
            select(LeaveRequest)
            .where(LeaveRequest.status == LeaveStatus.PENDING)
            .order_by(LeaveRequest.applied_at, LeaveRequest.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_by_status(
        self, statuses: Sequence[LeaveStatus], limit: Optional[int] = None
    ) -> list[LeaveRequest]:
        query = (
            select(LeaveRequest)
            .where(LeaveRequest.status.in_(list(statuses)))
            .order_by(LeaveRequest.applied_at.desc(), LeaveRequest.id.desc())
            .execution_options(populate_existing=True)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        applied_from: Optional[datetime] = None,
        applied_before: Optional[datetime] = None,
    ) -> int:
        """Count requests, optionally within a half-open applied_at window."""
        query = select(func.count(LeaveRequest.id))
        if user_id is not None:
            query = query.where(LeaveRequest.user_id == user_id)
        if status is not None:
            query = query.where(LeaveRequest.status == status)
        if applied_from is not None:
            query = query.where(LeaveRequest.applied_at >= applied_from)
        if applied_before is not None:
            query = query.where(LeaveRequest.applied_at < applied_before)
        return (await self.db.execute(query)).scalar() or 0
