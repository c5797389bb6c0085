from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from leave_management.models.leave_balance import LeaveBalance
from leave_management.models.leave_request import LeaveRequest
from leave_management.models.leave_type import LeaveType


class LeaveTypeRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, leave_type_id: int) -> Optional[LeaveType]:
        return await self.db.get(LeaveType, leave_type_id)

    async def get_by_name(self, name: str) -> Optional[LeaveType]:
        """Case-insensitive lookup, ignoring surrounding whitespace."""
        result = await self.db.execute(
            select(LeaveType).where(
                func.lower(LeaveType.name) == name.strip().lower()
            )
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[LeaveType]:
        result = await self.db.execute(select(LeaveType).order_by(LeaveType.name))
        return list(result.scalars().all())

    async def count(self) -> int:
        return (
            await self.db.execute(select(func.count(LeaveType.id)))
        ).scalar() or 0

    async def add(self, leave_type: LeaveType) -> LeaveType:
        self.db.add(leave_type)
        await self.db.flush()
        return leave_type

    async def has_requests(self, leave_type_id: int) -> bool:
        result = await self.db.execute(
            select(LeaveRequest.id)
            .where(LeaveRequest.leave_type_id == leave_type_id)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def delete(self, leave_type: LeaveType) -> None:
        """Delete a leave type together with every balance of that type."""
        await self.db.execute(
            delete(LeaveBalance).where(LeaveBalance.leave_type_id == leave_type.id)
        )
        await self.db.delete(leave_type)
        await self.db.flush()
