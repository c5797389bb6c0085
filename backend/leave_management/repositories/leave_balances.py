from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leave_management.models.leave_balance import LeaveBalance
from leave_management.models.leave_type import LeaveType


class LeaveBalanceRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(
        self, user_id: int, leave_type_id: int, *, for_update: bool = False
    ) -> Optional[LeaveBalance]:
        query = select(LeaveBalance).where(
            LeaveBalance.user_id == user_id,
            LeaveBalance.leave_type_id == leave_type_id,
        )
        if for_update:
            # Row lock so concurrent applies on the same balance serialise.
            query = query.with_for_update(of=LeaveBalance).execution_options(
                populate_existing=True
            )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> list[LeaveBalance]:
        result = await self.db.execute(
            select(LeaveBalance)
            .join(LeaveType, LeaveBalance.leave_type_id == LeaveType.id)
            .where(LeaveBalance.user_id == user_id)
            .order_by(LeaveType.name)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_for_leave_type(self, leave_type_id: int) -> list[LeaveBalance]:
        result = await self.db.execute(
            select(LeaveBalance).where(LeaveBalance.leave_type_id == leave_type_id)
        )
        return list(result.scalars().all())

    async def add_many(self, balances: Iterable[LeaveBalance]) -> None:
        self.db.add_all(list(balances))
        await self.db.flush()
