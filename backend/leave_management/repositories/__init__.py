"""Repositories and the unit of work that groups them.

Services never touch the session directly; they receive a ``UnitOfWork`` and
run every mutating operation inside ``uow.transaction()``.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from leave_management.repositories.leave_balances import LeaveBalanceRepository
from leave_management.repositories.leave_requests import LeaveRequestRepository
from leave_management.repositories.leave_types import LeaveTypeRepository
from leave_management.repositories.system_settings import SystemSettingRepository
from leave_management.repositories.users import UserRepository


class UnitOfWork:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.leave_types = LeaveTypeRepository(db)
        self.balances = LeaveBalanceRepository(db)
        self.leave_requests = LeaveRequestRepository(db)
        self.settings = SystemSettingRepository(db)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["UnitOfWork"]:
        """Commit on success, roll back every write on any exception."""
        try:
            yield self
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise


__all__ = [
    "UnitOfWork",
    "UserRepository",
    "LeaveTypeRepository",
    "LeaveBalanceRepository",
    "LeaveRequestRepository",
    "SystemSettingRepository",
]
