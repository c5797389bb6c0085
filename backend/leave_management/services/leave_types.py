"""Leave type registry: CRUD over leave types with balance bookkeeping."""

import logging

from leave_management.core.exceptions import (
    DuplicateName,
    HasDependentRequests,
    NotFoundError,
)
from leave_management.models.leave_type import LeaveType
from leave_management.repositories import UnitOfWork
from leave_management.services.balance_store import BalanceStore

logger = logging.getLogger(__name__)

DEFAULT_LEAVE_TYPES: list[tuple[str, int]] = [
    ("Casual Leave", 12),
    ("Sick Leave", 10),
    ("Earned Leave", 15),
]


class LeaveTypeRegistry:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.balances = BalanceStore(uow.balances)

    async def list_all(self) -> list[LeaveType]:
        return await self.uow.leave_types.list_all()

    async def get(self, leave_type_id: int) -> LeaveType:
        leave_type = await self.uow.leave_types.get(leave_type_id)
        if leave_type is None:
            raise NotFoundError("Leave type not found")
        return leave_type

    async def create(self, name: str, max_days_per_year: int) -> LeaveType:
        """Create a leave type and give every existing user a full balance of it."""
        async with self.uow.transaction():
            if await self.uow.leave_types.get_by_name(name) is not None:
                raise DuplicateName(f"Leave type with name '{name}' already exists")

            leave_type = await self.uow.leave_types.add(
                LeaveType(name=name.strip(), max_days_per_year=max_days_per_year)
            )
            user_ids = await self.uow.users.list_ids()
            await self.balances.create_for_users(
                user_ids, leave_type.id, leave_type.max_days_per_year
            )

        logger.info(
            "Created leave type %r (%d days) with %d balances",
            leave_type.name,
            leave_type.max_days_per_year,
            len(user_ids),
        )
        return leave_type

    async def update(self, leave_type_id: int, max_days_per_year: int) -> LeaveType:
        async with self.uow.transaction():
            leave_type = await self.get(leave_type_id)
            old_max = leave_type.max_days_per_year

            if old_max != max_days_per_year:
                balances = await self.uow.balances.list_for_leave_type(leave_type_id)
                self.balances.adjust_for_quota_change(balances, old_max, max_days_per_year)

            leave_type.max_days_per_year = max_days_per_year

        logger.info(
            "Updated leave type %d quota %d -> %d",
            leave_type_id,
            old_max,
            max_days_per_year,
        )
        return leave_type

    async def delete(self, leave_type_id: int) -> bool:
        """Delete a leave type unless any request, of any status, references it."""
        async with self.uow.transaction():
            leave_type = await self.get(leave_type_id)
            if await self.uow.leave_types.has_requests(leave_type_id):
                raise HasDependentRequests(
                    "Cannot delete leave type with existing leave requests. "
                    "Consider deactivating instead."
                )
            await self.uow.leave_types.delete(leave_type)

        logger.info("Deleted leave type %d", leave_type_id)
        return True

    async def initialize_defaults(self) -> int:
        """Seed the default leave types when none exist. Returns how many were created."""
        async with self.uow.transaction():
            if await self.uow.leave_types.count() > 0:
                return 0

            user_ids = await self.uow.users.list_ids()
            for name, days in DEFAULT_LEAVE_TYPES:
                leave_type = await self.uow.leave_types.add(
                    LeaveType(name=name, max_days_per_year=days)
                )
                await self.balances.create_for_users(user_ids, leave_type.id, days)

        logger.info("Seeded %d default leave types", len(DEFAULT_LEAVE_TYPES))
        return len(DEFAULT_LEAVE_TYPES)
