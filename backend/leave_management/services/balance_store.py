"""Per-(user, leave type) remaining-day counters.

The mutating methods only change counters on already-loaded balance rows; the
caller's transaction decides whether those changes are committed.
"""

import logging
from typing import Iterable, Optional

from leave_management.core.exceptions import InsufficientBalance
from leave_management.models.leave_balance import LeaveBalance
from leave_management.repositories import LeaveBalanceRepository

logger = logging.getLogger(__name__)


class BalanceStore:
    def __init__(self, repository: LeaveBalanceRepository):
        self.repository = repository

    async def get(
        self, user_id: int, leave_type_id: int, *, for_update: bool = False
    ) -> Optional[LeaveBalance]:
        return await self.repository.get(user_id, leave_type_id, for_update=for_update)

    async def list_for_user(self, user_id: int) -> list[LeaveBalance]:
        return await self.repository.list_for_user(user_id)

    async def create_for_users(
        self, user_ids: Iterable[int], leave_type_id: int, days: int
    ) -> None:
        await self.repository.add_many(
            LeaveBalance(user_id=uid, leave_type_id=leave_type_id, remaining_days=days)
            for uid in user_ids
        )

    async def create_for_leave_types(self, user_id: int, leave_types) -> None:
        """Onboarding: one full balance per leave type for a new user."""
        await self.repository.add_many(
            LeaveBalance(
                user_id=user_id,
                leave_type_id=lt.id,
                remaining_days=lt.max_days_per_year,
            )
            for lt in leave_types
        )

    @staticmethod
    def ensure_sufficient(balance: LeaveBalance, days: int) -> None:
        if balance.remaining_days < days:
            raise InsufficientBalance(balance.remaining_days, days)

    @classmethod
    def debit(cls, balance: LeaveBalance, days: int) -> None:
        cls.ensure_sufficient(balance, days)
        balance.remaining_days -= days

    @staticmethod
    def credit(balance: LeaveBalance, days: int) -> None:
        balance.remaining_days += days

    @staticmethod
    def adjust_for_quota_change(
        balances: Iterable[LeaveBalance], old_max: int, new_max: int
    ) -> None:
        """Raise every balance by the quota increase, or cap it at a lowered quota."""
        if new_max == old_max:
            return
        if new_max > old_max:
            difference = new_max - old_max
            for balance in balances:
                balance.remaining_days += difference
        else:
            for balance in balances:
                if balance.remaining_days > new_max:
                    balance.remaining_days = new_max
        logger.info("Adjusted balances for quota change %d -> %d", old_max, new_max)
