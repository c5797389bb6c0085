from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from leave_management.core.enums import Role
from leave_management.models.user import User


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def list_ids(self) -> list[int]:
        result = await self.db.execute(select(User.id))
        return list(result.scalars().all())

    async def add(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        return user

    async def count(self) -> int:
        return (await self.db.execute(select(func.count(User.id)))).scalar() or 0

    async def count_by_role(self) -> dict[Role, int]:
        result = await self.db.execute(
            select(User.role, func.count(User.id)).group_by(User.role)
        )
        counts = {role: 0 for role in Role}
        for role, total in result.all():
            counts[Role(role)] = total
        return counts
