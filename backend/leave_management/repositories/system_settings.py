from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leave_management.models.system_setting import SystemSetting


class SystemSettingRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[SystemSetting]:
        result = await self.db.execute(select(SystemSetting).order_by(SystemSetting.key))
        return list(result.scalars().all())

    async def get_by_key(self, key: str) -> Optional[SystemSetting]:
        result = await self.db.execute(
            select(SystemSetting).where(SystemSetting.key == key)
        )
        return result.scalar_one_or_none()

    async def add(self, setting: SystemSetting) -> SystemSetting:
        self.db.add(setting)
        await self.db.flush()
        return setting
