"""Organisation-wide key/value settings."""

import logging
from typing import Iterable

from leave_management.core.exceptions import ValidationError
from leave_management.models.system_setting import SystemSetting
from leave_management.repositories import UnitOfWork

logger = logging.getLogger(__name__)


class SystemSettingsService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_all(self) -> list[SystemSetting]:
        return await self.uow.settings.list_all()

    async def upsert(self, entries: Iterable[tuple[str, str]]) -> list[SystemSetting]:
        """Create or update each (key, value) pair, then return every setting.

        Nothing is written if any entry has a blank key or value.
        """
        entries = list(entries)
        if not entries:
            raise ValidationError("At least one setting is required")
        for key, value in entries:
            if not key or not key.strip():
                raise ValidationError("Setting key cannot be empty")
            if not value or not value.strip():
                raise ValidationError(f"Value for setting '{key}' cannot be empty")

        async with self.uow.transaction():
            for key, value in entries:
                key, value = key.strip(), value.strip()
                existing = await self.uow.settings.get_by_key(key)
                if existing is not None:
                    existing.value = value
                else:
                    await self.uow.settings.add(SystemSetting(key=key, value=value))

        logger.info("Updated %d system setting(s)", len(entries))
        return await self.list_all()
