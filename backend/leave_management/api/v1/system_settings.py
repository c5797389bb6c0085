"""Organisation-wide settings (admin only)."""

from fastapi import APIRouter, Depends

from leave_management.api.v1.schemas import SystemSettingItem, UpdateSystemSettingsRequest
from leave_management.core.dependencies import get_uow
from leave_management.core.enums import Role
from leave_management.core.security import require_role
from leave_management.repositories import UnitOfWork
from leave_management.services.system_settings import SystemSettingsService

router = APIRouter(
    prefix="/admin/system-settings",
    tags=["system-settings"],
    dependencies=[Depends(require_role(Role.ADMIN))],
)


@router.get("", response_model=list[SystemSettingItem])
async def list_settings(uow: UnitOfWork = Depends(get_uow)):
    return await SystemSettingsService(uow).list_all()


@router.put("", response_model=list[SystemSettingItem])
async def update_settings(
    body: UpdateSystemSettingsRequest,
    uow: UnitOfWork = Depends(get_uow),
):
    """Create or update the given keys. Body: ``{"settings": [{key, value}, ...]}``."""
    return await SystemSettingsService(uow).upsert(
        (item.key, item.value) for item in body.settings
    )
