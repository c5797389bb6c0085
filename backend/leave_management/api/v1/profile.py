from fastapi import APIRouter, Depends

from leave_management.api.v1.schemas import (
    ChangePasswordRequest,
    PasswordChangeResponse,
    ProfileResponse,
)
from leave_management.core.dependencies import get_current_user, get_uow
from leave_management.models.user import User
from leave_management.repositories import UnitOfWork
from leave_management.services.users import UserService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Return the current authenticated user's profile."""
    return current_user


@router.put("/password", response_model=PasswordChangeResponse)
async def change_password(
    body: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    await UserService(uow).change_password(
        current_user.id,
        body.current_password,
        body.new_password,
        body.confirm_new_password,
    )
    return PasswordChangeResponse(success=True, message="Password changed successfully")
