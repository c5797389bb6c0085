"""Admin endpoints: user roles and leave type policies.

Every route here requires the ADMIN role.
"""

from fastapi import APIRouter, Depends, Response, status

from leave_management.api.v1.schemas import MessageResponse, UpdateRoleRequest, UserListItem
from leave_management.core.dependencies import get_uow
from leave_management.core.enums import Role
from leave_management.core.security import require_role
from leave_management.repositories import UnitOfWork
from leave_management.schemas.leave import (
    LeaveTypeCreate,
    LeaveTypeResponse,
    LeaveTypeUpdate,
)
from leave_management.services.leave_types import LeaveTypeRegistry
from leave_management.services.users import UserService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_role(Role.ADMIN))],
)


# ── Users ─────────────────────────────────────────────────────────────────────


@router.get("/users", response_model=list[UserListItem])
async def list_users(uow: UnitOfWork = Depends(get_uow)):
    return await UserService(uow).list_users()


@router.put("/users/{user_id}/role", response_model=MessageResponse)
async def update_user_role(
    user_id: int,
    body: UpdateRoleRequest,
    uow: UnitOfWork = Depends(get_uow),
):
    await UserService(uow).update_role(user_id, body.role)
    return MessageResponse(message="Role updated successfully")


# ── Leave Types ───────────────────────────────────────────────────────────────


@router.get("/leave-types", response_model=list[LeaveTypeResponse])
async def list_leave_types(uow: UnitOfWork = Depends(get_uow)):
    return await LeaveTypeRegistry(uow).list_all()


@router.get("/leave-types/{leave_type_id}", response_model=LeaveTypeResponse)
async def get_leave_type(leave_type_id: int, uow: UnitOfWork = Depends(get_uow)):
    return await LeaveTypeRegistry(uow).get(leave_type_id)


@router.post(
    "/leave-types",
    response_model=LeaveTypeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_leave_type(data: LeaveTypeCreate, uow: UnitOfWork = Depends(get_uow)):
    """Create a leave type; every existing user gets a full balance of it."""
    return await LeaveTypeRegistry(uow).create(data.name, data.max_days_per_year)


@router.put("/leave-types/{leave_type_id}", response_model=LeaveTypeResponse)
async def update_leave_type(
    leave_type_id: int,
    data: LeaveTypeUpdate,
    uow: UnitOfWork = Depends(get_uow),
):
    """Change the annual quota and adjust every balance of this type."""
    return await LeaveTypeRegistry(uow).update(leave_type_id, data.max_days_per_year)


@router.delete("/leave-types/{leave_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave_type(leave_type_id: int, uow: UnitOfWork = Depends(get_uow)):
    await LeaveTypeRegistry(uow).delete(leave_type_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
