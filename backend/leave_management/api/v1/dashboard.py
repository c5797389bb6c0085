"""Role-based dashboard summaries."""

from fastapi import APIRouter, Depends

from leave_management.core.dependencies import get_current_user, get_uow
from leave_management.core.enums import Role
from leave_management.core.security import require_role
from leave_management.models.user import User
from leave_management.repositories import UnitOfWork
from leave_management.schemas.dashboard import (
    AdminDashboard,
    EmployeeDashboard,
    ManagerDashboard,
)
from leave_management.services.dashboard import DashboardAggregator

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/employee", response_model=EmployeeDashboard)
async def employee_dashboard(
    current_user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    return await DashboardAggregator(uow).employee(current_user.id)


@router.get("/manager", response_model=ManagerDashboard)
async def manager_dashboard(
    current_user: User = Depends(require_role(Role.MANAGER)),
    uow: UnitOfWork = Depends(get_uow),
):
    return await DashboardAggregator(uow).manager()


@router.get("/admin", response_model=AdminDashboard)
async def admin_dashboard(
    current_user: User = Depends(require_role(Role.ADMIN)),
    uow: UnitOfWork = Depends(get_uow),
):
    return await DashboardAggregator(uow).admin()
