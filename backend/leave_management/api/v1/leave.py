from fastapi import APIRouter, Depends, status

from leave_management.core.dependencies import get_current_user, get_uow
from leave_management.models.user import User
from leave_management.repositories import UnitOfWork
from leave_management.schemas.leave import (
    LeaveApplyEnvelope,
    LeaveBalanceListEnvelope,
    LeaveBalanceResponse,
    LeaveRequestCreate,
    LeaveRequestListEnvelope,
    LeaveRequestResponse,
    LeaveTypeListEnvelope,
    LeaveTypeResponse,
)
from leave_management.services.balance_store import BalanceStore
from leave_management.services.leave_types import LeaveTypeRegistry
from leave_management.services.leave_workflow import LeaveWorkflow

router = APIRouter(prefix="/leave", tags=["leave"])


@router.post(
    "/apply", response_model=LeaveApplyEnvelope, status_code=status.HTTP_201_CREATED
)
async def apply_leave(
    data: LeaveRequestCreate,
    current_user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    """Submit a leave request for the current user."""
    leave_request = await LeaveWorkflow(uow).apply(
        user_id=current_user.id,
        leave_type_id=data.leave_type_id,
        start_date=data.start_date,
        end_date=data.end_date,
        reason=data.reason,
    )
    return LeaveApplyEnvelope(
        message="Leave request submitted successfully",
        data=LeaveRequestResponse.from_request(leave_request),
    )


@router.get("/my-requests", response_model=LeaveRequestListEnvelope)
async def my_leave_requests(
    current_user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    """List the current user's leave requests, newest first."""
    requests = await LeaveWorkflow(uow).list_for_user(current_user.id)
    return LeaveRequestListEnvelope(
        data=[LeaveRequestResponse.from_request(lr) for lr in requests]
    )


@router.get("/balances", response_model=LeaveBalanceListEnvelope)
async def my_leave_balances(
    current_user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    balances = await BalanceStore(uow.balances).list_for_user(current_user.id)
    return LeaveBalanceListEnvelope(
        data=[LeaveBalanceResponse.from_balance(b) for b in balances]
    )


@router.get("/types", response_model=LeaveTypeListEnvelope)
async def leave_types(
    current_user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
):
    types = await LeaveTypeRegistry(uow).list_all()
    return LeaveTypeListEnvelope(
        data=[LeaveTypeResponse.model_validate(lt) for lt in types]
    )
