"""Manager endpoints for the approval workflow."""

from fastapi import APIRouter, Depends

from leave_management.core.dependencies import get_uow
from leave_management.core.enums import Role
from leave_management.core.security import require_role
from leave_management.models.user import User
from leave_management.repositories import UnitOfWork
from leave_management.schemas.leave import (
    ApprovalEnvelope,
    ApprovalResponse,
    PendingLeaveListEnvelope,
    PendingLeaveResponse,
)
from leave_management.services.leave_workflow import LeaveWorkflow

router = APIRouter(prefix="/manager", tags=["manager"])


@router.get("/leaves/pending", response_model=PendingLeaveListEnvelope)
async def pending_leaves(
    current_user: User = Depends(require_role(Role.MANAGER)),
    uow: UnitOfWork = Depends(get_uow),
):
    """All pending requests, oldest application first."""
    pending = await LeaveWorkflow(uow).list_pending()
    return PendingLeaveListEnvelope(
        data=[PendingLeaveResponse.from_request(lr) for lr in pending]
    )


@router.put("/leaves/{leave_id}/approve", response_model=ApprovalEnvelope)
async def approve_leave(
    leave_id: int,
    current_user: User = Depends(require_role(Role.MANAGER)),
    uow: UnitOfWork = Depends(get_uow),
):
    result = await LeaveWorkflow(uow).approve(leave_id, reviewer_id=current_user.id)
    return ApprovalEnvelope(
        message=result.message, data=ApprovalResponse.model_validate(result)
    )


@router.put("/leaves/{leave_id}/reject", response_model=ApprovalEnvelope)
async def reject_leave(
    leave_id: int,
    current_user: User = Depends(require_role(Role.MANAGER)),
    uow: UnitOfWork = Depends(get_uow),
):
    """Reject a pending request and restore the employee's balance."""
    result = await LeaveWorkflow(uow).reject(leave_id, reviewer_id=current_user.id)
    return ApprovalEnvelope(
        message=result.message, data=ApprovalResponse.model_validate(result)
    )
