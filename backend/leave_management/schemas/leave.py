from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from leave_management.core.enums import LeaveStatus


def _to_calendar_date(value: Any) -> Any:
    """Accept full datetimes (``2026-01-05T09:30:00Z``) and keep only the date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


# ── Leave Types ──────────────────────────────────────────────────────────────


class LeaveTypeResponse(BaseModel):
    id: int
    name: str
    max_days_per_year: int

    model_config = {"from_attributes": True}


class LeaveTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    max_days_per_year: int = Field(..., ge=1, le=365)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class LeaveTypeUpdate(BaseModel):
    max_days_per_year: int = Field(..., ge=1, le=365)


# ── Balances ─────────────────────────────────────────────────────────────────


class LeaveBalanceResponse(BaseModel):
    leave_type_id: int
    leave_type_name: str
    remaining_days: int
    max_days_per_year: int

    @classmethod
    def from_balance(cls, balance) -> "LeaveBalanceResponse":
        return cls(
            leave_type_id=balance.leave_type_id,
            leave_type_name=balance.leave_type.name,
            remaining_days=balance.remaining_days,
            max_days_per_year=balance.leave_type.max_days_per_year,
        )


# ── Leave Requests ───────────────────────────────────────────────────────────


class LeaveRequestCreate(BaseModel):
    leave_type_id: int
    start_date: date
    end_date: date
    reason: Optional[str] = Field(None, max_length=500)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalise_dates(cls, value: Any) -> Any:
        return _to_calendar_date(value)


class LeaveRequestResponse(BaseModel):
    id: int
    user_id: int
    user_name: str
    leave_type_id: int
    leave_type_name: str
    start_date: date
    end_date: date
    total_days: int
    reason: Optional[str] = None
    status: LeaveStatus
    applied_at: datetime

    @classmethod
    def from_request(cls, leave_request) -> "LeaveRequestResponse":
        return cls(
            id=leave_request.id,
            user_id=leave_request.user_id,
            user_name=leave_request.user.name,
            leave_type_id=leave_request.leave_type_id,
            leave_type_name=leave_request.leave_type.name,
            start_date=leave_request.start_date,
            end_date=leave_request.end_date,
            total_days=leave_request.total_days,
            reason=leave_request.reason,
            status=leave_request.status,
            applied_at=leave_request.applied_at,
        )


class PendingLeaveResponse(BaseModel):
    id: int
    user_id: int
    employee_name: str
    employee_email: str
    leave_type_id: int
    leave_type_name: str
    start_date: date
    end_date: date
    total_days: int
    reason: Optional[str] = None
    applied_at: datetime

    @classmethod
    def from_request(cls, leave_request) -> "PendingLeaveResponse":
        return cls(
            id=leave_request.id,
            user_id=leave_request.user_id,
            employee_name=leave_request.user.name,
            employee_email=leave_request.user.email,
            leave_type_id=leave_request.leave_type_id,
            leave_type_name=leave_request.leave_type.name,
            start_date=leave_request.start_date,
            end_date=leave_request.end_date,
            total_days=leave_request.total_days,
            reason=leave_request.reason,
            applied_at=leave_request.applied_at,
        )


class ApprovalResponse(BaseModel):
    leave_id: int
    status: LeaveStatus
    message: str

    model_config = {"from_attributes": True}


# ── Envelopes ────────────────────────────────────────────────────────────────


class LeaveApplyEnvelope(BaseModel):
    message: str
    data: LeaveRequestResponse


class LeaveRequestListEnvelope(BaseModel):
    data: list[LeaveRequestResponse]


class LeaveBalanceListEnvelope(BaseModel):
    data: list[LeaveBalanceResponse]


class LeaveTypeListEnvelope(BaseModel):
    data: list[LeaveTypeResponse]


class PendingLeaveListEnvelope(BaseModel):
    data: list[PendingLeaveResponse]


class ApprovalEnvelope(BaseModel):
    message: str
    data: ApprovalResponse
