"""Pydantic schemas for the role-specific dashboard endpoints."""

from datetime import date, datetime

from pydantic import BaseModel

from leave_management.core.enums import LeaveStatus


# ── Employee Dashboard ───────────────────────────────────────────────────────


class LeaveBalanceSummary(BaseModel):
    leave_type_name: str
    remaining_days: int
    max_days_per_year: int


class RecentLeave(BaseModel):
    id: int
    leave_type_name: str
    start_date: date
    end_date: date
    total_days: int
    status: LeaveStatus
    applied_at: datetime


class EmployeeDashboard(BaseModel):
    pending_leaves_count: int
    approved_leaves_count: int
    remaining_leave_summary: list[LeaveBalanceSummary]
    recent_leaves: list[RecentLeave]


# ── Manager Dashboard ────────────────────────────────────────────────────────


class RecentDecision(BaseModel):
    leave_id: int
    employee_name: str
    leave_type_name: str
    start_date: date
    end_date: date
    total_days: int
    status: LeaveStatus
    decided_at: datetime


class ManagerDashboard(BaseModel):
    pending_approvals_count: int
    approved_today_count: int
    recent_decisions: list[RecentDecision]


# ── Admin Dashboard ──────────────────────────────────────────────────────────


class UsersByRole(BaseModel):
    employees: int
    managers: int
    admins: int


class AdminDashboard(BaseModel):
    total_users: int
    users_by_role: UsersByRole
    leave_types_count: int
    total_leave_requests: int
