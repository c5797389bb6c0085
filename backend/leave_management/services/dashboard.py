"""Read-only rollups for the employee, manager and admin dashboards."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from leave_management.core.enums import LeaveStatus, Role
from leave_management.repositories import UnitOfWork
from leave_management.schemas.dashboard import (
    AdminDashboard,
    EmployeeDashboard,
    LeaveBalanceSummary,
    ManagerDashboard,
    RecentDecision,
    RecentLeave,
    UsersByRole,
)

RECENT_LIMIT = 5


class DashboardAggregator:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def employee(self, user_id: int) -> EmployeeDashboard:
        requests = self.uow.leave_requests
        balances = await self.uow.balances.list_for_user(user_id)
        recent = await requests.list_for_user(user_id, limit=RECENT_LIMIT)

        return EmployeeDashboard(
            pending_leaves_count=await requests.count(
                user_id=user_id, status=LeaveStatus.PENDING
            ),
            approved_leaves_count=await requests.count(
                user_id=user_id, status=LeaveStatus.APPROVED
            ),
            remaining_leave_summary=[
                LeaveBalanceSummary(
                    leave_type_name=b.leave_type.name,
                    remaining_days=b.remaining_days,
                    max_days_per_year=b.leave_type.max_days_per_year,
                )
                for b in balances
            ],
            recent_leaves=[
                RecentLeave(
                    id=lr.id,
                    leave_type_name=lr.leave_type.name,
                    start_date=lr.start_date,
                    end_date=lr.end_date,
                    total_days=lr.total_days,
                    status=lr.status,
                    applied_at=lr.applied_at,
                )
                for lr in recent
            ],
        )

    async def manager(self, today: Optional[date] = None) -> ManagerDashboard:
        """Manager rollup.

        ``approved_today_count`` counts APPROVED requests whose *application*
        date is today, not their decision date. ``decided_at`` likewise
        reports the application timestamp.
        """
        today = today or datetime.now(timezone.utc).date()
        requests = self.uow.leave_requests

        day_start = datetime.combine(today, time.min, tzinfo=timezone.utc)
        decided = await requests.list_by_status(
            [LeaveStatus.APPROVED, LeaveStatus.REJECTED], limit=RECENT_LIMIT
        )

        return ManagerDashboard(
            pending_approvals_count=await requests.count(status=LeaveStatus.PENDING),
            approved_today_count=await requests.count(
                status=LeaveStatus.APPROVED,
                applied_from=day_start,
                applied_before=day_start + timedelta(days=1),
            ),
            recent_decisions=[
                RecentDecision(
                    leave_id=lr.id,
                    employee_name=lr.user.name,
                    leave_type_name=lr.leave_type.name,
                    start_date=lr.start_date,
                    end_date=lr.end_date,
                    total_days=lr.total_days,
                    status=lr.status,
                    decided_at=lr.applied_at,
                )
                for lr in decided
            ],
        )

    async def admin(self) -> AdminDashboard:
        by_role = await self.uow.users.count_by_role()
        return AdminDashboard(
            total_users=await self.uow.users.count(),
            users_by_role=UsersByRole(
                employees=by_role[Role.EMPLOYEE],
                managers=by_role[Role.MANAGER],
                admins=by_role[Role.ADMIN],
            ),
            leave_types_count=await self.uow.leave_types.count(),
            total_leave_requests=await self.uow.leave_requests.count(),
        )
