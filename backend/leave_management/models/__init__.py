from leave_management.models.user import User
from leave_management.models.leave_type import LeaveType
from leave_management.models.leave_balance import LeaveBalance
from leave_management.models.leave_request import LeaveRequest
from leave_management.models.system_setting import SystemSetting

__all__ = [
    "User",
    "LeaveType",
    "LeaveBalance",
    "LeaveRequest",
    "SystemSetting",
]
