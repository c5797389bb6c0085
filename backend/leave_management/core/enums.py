"""Closed enumerations shared by models, schemas and services."""

from enum import Enum


class Role(str, Enum):
    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    def can_transition_to(self, target: "LeaveStatus") -> bool:
        return target in LEAVE_TRANSITIONS[self]


# APPROVED and REJECTED are terminal.
LEAVE_TRANSITIONS: dict[LeaveStatus, frozenset[LeaveStatus]] = {
    LeaveStatus.PENDING: frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED}),
    LeaveStatus.APPROVED: frozenset(),
    LeaveStatus.REJECTED: frozenset(),
}


class SystemSettingKey(str, Enum):
    COMPANY_NAME = "CompanyName"
    LEAVE_YEAR_START_MONTH = "LeaveYearStartMonth"
    MAX_CARRY_FORWARD_DAYS = "MaxCarryForwardDays"
