"""Domain exceptions.

Every service-level failure is one of these. Each class carries the HTTP
status the API layer answers with; the handlers in ``main.py`` turn them into
``{"message": ...}`` bodies.
"""

from fastapi import status


class LeaveManagementError(Exception):
    """Base exception for every expected failure."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LeaveManagementError):
    """Raised when input data is malformed or out of range."""


class NotFoundError(LeaveManagementError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(LeaveManagementError):
    status_code = status.HTTP_409_CONFLICT


class DuplicateName(ConflictError):
    pass


class HasDependentRequests(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST


class BusinessRuleViolation(LeaveManagementError):
    """Raised when a well-formed request breaks a leave policy rule."""


class InvalidDateRange(BusinessRuleViolation):
    pass


class UnknownLeaveType(BusinessRuleViolation):
    pass


class NoBalanceRecord(BusinessRuleViolation):
    pass


class InsufficientBalance(BusinessRuleViolation):
    def __init__(self, available: int, requested: int):
        super().__init__(
            f"Insufficient leave balance. Available: {available} days, "
            f"Requested: {requested} days"
        )
        self.available = available
        self.requested = requested


class OverlappingRequest(BusinessRuleViolation):
    pass


class InvalidTransition(BusinessRuleViolation):
    pass


class UnauthorizedError(LeaveManagementError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(LeaveManagementError):
    status_code = status.HTTP_403_FORBIDDEN
