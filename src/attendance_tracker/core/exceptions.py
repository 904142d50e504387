class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AttendanceStateError(ValidationError):
    """Raised when a check-in/check-out does not fit the day's record."""

    code = "attendance_state_error"


class AlreadyCheckedInError(AttendanceStateError):
    code = "already_checked_in"


class AlreadyCheckedOutError(AttendanceStateError):
    code = "already_checked_out"


class NotCheckedInError(AttendanceStateError):
    code = "not_checked_in"


class NotFoundError(DomainError):
    """Raised when an employee or record does not exist."""

    code = "not_found"


class AuthenticationError(DomainError):
    """Raised when the caller identity cannot be resolved."""

    code = "unauthenticated"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"


class StoreError(DomainError):
    """Raised when the persistence layer fails."""

    code = "store_failure"
