class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when login credentials or a PIN are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a session lacks permission for an action."""

    status_code = 403


class DayOffError(AuthorizationError):
    """Raised when an employee tries to clock in on a weekly day off."""


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Raised when an entity would clash with an existing one (PIN, overlapping time off)."""

    status_code = 409
