class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRangeError(ValidationError):
    """Raised when a leave ends before it starts."""


class OverlappingRequestError(ValidationError):
    """Raised when a leave overlaps a pending or approved one of the same employee."""


class InsufficientBalanceError(ValidationError):
    """Raised when the requested days exceed the remaining quota."""


class InvalidTransitionError(ValidationError):
    """Raised when a leave application is not in the required state."""


class NotFoundError(DomainError):
    """Raised when an employee, leave type, quota or application does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConflictError(DomainError):
    """Raised when a concurrent write won the race for the same record."""
