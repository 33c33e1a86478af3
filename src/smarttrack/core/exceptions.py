class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class OutsideGeofenceError(DomainError):
    """Raised when coordinates fall outside every office geofence."""


class AlreadyCheckedInError(DomainError):
    """Raised on check-in while an open segment exists for the day."""


class NoOpenSessionError(DomainError):
    """Raised on check-out when there is no open segment to close."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class AuthenticationError(DomainError):
    """Raised when no valid principal is attached to the request."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(Exception):
    """Raised when the persistent store fails."""


class StoreConflictError(StoreError):
    """Raised when a write violates a store uniqueness constraint."""
