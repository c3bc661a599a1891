class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(ValidationError):
    """Raised when a referenced user, session or package does not exist."""


class AlreadyBookedError(ValidationError):
    """Raised when a trainee already holds a slot in the session."""


class DuplicateSessionError(ValidationError):
    """Raised when another session has the same name, date and time."""


class InsufficientCreditsError(DomainError):
    """Raised when a trainee has no credit left to spend."""


class CancellationLockedError(DomainError):
    """Raised when a session starts within the cancellation lock window."""


class IdentityChangePendingError(DomainError):
    """Raised on the first save of a changed email; saving again confirms it."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NoMatchingRecordError(DomainError):
    """Raised when no user matches the email/phone pair of a reset request."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
