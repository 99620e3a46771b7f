class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity (user, student, holiday) does not exist."""


class ConflictError(DomainError):
    """Raised when an insert violates a uniqueness constraint."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
