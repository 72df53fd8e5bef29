"""
Domain error taxonomy.

Every error carries a stable machine-checkable ``code`` and a human-readable
``message``. The API layer maps codes to HTTP statuses in ``api/errors.py``.
"""

from typing import Optional


class DomainError(Exception):
    """Base class for domain-specific errors."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code:
            self.code = code
        super().__init__(self.message)


class InvalidArgumentError(DomainError):
    """Raised when a query or body has a bad shape or value."""

    code = "INVALID_ARGUMENT"


class UnauthenticatedError(DomainError):
    """Raised when a credential is missing, invalid or expired."""

    code = "UNAUTHENTICATED"


class ForbiddenError(DomainError):
    """Raised when a valid credential lacks the required role or scope."""

    code = "FORBIDDEN"


class NotFoundError(DomainError):
    """Raised when a listing, version or user does not exist."""

    code = "NOT_FOUND"


class ConflictError(DomainError):
    """Raised when a unique resource (e.g. a slug) belongs to someone else."""

    code = "CONFLICT"


class InvalidTransitionError(DomainError):
    """Raised when the lifecycle guard rejects a state change."""

    code = "INVALID_TRANSITION"

    def __init__(self, from_state: str, to_state: str):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid state transition from '{from_state}' to '{to_state}'"
        )


class StorageError(DomainError):
    """Raised when the underlying persistence layer fails."""

    code = "STORAGE_ERROR"
