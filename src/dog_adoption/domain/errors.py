"""Domain error taxonomy.

Errors carry a user-facing message only; translating them to transport status
codes happens in the API layer.
"""


class DomainError(Exception):
    """Base class for errors raised by services."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Raised when input is missing or malformed."""


class UnauthorizedError(DomainError):
    """Raised when credentials or tokens are missing or invalid."""


class ForbiddenError(DomainError):
    """Raised when an authenticated caller is not permitted to act."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class ConflictError(DomainError):
    """Raised when a request is valid but the entity state forbids it."""
