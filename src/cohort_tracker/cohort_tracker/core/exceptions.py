class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested row does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials or a session token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class StoreError(DomainError):
    """Raised when the record store fails (network, driver, backend)."""


class ConflictError(StoreError):
    """Raised when an insert violates a uniqueness constraint in the store."""
