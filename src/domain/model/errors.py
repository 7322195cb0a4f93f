"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class DuplicateError(ValidationError):
    """Entity with the same unique key already exists."""


class InvalidCredentialsError(DomainError):
    """Email/password pair does not match a registered user."""


class InvalidTokenError(DomainError):
    """Session token is malformed, wrongly signed, or expired."""


class PersistenceError(DomainError):
    """The backing store failed to complete an operation."""
