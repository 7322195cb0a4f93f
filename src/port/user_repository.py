from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Store failures raise PersistenceError.
    """
    def create(self, email: str, password_hash: str, name: str) -> User:
        """Create a new user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_ids(self, user_ids: list[str]) -> dict[str, User]:
        """Find several users at once, keyed by ID. Missing IDs are left out."""
        ...
