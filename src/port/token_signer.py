from typing import Protocol


class TokenSigner(Protocol):
    """Issues and verifies session tokens carrying a user ID."""

    def issue(self, user_id: str) -> str:
        """Return a signed token for ``user_id``."""
        ...

    def verify(self, token: str) -> str:
        """Return the user ID in ``token``. Raise InvalidTokenError if unusable."""
        ...
