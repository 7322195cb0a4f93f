"""python-jose implementation of TokenSigner."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt

from domain.model.errors import InvalidTokenError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
TOKEN_TTL = timedelta(hours=1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JoseTokenSigner:
    """Signs HS256 JWTs with ``sub``, ``iat`` and ``exp`` claims.

    Expiry is checked against ``clock`` instead of the library's own
    wall-clock check, so callers can pin time in tests.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = TOKEN_TTL,
        clock: Callable[[], datetime] = _utc_now,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: str) -> str:
        """Create JWT access token for user."""
        now = self._clock()
        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> str:
        """Verify JWT token and extract user_id."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError("Invalid token") from e

        user_id = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(user_id, str) or not isinstance(expires_at, (int, float)):
            raise InvalidTokenError("Invalid token")
        if self._clock().timestamp() >= expires_at:
            logger.debug("JWT expired", extra={"userId": user_id})
            raise InvalidTokenError("Token expired")
        return user_id
