"""Bearer-token guard for protected routes."""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_token_signer
from domain.model.errors import InvalidTokenError
from port.token_signer import TokenSigner

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    signer: TokenSigner = Depends(get_token_signer),
) -> str:
    """Return the user ID carried by the bearer token. Raises 401 otherwise."""
    # HTTPBearer yields None for a missing header and for non-Bearer schemes alike
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return signer.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("Rejected bearer token", extra={"reason": str(e)})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
