"""Authentication routes (register, login)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_token_signer, get_user_repo
from api.models import LoginRequest, MessageResponse, RegisterRequest, TokenResponse
from domain.model.errors import DomainError, InvalidCredentialsError
from port.token_signer import TokenSigner
from port.user_repository import UserRepository
from services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, repo: UserRepository = Depends(get_user_repo)):
    """Register a new user.

    Raises:
        HTTPException: 400 if the email is taken or the user cannot be stored
    """
    try:
        auth_service.register(repo, name=request.name, email=request.email, password=request.password)
    except DomainError as e:
        logger.warning("Registration failed", extra={"email": request.email, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to register user")

    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Exchange email and password for a one-hour bearer token.

    Raises:
        HTTPException: 401 if credentials are invalid, 500 on any other failure
    """
    try:
        token = auth_service.login(repo, signer, email=request.email, password=request.password)
    except InvalidCredentialsError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    except DomainError as e:
        logger.error("Login failed", extra={"email": request.email, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")

    return TokenResponse(token=token)
