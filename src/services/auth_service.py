"""Auth service — registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

import bcrypt

from domain.model.errors import DuplicateError, InvalidCredentialsError, ValidationError
from domain.model.user import User
from port.token_signer import TokenSigner
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

# Checked against when the email is unknown so both failure paths cost one bcrypt comparison.
_DUMMY_HASH = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def _hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def register(repo: UserRepository, name: str, email: str, password: str) -> User:
    """Register a new user.

    Returns the created User domain object.

    Raises:
        DuplicateError: email already registered
        ValidationError: password longer than bcrypt accepts
        PersistenceError: the store failed
    """
    if repo.get_by_email(email):
        raise DuplicateError("Email already registered")

    user = repo.create(email=email, password_hash=_hash_password(password), name=name)
    logger.info("User registered", extra={"userId": user.id, "email": email})
    return user


def authenticate(repo: UserRepository, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Doesn't reveal whether the email exists.

    Raises:
        InvalidCredentialsError: unknown email or wrong password
        PersistenceError: the store failed
    """
    user = repo.get_by_email(email)
    if user is None:
        _verify_password(password, _DUMMY_HASH)
        raise InvalidCredentialsError("Invalid credentials")
    if not _verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Invalid credentials")
    return user


def login(repo: UserRepository, signer: TokenSigner, email: str, password: str) -> str:
    """Authenticate and issue a session token for the user."""
    user = authenticate(repo, email, password)
    token = signer.issue(user.id)
    logger.info("User logged in", extra={"userId": user.id})
    return token
