"""Application settings read from the environment (and a local .env file)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_PORT = 5000
DEFAULT_DATABASE_NAME = 'case_desk'


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    mongo_uri: str | None = None
    database_name: str = DEFAULT_DATABASE_NAME
    port: int = DEFAULT_PORT


def load_settings() -> Settings:
    """Build Settings from environment variables.

    Raises:
        ValueError: JWT_SECRET is missing or PORT is not a number
    """
    load_dotenv()

    jwt_secret = os.getenv('JWT_SECRET')
    if not jwt_secret:
        raise ValueError(
            "JWT_SECRET environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    return Settings(
        jwt_secret=jwt_secret,
        mongo_uri=os.getenv('MONGO_URI'),
        database_name=os.getenv('MONGODB_DATABASE', DEFAULT_DATABASE_NAME),
        port=int(os.getenv('PORT', DEFAULT_PORT)),
    )
