from functools import lru_cache

from fastapi import Depends, Request

from adapter.jwt.token_signer import JoseTokenSigner
from adapter.mongodb.case_repository import MongoCaseRepository
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import PersistenceError
from port.case_repository import CaseRepository
from port.token_signer import TokenSigner
from port.user_repository import UserRepository
from utils.settings import Settings, load_settings


class UnavailableRepository:
    """Stands in for a repository while MongoDB is not connected.

    Every call raises PersistenceError, so each route answers with the same
    status it uses for any other store failure.
    """

    def __getattr__(self, name: str):
        def unavailable(*args, **kwargs):
            raise PersistenceError("Database unavailable")
        return unavailable


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def _get_db(request: Request, settings: Settings):
    """Get MongoDB database, or None if not connected."""
    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        return None
    return client[settings.database_name]


def get_user_repo(request: Request, settings: Settings = Depends(get_settings)) -> UserRepository:
    db = _get_db(request, settings)
    return MongoUserRepository(db) if db is not None else UnavailableRepository()


def get_case_repo(request: Request, settings: Settings = Depends(get_settings)) -> CaseRepository:
    db = _get_db(request, settings)
    return MongoCaseRepository(db) if db is not None else UnavailableRepository()


def get_token_signer(settings: Settings = Depends(get_settings)) -> TokenSigner:
    return JoseTokenSigner(settings.jwt_secret)
