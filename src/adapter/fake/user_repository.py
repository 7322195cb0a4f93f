"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone

from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, name: str) -> User:
        if any(u.email == email for u in self.store.values()):
            raise DuplicateError("Email already registered")

        user = User(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self.store[user.id] = user
        return user

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def get_by_ids(self, user_ids: list[str]) -> dict[str, User]:
        return {uid: self.store[uid] for uid in user_ids if uid in self.store}
