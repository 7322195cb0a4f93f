"""In-memory implementation of CaseRepository for testing."""

from dataclasses import replace
from typing import Any

from domain.model.case import Case
from domain.model.errors import PersistenceError


class FakeCaseRepository:
    def __init__(self):
        self.store: dict[str, Case] = {}

    # ── write operations ─────────────────────────────────────

    def save(self, case: Case) -> None:
        self.store[case.id] = replace(case)

    def update_by_id(self, case_id: str, changes: dict[str, Any]) -> Case | None:
        case = self.store.get(case_id)
        if not case:
            return None

        # Same rule as MongoDB: _id is immutable once written.
        if 'id' in changes and changes['id'] != case_id:
            raise PersistenceError("Case id is immutable")

        for field_name, value in changes.items():
            setattr(case, field_name, value)
        return replace(case)

    def delete_by_id(self, case_id: str) -> bool:
        return self.store.pop(case_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, case_id: str) -> Case | None:
        case = self.store.get(case_id)
        return replace(case) if case else None

    def find_all(self) -> list[Case]:
        return [replace(c) for c in sorted(self.store.values(), key=lambda c: c.created_at)]
