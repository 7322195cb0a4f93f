"""Port definition for CaseRepository."""

from typing import Any, Protocol

from domain.model.case import Case


class CaseRepository(Protocol):
    """Store failures raise PersistenceError."""

    def save(self, case: Case) -> None: ...

    def get_by_id(self, case_id: str) -> Case | None: ...

    def find_all(self) -> list[Case]: ...

    def update_by_id(self, case_id: str, changes: dict[str, Any]) -> Case | None:
        """Overwrite the given Case fields and return the updated Case.

        ``changes`` is keyed by Case attribute name. Returns None when no
        case has ``case_id``.
        """
        ...

    def delete_by_id(self, case_id: str) -> bool:
        """Remove the case. Return True if a case was removed."""
        ...
