# domain/model/case.py

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class CaseStatus(str, Enum):
    """Lifecycle labels of a case. Any value may follow any other."""
    IN_PROGRESS = 'InProgress'
    FINALIZED = 'Finalized'
    ARCHIVED = 'Archived'


# ── Case Domain Model ────────────────────────────────────


@dataclass
class Case:
    """Domain model representing a tracked case."""
    id: str
    title: str | None
    description: str | None
    status: CaseStatus
    created_by: str | None
    created_at: datetime

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(title: str | None, description: str | None, created_by: str) -> 'Case':
        """Create a new Case in IN_PROGRESS status owned by ``created_by``."""
        return Case(
            id=uuid.uuid4().hex,
            title=title,
            description=description,
            status=CaseStatus.IN_PROGRESS,
            created_by=created_by,
            created_at=datetime.now(timezone.utc),
        )


# ── Read model ───────────────────────────────────────────


@dataclass(frozen=True)
class CaseView:
    """A case with its creator reference resolved to a display name.

    ``creator_name`` is None when the referenced user no longer exists.
    """
    case: Case
    creator_name: str | None = None
