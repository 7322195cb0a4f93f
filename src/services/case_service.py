"""Case service: create, list, update and delete cases.

Every authenticated user sees and may change every case; there is no
ownership scoping and no restriction on which fields an update touches.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from domain.model.case import Case, CaseStatus, CaseView
from domain.model.errors import NotFoundError, ValidationError
from port.case_repository import CaseRepository
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

# Client-facing field name -> Case attribute
PATCH_FIELDS = {
    'id': 'id',
    'title': 'title',
    'description': 'description',
    'status': 'status',
    'createdBy': 'created_by',
    'createdAt': 'created_at',
}


def _resolve_creators(users: UserRepository, cases: list[Case]) -> list[CaseView]:
    """Attach creator display names with a single user lookup."""
    creator_ids = sorted({c.created_by for c in cases if c.created_by})
    creators = users.get_by_ids(creator_ids)
    views = []
    for case in cases:
        creator = creators.get(case.created_by) if case.created_by else None
        views.append(CaseView(case=case, creator_name=creator.name if creator else None))
    return views


def _coerce_text(field: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValidationError(f"Invalid value for {field}")


def _coerce_status(value: Any) -> CaseStatus:
    try:
        return CaseStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status: {value!r}")


def _coerce_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            # Replace 'Z' with '+00:00' for ISO format compatibility
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            pass
        else:
            # Offset-less values are taken as UTC
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValidationError("Invalid value for createdAt")


def normalize_patch(patch: dict[str, Any]) -> dict[str, Any]:
    """Translate a client patch into Case attribute changes.

    Unknown keys are dropped. Known keys are coerced to the attribute's type.

    Raises:
        ValidationError: a value cannot be coerced
    """
    changes: dict[str, Any] = {}
    for key, value in patch.items():
        attr = PATCH_FIELDS.get(key)
        if attr is None:
            continue
        if attr == 'status':
            changes[attr] = _coerce_status(value)
        elif attr == 'created_at':
            changes[attr] = _coerce_datetime(value)
        elif attr in ('id', 'created_by'):
            if not isinstance(value, str) or not value:
                raise ValidationError(f"Invalid value for {key}")
            changes[attr] = value
        else:
            changes[attr] = _coerce_text(key, value)
    return changes


def create(
    repo: CaseRepository,
    users: UserRepository,
    title: str | None,
    description: str | None,
    requester_id: str,
) -> CaseView:
    """Create a case owned by the requesting user.

    Raises PersistenceError if the store fails.
    """
    case = Case.create(title, description, created_by=requester_id)
    repo.save(case)
    logger.info("Case created", extra={"caseId": case.id, "userId": requester_id})
    return _resolve_creators(users, [case])[0]


def list_cases(repo: CaseRepository, users: UserRepository) -> list[CaseView]:
    """Return every case with its creator's name resolved."""
    return _resolve_creators(users, repo.find_all())


def update(
    repo: CaseRepository,
    users: UserRepository,
    case_id: str,
    patch: dict[str, Any],
) -> CaseView:
    """Apply a partial update to a case.

    Raises:
        ValidationError: a patch value has the wrong type
        NotFoundError: no case has ``case_id``
        PersistenceError: the store failed or rejected the change
    """
    changes = normalize_patch(patch)
    updated = repo.update_by_id(case_id, changes)
    if updated is None:
        raise NotFoundError("Case not found")

    logger.info("Case updated", extra={"caseId": case_id, "fields": sorted(changes)})
    return _resolve_creators(users, [updated])[0]


def delete(repo: CaseRepository, case_id: str) -> None:
    """Delete a case. Deleting an unknown id is not an error."""
    removed = repo.delete_by_id(case_id)
    logger.info("Case delete requested", extra={"caseId": case_id, "removed": removed})
