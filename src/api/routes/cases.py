"""Case CRUD routes.

- POST /api/cases: Create a case owned by the caller
- GET /api/cases: List every case with creator names
- PUT /api/cases/{case_id}: Overwrite any subset of a case's fields
- DELETE /api/cases/{case_id}: Remove a case

All routes require a bearer token. Request bodies are read by dependencies
that run after the guard, so a caller without a valid token gets 401 even
when the body is not valid JSON.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api.dependencies import get_case_repo, get_user_repo
from api.models import CaseCreate, CaseResponse, MessageResponse
from api.security import get_current_user_id
from domain.model.errors import DomainError
from port.case_repository import CaseRepository
from port.user_repository import UserRepository
from services import case_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cases", tags=["cases"], dependencies=[Depends(get_current_user_id)])


async def _json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
        )


def _case_create_body(payload: Any = Depends(_json_body)) -> CaseCreate:
    try:
        return CaseCreate.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def _case_patch_body(payload: Any = Depends(_json_body)) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise RequestValidationError(
            [{"type": "dict_type", "loc": ("body",), "msg": "Input should be a valid dictionary", "input": payload}]
        )
    return payload


@router.post("", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
def create_case(
    user_id: str = Depends(get_current_user_id),
    body: CaseCreate = Depends(_case_create_body),
    repo: CaseRepository = Depends(get_case_repo),
    users: UserRepository = Depends(get_user_repo),
):
    try:
        view = case_service.create(repo, users, body.title, body.description, requester_id=user_id)
    except DomainError as e:
        logger.error("Failed to create case", extra={"userId": user_id, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to create case")

    return CaseResponse.from_view(view)


@router.get("", response_model=list[CaseResponse])
def list_cases(
    user_id: str = Depends(get_current_user_id),
    repo: CaseRepository = Depends(get_case_repo),
    users: UserRepository = Depends(get_user_repo),
):
    try:
        views = case_service.list_cases(repo, users)
    except DomainError as e:
        logger.error("Failed to list cases", extra={"userId": user_id, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch cases")

    return [CaseResponse.from_view(v) for v in views]


@router.put("/{case_id}", response_model=CaseResponse)
def update_case(
    case_id: str,
    user_id: str = Depends(get_current_user_id),
    patch: dict[str, Any] = Depends(_case_patch_body),
    repo: CaseRepository = Depends(get_case_repo),
    users: UserRepository = Depends(get_user_repo),
):
    """Apply a partial update. Any field may be overwritten, by any user."""
    try:
        view = case_service.update(repo, users, case_id, patch)
    except DomainError as e:
        logger.warning("Failed to update case", extra={"caseId": case_id, "userId": user_id, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to update case")

    return CaseResponse.from_view(view)


@router.delete("/{case_id}", response_model=MessageResponse)
def delete_case(
    case_id: str,
    user_id: str = Depends(get_current_user_id),
    repo: CaseRepository = Depends(get_case_repo),
):
    """Delete a case. Reports success even when the id is unknown."""
    try:
        case_service.delete(repo, case_id)
    except DomainError as e:
        logger.error("Failed to delete case", extra={"caseId": case_id, "userId": user_id, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete case")

    return MessageResponse(message="Case deleted successfully")
