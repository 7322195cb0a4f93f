"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.model.case import CaseStatus, CaseView


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str


class CaseCreate(BaseModel):
    """Request model for creating a case."""
    title: Optional[str] = None
    description: Optional[str] = None


class CreatorResponse(BaseModel):
    """The user a case was created by, resolved to a display name."""
    id: Optional[str] = None
    name: Optional[str] = Field(None, description="None if the user no longer exists")


class CaseResponse(BaseModel):
    """Response model for a case (camelCase on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    status: CaseStatus
    created_by: CreatorResponse
    created_at: datetime

    @classmethod
    def from_view(cls, view: CaseView) -> 'CaseResponse':
        case = view.case
        return cls(
            id=case.id,
            title=case.title,
            description=case.description,
            status=case.status,
            created_by=CreatorResponse(id=case.created_by, name=view.creator_name),
            created_at=case.created_at,
        )
