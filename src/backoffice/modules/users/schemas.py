"""Pydantic schemas for profile operations."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from backoffice.core.constants import MAX_NAME_LENGTH


class RoleSummary(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProfileCreate(BaseModel):
    """Schema for registering a profile for an existing auth identity."""

    id: UUID
    email: EmailStr | None = None
    full_name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    role_id: UUID
    is_active: bool = True


class ProfileUpdate(BaseModel):
    """Schema for updating profile details."""

    email: EmailStr | None = None
    full_name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)


class RoleAssignment(BaseModel):
    """Assign a role; ``None`` removes the user's access entirely."""

    role_id: UUID | None


class ProfileResponse(BaseModel):
    """Schema for profile response data."""

    id: UUID
    email: str | None = None
    full_name: str | None = None
    role_id: UUID | None = None
    role: RoleSummary | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileListResponse(BaseModel):
    """Schema for listing profiles."""

    items: list[ProfileResponse]
    total: int
    skip: int
    limit: int
