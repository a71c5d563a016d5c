"""Pydantic schemas for permission administration."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backoffice.core.constants import MAX_PAGE_NAME_LENGTH


class PageResponse(BaseModel):
    """A registered dashboard page."""

    path: str
    display_name: str
    parent_id: str | None = None
    description: str = ""
    children: list[str] = []

    model_config = ConfigDict(from_attributes=True)


class PermissionRow(BaseModel):
    """One page's grant as submitted by or returned to a client."""

    page_name: str = Field(..., min_length=1, max_length=MAX_PAGE_NAME_LENGTH)
    can_view: bool = False
    can_edit: bool = False

    model_config = ConfigDict(from_attributes=True)


class MatrixRowResponse(PermissionRow):
    display_name: str
    parent_id: str | None = None
    description: str = ""
    registered: bool = True


class MatrixResponse(BaseModel):
    """The permission matrix of one role."""

    role_id: UUID
    role_name: str
    rows: list[MatrixRowResponse]
    parent_states: dict[str, dict[str, Literal["all", "some", "none"]]]
    error: str | None = None


class ToggleRequest(BaseModel):
    """Apply one checkbox change to the submitted rows."""

    rows: list[PermissionRow]
    page_name: str
    field: Literal["can_view", "can_edit"]
    value: bool


class SavePermissionsRequest(BaseModel):
    rows: list[PermissionRow]

    @field_validator("rows")
    @classmethod
    def unique_pages(cls, v: list[PermissionRow]) -> list[PermissionRow]:
        """Reject a page listed more than once."""
        seen: set[str] = set()
        for row in v:
            if row.page_name in seen:
                raise ValueError(f"Page listed more than once: {row.page_name}")
            seen.add(row.page_name)
        return v


class BootstrapRequest(BaseModel):
    email: str | None = None


class BootstrapResponse(BaseModel):
    """Summary of a bootstrap run."""

    success: bool = True
    message: str = "Permission system initialized successfully"
    roles: dict[str, UUID]
    permissions_created: int
    owner_profile_id: UUID | None = None
    owner_action: str


class DebugRole(BaseModel):
    id: UUID
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class DebugProfile(BaseModel):
    id: UUID
    email: str | None = None
    full_name: str | None = None
    role_id: UUID | None = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class PageDecision(BaseModel):
    view: bool
    edit: bool


class PermissionDebugResponse(BaseModel):
    """Everything needed to explain why a user sees what they see."""

    user_id: UUID
    strategy: str
    profile: DebugProfile | None
    role: DebugRole | None
    permissions: list[PermissionRow]
    all_roles: list[DebugRole]
    has_profile: bool
    has_role: bool
    permission_count: int
    role_count: int
    decisions: dict[str, PageDecision]
