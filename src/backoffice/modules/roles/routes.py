"""Role management API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, status

from backoffice.core.permissions import PermissionController, require_page
from backoffice.modules.roles import router
from backoffice.modules.roles.schemas import (
    RoleCreate,
    RoleListResponse,
    RoleResponse,
    RoleUpdate,
)
from backoffice.modules.roles.services import RoleSvc


ROLES_PAGE = "/dashboard/users/roles"

CanViewRoles = Annotated[PermissionController, Depends(require_page(ROLES_PAGE))]
CanEditRoles = Annotated[
    PermissionController, Depends(require_page(ROLES_PAGE, action="edit"))
]


@router.get(
    "",
    response_model=RoleListResponse,
    summary="List roles",
)
async def list_roles(_: CanViewRoles, service: RoleSvc) -> RoleListResponse:
    roles = await service.list_roles()
    return RoleListResponse(
        items=[RoleResponse.model_validate(r) for r in roles],
        total=len(roles),
    )


@router.post(
    "",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create role",
)
async def create_role(
    data: RoleCreate,
    _: CanEditRoles,
    service: RoleSvc,
) -> RoleResponse:
    role = await service.create_role(data)
    return RoleResponse.model_validate(role)


@router.patch(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Update role",
)
async def update_role(
    role_id: UUID,
    data: RoleUpdate,
    _: CanEditRoles,
    service: RoleSvc,
) -> RoleResponse:
    role = await service.update_role(role_id, data)
    return RoleResponse.model_validate(role)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete role",
    description="Only roles without permission rows or assigned users can be deleted.",
)
async def delete_role(role_id: UUID, _: CanEditRoles, service: RoleSvc) -> None:
    await service.delete_role(role_id)
