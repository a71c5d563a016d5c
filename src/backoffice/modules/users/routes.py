"""Back-office user API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, status

from backoffice.api.dependencies import PageParams
from backoffice.core.auth import CurrentUserId
from backoffice.core.errors import NoProfileError
from backoffice.core.permissions import PermissionController, require_page
from backoffice.modules.users import router
from backoffice.modules.users.repos import ProfileRepo
from backoffice.modules.users.schemas import (
    ProfileCreate,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpdate,
    RoleAssignment,
)
from backoffice.modules.users.services import ProfileSvc


MANAGE_PAGE = "/dashboard/users/manage"
PROFILE_PAGE = "/dashboard/profile"

CanViewUsers = Annotated[PermissionController, Depends(require_page(MANAGE_PAGE))]
CanManageUsers = Annotated[
    PermissionController, Depends(require_page(MANAGE_PAGE, action="edit"))
]
CanEditOwnProfile = Annotated[
    PermissionController, Depends(require_page(PROFILE_PAGE, action="edit"))
]


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get current user",
    description="Returns the caller's profile and role. Needs no page permission.",
)
async def get_me(user_id: CurrentUserId, repo: ProfileRepo) -> ProfileResponse:
    profile = await repo.get_by_id(user_id)
    if not profile:
        raise NoProfileError(details={"user_id": str(user_id)})
    return ProfileResponse.model_validate(profile)


@router.patch(
    "/me",
    response_model=ProfileResponse,
    summary="Update current user",
)
async def update_me(
    data: ProfileUpdate,
    user_id: CurrentUserId,
    _: CanEditOwnProfile,
    service: ProfileSvc,
) -> ProfileResponse:
    profile = await service.update_profile(user_id, data)
    return ProfileResponse.model_validate(profile)


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List users",
)
async def list_users(
    _: CanViewUsers,
    page: PageParams,
    service: ProfileSvc,
) -> ProfileListResponse:
    profiles, total = await service.list_profiles(page.skip, page.limit)
    return ProfileListResponse(
        items=[ProfileResponse.model_validate(p) for p in profiles],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Creates the back-office profile for an existing auth identity.",
)
async def create_user(
    data: ProfileCreate,
    _: CanManageUsers,
    service: ProfileSvc,
) -> ProfileResponse:
    profile = await service.create_profile(data)
    return ProfileResponse.model_validate(profile)


@router.get(
    "/{user_id}",
    response_model=ProfileResponse,
    summary="Get user",
)
async def get_user(user_id: UUID, _: CanViewUsers, service: ProfileSvc) -> ProfileResponse:
    profile = await service.get_profile(user_id)
    return ProfileResponse.model_validate(profile)


@router.put(
    "/{user_id}/role",
    response_model=ProfileResponse,
    summary="Assign role",
)
async def assign_role(
    user_id: UUID,
    data: RoleAssignment,
    _: CanManageUsers,
    service: ProfileSvc,
) -> ProfileResponse:
    profile = await service.assign_role(user_id, data.role_id)
    return ProfileResponse.model_validate(profile)


@router.post(
    "/{user_id}/activate",
    response_model=ProfileResponse,
    summary="Activate user",
)
async def activate_user(
    user_id: UUID, _: CanManageUsers, service: ProfileSvc
) -> ProfileResponse:
    profile = await service.set_active(user_id, True)
    return ProfileResponse.model_validate(profile)


@router.post(
    "/{user_id}/deactivate",
    response_model=ProfileResponse,
    summary="Deactivate user",
)
async def deactivate_user(
    user_id: UUID, _: CanManageUsers, service: ProfileSvc
) -> ProfileResponse:
    profile = await service.set_active(user_id, False)
    return ProfileResponse.model_validate(profile)
