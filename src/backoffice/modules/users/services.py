"""Profile service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from backoffice.core.errors import BadRequestError, ConflictError, NotFoundError
from backoffice.core.permissions.models import Profile
from backoffice.modules.roles.repos import RoleRepo
from backoffice.modules.users.repos import ProfileRepo
from backoffice.modules.users.schemas import ProfileCreate, ProfileUpdate


logger = structlog.get_logger()


class ProfileService:
    """Service for back-office user management.

    Identities live with the auth provider; this service manages the
    profile that ties an identity to a role.
    """

    def __init__(self, repo: ProfileRepo, roles: RoleRepo) -> None:
        self.repo = repo
        self.roles = roles

    async def get_profile(self, profile_id: UUID) -> Profile:
        """Get a profile by ID.

        Raises:
            NotFoundError: If profile not found
        """
        profile = await self.repo.get_by_id(profile_id)
        if not profile:
            raise NotFoundError(
                "User not found",
                resource="user",
                resource_id=str(profile_id),
            )
        return profile

    async def list_profiles(self, skip: int, limit: int) -> tuple[list[Profile], int]:
        return await self.repo.list_page(skip, limit)

    async def create_profile(self, data: ProfileCreate) -> Profile:
        """Register a profile for an auth identity.

        Raises:
            ConflictError: If the identity already has a profile
            BadRequestError: If the role does not exist
        """
        if await self.repo.get_by_id(data.id):
            raise ConflictError(
                "User already registered",
                error_code="profile_exists",
                details={"user_id": str(data.id)},
            )
        await self._ensure_role(data.role_id)

        profile = await self.repo.create(
            Profile(
                id=data.id,
                email=data.email,
                full_name=data.full_name,
                role_id=data.role_id,
                is_active=data.is_active,
            )
        )
        logger.info("profile_created", user_id=str(profile.id), role_id=str(data.role_id))
        return profile

    async def update_profile(self, profile_id: UUID, data: ProfileUpdate) -> Profile:
        profile = await self.get_profile(profile_id)
        if data.email is not None:
            profile.email = data.email
        if data.full_name is not None:
            profile.full_name = data.full_name
        return await self.repo.update(profile)

    async def assign_role(self, profile_id: UUID, role_id: UUID | None) -> Profile:
        """Assign a role to a profile, or clear it with None.

        Raises:
            NotFoundError: If profile not found
            BadRequestError: If the role does not exist
        """
        profile = await self.get_profile(profile_id)
        if role_id is not None:
            await self._ensure_role(role_id)

        profile.role_id = role_id
        profile = await self.repo.update(profile)
        logger.info(
            "role_assigned",
            user_id=str(profile_id),
            role_id=str(role_id) if role_id else None,
        )
        return profile

    async def set_active(self, profile_id: UUID, is_active: bool) -> Profile:
        profile = await self.get_profile(profile_id)
        profile.is_active = is_active
        profile = await self.repo.update(profile)
        logger.info(
            "profile_activated" if is_active else "profile_deactivated",
            user_id=str(profile_id),
        )
        return profile

    async def _ensure_role(self, role_id: UUID) -> None:
        if not await self.roles.get_by_id(role_id):
            raise BadRequestError(
                "Invalid role ID",
                error_code="invalid_role",
                details={"role_id": str(role_id)},
            )


# Type alias for dependency injection
ProfileSvc = Annotated[ProfileService, Depends(ProfileService)]
