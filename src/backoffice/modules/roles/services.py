"""Role service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from backoffice.core.errors import ConflictError, NotFoundError
from backoffice.core.permissions.models import Role
from backoffice.modules.roles.repos import RoleRepo
from backoffice.modules.roles.schemas import RoleCreate, RoleUpdate


logger = structlog.get_logger()


class RoleService:
    """Service for role management operations.

    Role names are unique. A role still referenced by permission rows or
    profiles cannot be deleted.
    """

    def __init__(self, repo: RoleRepo) -> None:
        self.repo = repo

    async def list_roles(self) -> list[Role]:
        return await self.repo.list_all()

    async def get_role(self, role_id: UUID) -> Role:
        """Get a role by ID.

        Raises:
            NotFoundError: If role not found
        """
        role = await self.repo.get_by_id(role_id)
        if not role:
            raise NotFoundError(
                "Role not found",
                resource="role",
                resource_id=str(role_id),
            )
        return role

    async def create_role(self, data: RoleCreate) -> Role:
        """Create a new role.

        Raises:
            ConflictError: If the name is already taken
        """
        await self._ensure_name_free(data.name)
        role = await self.repo.create(Role(name=data.name, description=data.description))
        logger.info("role_created", role_id=str(role.id), name=role.name)
        return role

    async def update_role(self, role_id: UUID, data: RoleUpdate) -> Role:
        """Rename or re-describe a role.

        Raises:
            NotFoundError: If role not found
            ConflictError: If the new name is already taken
        """
        role = await self.get_role(role_id)

        if data.name and data.name != role.name:
            await self._ensure_name_free(data.name)
            role.name = data.name

        if data.description is not None:
            role.description = data.description

        return await self.repo.update(role)

    async def delete_role(self, role_id: UUID) -> None:
        """Delete an unreferenced role.

        Raises:
            NotFoundError: If role not found
            ConflictError: If permission rows or profiles still use the role
        """
        role = await self.get_role(role_id)

        permission_count, profile_count = await self.repo.count_references(role_id)
        if permission_count or profile_count:
            raise ConflictError(
                "Role is still in use",
                error_code="role_in_use",
                details={
                    "permission_count": permission_count,
                    "profile_count": profile_count,
                },
            )

        await self.repo.delete(role)
        logger.info("role_deleted", role_id=str(role_id), name=role.name)

    async def _ensure_name_free(self, name: str) -> None:
        if await self.repo.get_by_name(name):
            raise ConflictError(
                "Role name already exists",
                error_code="role_exists",
                details={"name": name},
            )


# Type alias for dependency injection
RoleSvc = Annotated[RoleService, Depends(RoleService)]
