"""Role repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from backoffice.api.dependencies import DBSession
from backoffice.core.permissions.models import Permission, Profile, Role


class RoleRepository:
    """Repository for Role database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, role: Role) -> Role:
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def get_by_id(self, role_id: UUID) -> Role | None:
        return await self.session.get(Role, role_id)

    async def get_by_name(self, name: str) -> Role | None:
        result = await self.session.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        """List every role ordered by name."""
        result = await self.session.execute(select(Role).order_by(Role.name))
        return list(result.scalars().all())

    async def count_references(self, role_id: UUID) -> tuple[int, int]:
        """Count permission rows and profiles pointing at a role.

        Returns:
            Tuple of (permission count, profile count)
        """
        permissions = await self.session.execute(
            select(func.count()).select_from(Permission).where(Permission.role_id == role_id)
        )
        profiles = await self.session.execute(
            select(func.count()).select_from(Profile).where(Profile.role_id == role_id)
        )
        return permissions.scalar_one(), profiles.scalar_one()

    async def update(self, role: Role) -> Role:
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def delete(self, role: Role) -> None:
        await self.session.delete(role)
        await self.session.flush()


# Type alias for dependency injection
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]
