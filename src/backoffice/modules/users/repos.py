"""Profile repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from backoffice.api.dependencies import DBSession
from backoffice.core.permissions.models import Profile


class ProfileRepository:
    """Repository for Profile database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, profile: Profile) -> Profile:
        self.session.add(profile)
        await self.session.flush()
        await self.session.refresh(profile)
        await self.session.refresh(profile, ["role"])
        return profile

    async def get_by_id(self, profile_id: UUID) -> Profile | None:
        return await self.session.get(Profile, profile_id)

    async def list_page(self, skip: int = 0, limit: int = 20) -> tuple[list[Profile], int]:
        """List profiles with pagination.

        Returns:
            Tuple of (profiles list, total count)
        """
        count_result = await self.session.execute(
            select(func.count()).select_from(Profile)
        )
        total = count_result.scalar_one()

        stmt = (
            select(Profile)
            .order_by(Profile.created_at.desc(), Profile.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def update(self, profile: Profile) -> Profile:
        """Flush changes and reload the profile with its role."""
        await self.session.flush()
        await self.session.refresh(profile)
        await self.session.refresh(profile, ["role"])
        return profile


# Type alias for dependency injection
ProfileRepo = Annotated[ProfileRepository, Depends(ProfileRepository)]
