"""Permission store: reads and replaces a role's permission rows.

Every database failure surfaces as a typed error (``StoreError`` for
reads, ``SaveError`` for writes) so callers can tell "no rows" apart from
"could not ask".
"""

from collections import Counter
from collections.abc import Sequence
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from backoffice.api.dependencies import DBSession
from backoffice.core.errors import (
    NoProfileError,
    NoRoleAssignedError,
    SaveError,
    StoreError,
    ValidationError,
)
from backoffice.core.permissions.models import Permission, Profile
from backoffice.core.permissions.registry import PermissionLike


logger = structlog.get_logger()


class PermissionStore:
    """Access to profiles and permission rows.

    All writes happen inside the caller's session transaction; committing
    is left to the request (or CLI) that owns the session.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def get_profile(self, user_id: UUID) -> Profile | None:
        """Get a profile by auth user id.

        Raises:
            StoreError: If the database cannot be reached
        """
        try:
            return await self.session.get(Profile, user_id)
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("profile_lookup_failed", user_id=str(user_id), error=str(exc))
            raise StoreError(details={"operation": "get_profile"}) from exc

    async def resolve_role_id(self, user_id: UUID) -> UUID:
        """Resolve the role assigned to a user.

        Raises:
            NoProfileError: If no profile row exists for the user
            NoRoleAssignedError: If the profile has no role or is deactivated
            StoreError: If the database cannot be reached
        """
        profile = await self.get_profile(user_id)
        if profile is None:
            raise NoProfileError(details={"user_id": str(user_id)})
        if profile.role_id is None or not profile.is_active:
            raise NoRoleAssignedError(details={"user_id": str(user_id)})
        return profile.role_id

    async def load_permissions(self, role_id: UUID) -> list[Permission]:
        """Load every permission row of a role, ordered by page name.

        Returns:
            The rows; an empty list when the role has none

        Raises:
            StoreError: If the database cannot be reached
        """
        stmt = (
            select(Permission)
            .where(Permission.role_id == role_id)
            .order_by(Permission.page_name)
        )
        try:
            result = await self.session.execute(stmt)
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("permissions_load_failed", role_id=str(role_id), error=str(exc))
            raise StoreError(details={"operation": "load_permissions"}) from exc
        return list(result.scalars().all())

    async def save_permissions(
        self,
        role_id: UUID,
        permissions: Sequence[PermissionLike],
    ) -> list[Permission]:
        """Replace all of a role's rows with ``permissions``.

        Rows with neither flag set are not stored. Deletion and insertion
        share one transaction, so a failure leaves the previous rows in
        place once the session is rolled back.

        Returns:
            The stored rows, reloaded

        Raises:
            ValidationError: If a row grants edit without view, or a page
                appears twice
            SaveError: If the database rejects the write
        """
        self._validate(permissions)

        rows = [
            Permission(
                role_id=role_id,
                page_name=p.page_name,
                can_view=bool(p.can_view),
                can_edit=bool(p.can_edit),
            )
            for p in permissions
            if p.can_view or p.can_edit
        ]

        try:
            await self.session.execute(
                delete(Permission).where(Permission.role_id == role_id)
            )
            self.session.add_all(rows)
            await self.session.flush()
        except (SQLAlchemyError, OSError) as exc:
            await self.session.rollback()
            logger.error("permissions_save_failed", role_id=str(role_id), error=str(exc))
            raise SaveError(details={"role_id": str(role_id)}) from exc

        logger.info("permissions_saved", role_id=str(role_id), row_count=len(rows))

        try:
            return await self.load_permissions(role_id)
        except StoreError as exc:
            raise SaveError(details={"role_id": str(role_id)}) from exc

    @staticmethod
    def _validate(permissions: Sequence[PermissionLike]) -> None:
        errors = [
            {
                "field": "can_edit",
                "page_name": p.page_name,
                "message": "Edit access requires view access",
            }
            for p in permissions
            if p.can_edit and not p.can_view
        ]
        counts = Counter(p.page_name for p in permissions)
        errors.extend(
            {
                "field": "page_name",
                "page_name": page,
                "message": "Page listed more than once",
            }
            for page, count in counts.items()
            if count > 1
        )
        if errors:
            raise ValidationError("Invalid permission rows", errors=errors)


# Type alias for dependency injection
PermissionStoreDep = Annotated[PermissionStore, Depends(PermissionStore)]
