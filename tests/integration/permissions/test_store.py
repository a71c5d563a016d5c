"""Integration tests for the permission store against a real database."""

from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.errors import NoProfileError, NoRoleAssignedError
from backoffice.core.permissions.matrix import PermissionMatrixEditor
from backoffice.core.permissions.models import Permission, Role
from backoffice.core.permissions.rules import PageGrant
from backoffice.core.permissions.store import PermissionStore
from tests.factories import create_profile, create_role


pytestmark = pytest.mark.integration


class TestResolveRole:
    """Tests for resolving a user's role."""

    async def test_assigned_role(self, db: AsyncSession, viewer, viewer_role: Role) -> None:
        assert await PermissionStore(db).resolve_role_id(viewer.id) == viewer_role.id

    async def test_no_profile(self, db: AsyncSession) -> None:
        with pytest.raises(NoProfileError):
            await PermissionStore(db).resolve_role_id(uuid4())

    async def test_no_role(self, db: AsyncSession) -> None:
        profile = await create_profile(db, None)

        with pytest.raises(NoRoleAssignedError):
            await PermissionStore(db).resolve_role_id(profile.id)

    async def test_deactivated(self, db: AsyncSession, viewer_role: Role) -> None:
        profile = await create_profile(db, viewer_role, is_active=False)

        with pytest.raises(NoRoleAssignedError):
            await PermissionStore(db).resolve_role_id(profile.id)


class TestLoadAndSave:
    """Tests for reading and replacing rows."""

    async def test_load_is_ordered(self, db: AsyncSession, viewer_role: Role) -> None:
        rows = await PermissionStore(db).load_permissions(viewer_role.id)

        assert [r.page_name for r in rows] == sorted(r.page_name for r in rows)
        assert len(rows) == 4

    async def test_load_empty_role(self, db: AsyncSession) -> None:
        role = await create_role(db, "Nobody")
        assert await PermissionStore(db).load_permissions(role.id) == []

    async def test_save_replaces_rows(self, db: AsyncSession, viewer_role: Role) -> None:
        store = PermissionStore(db)

        saved = await store.save_permissions(
            viewer_role.id,
            [
                PageGrant("/dashboard/config", True, True),
                PageGrant("/dashboard/billing", False, False),
            ],
        )

        assert [(r.page_name, r.can_view, r.can_edit) for r in saved] == [
            ("/dashboard/config", True, True)
        ]

    async def test_save_leaves_other_roles_alone(
        self, db: AsyncSession, viewer_role: Role, owner_role: Role
    ) -> None:
        await PermissionStore(db).save_permissions(viewer_role.id, [])

        owner_rows = await PermissionStore(db).load_permissions(owner_role.id)
        assert [r.page_name for r in owner_rows] == ["*"]

    async def test_matrix_round_trip(self, db: AsyncSession) -> None:
        role = await create_role(db, "Kitchen")
        store = PermissionStore(db)

        editor = PermissionMatrixEditor(role.id)
        await editor.load(store)
        editor.toggle("/dashboard/inventory", "can_edit", True)
        await editor.save(store)

        count = await db.execute(
            select(func.count()).select_from(Permission).where(Permission.role_id == role.id)
        )
        assert count.scalar_one() == 3

        reloaded = PermissionMatrixEditor(role.id)
        await reloaded.load(store)
        assert reloaded.row("/dashboard/inventory/products").can_edit is True
        assert reloaded.to_grants() == editor.to_grants()
