"""Integration tests for role management endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.permissions.models import Role
from tests.factories import create_profile, create_role


pytestmark = pytest.mark.integration

ROLES = "/api/v1/roles"


class TestListRoles:
    """Tests for GET /roles."""

    async def test_owner_lists_roles(
        self, client: AsyncClient, owner_headers, viewer_role: Role
    ) -> None:
        response = await client.get(ROLES, headers=owner_headers)

        assert response.status_code == 200
        names = [r["name"] for r in response.json()["items"]]
        assert names == ["Owner", "Viewer"]

    async def test_requires_page_access(self, client: AsyncClient, viewer_headers) -> None:
        response = await client.get(ROLES, headers=viewer_headers)

        assert response.status_code == 403
        body = response.json()
        assert body["type"].endswith("/errors/page_access_denied")
        assert body["page"] == "/dashboard/users/roles"
        assert body["action"] == "view"

    async def test_requires_authentication(self, client: AsyncClient) -> None:
        response = await client.get(ROLES)

        assert response.status_code == 401
        assert response.json()["type"].endswith("/errors/missing_token")

    async def test_invalid_token(self, client: AsyncClient) -> None:
        response = await client.get(ROLES, headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401


class TestCreateRole:
    """Tests for POST /roles."""

    async def test_create(self, client: AsyncClient, owner_headers) -> None:
        response = await client.post(
            ROLES,
            json={"name": "Kitchen", "description": "Kitchen staff"},
            headers=owner_headers,
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Kitchen"

    async def test_duplicate_name(self, client: AsyncClient, owner_headers) -> None:
        response = await client.post(ROLES, json={"name": "Owner"}, headers=owner_headers)

        assert response.status_code == 409
        assert response.json()["type"].endswith("/errors/role_exists")

    async def test_view_only_cannot_create(
        self, db: AsyncSession, client: AsyncClient, make_headers
    ) -> None:
        role = await create_role(db, "Reader", [("/dashboard/users/roles", True, False)])
        profile = await create_profile(db, role)
        headers = make_headers(profile.id)

        listed = await client.get(ROLES, headers=headers)
        created = await client.post(ROLES, json={"name": "X"}, headers=headers)

        assert listed.status_code == 200
        assert created.status_code == 403
        assert created.json()["action"] == "edit"


class TestUpdateDeleteRole:
    """Tests for PATCH and DELETE /roles/{id}."""

    async def test_rename(self, db: AsyncSession, client: AsyncClient, owner_headers) -> None:
        role = await create_role(db, "Kitchen")

        response = await client.patch(
            f"{ROLES}/{role.id}", json={"name": "Galley"}, headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Galley"

    async def test_delete_unused(
        self, db: AsyncSession, client: AsyncClient, owner_headers
    ) -> None:
        role = await create_role(db, "Temporary")

        response = await client.delete(f"{ROLES}/{role.id}", headers=owner_headers)

        assert response.status_code == 204
        assert await db.get(Role, role.id) is None

    async def test_delete_in_use(
        self, client: AsyncClient, owner_headers, viewer_role: Role, viewer
    ) -> None:
        response = await client.delete(f"{ROLES}/{viewer_role.id}", headers=owner_headers)

        assert response.status_code == 409
        body = response.json()
        assert body["type"].endswith("/errors/role_in_use")
        assert body["permission_count"] == 4
        assert body["profile_count"] == 1

    async def test_missing_role(self, client: AsyncClient, owner_headers) -> None:
        response = await client.patch(
            f"{ROLES}/00000000-0000-0000-0000-000000000000",
            json={"name": "Ghost"},
            headers=owner_headers,
        )
        assert response.status_code == 404
