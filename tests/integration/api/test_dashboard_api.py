"""Integration tests for dashboard navigation and guarded pages."""

from uuid import uuid4

import pytest
from httpx import AsyncClient


pytestmark = pytest.mark.integration


class TestNavigation:
    """Tests for GET /navigation."""

    async def test_viewer_sees_only_granted_pages(
        self, client: AsyncClient, viewer_headers
    ) -> None:
        response = await client.get("/api/v1/navigation", headers=viewer_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["has_full_access"] is False
        items = {item["path"]: item for item in body["items"]}
        assert set(items) == {"/dashboard", "/dashboard/billing", "/dashboard/profile"}
        assert [c["path"] for c in items["/dashboard/billing"]["children"]] == [
            "/dashboard/billing/entries"
        ]

    async def test_owner_sees_everything(self, client: AsyncClient, owner_headers) -> None:
        response = await client.get("/api/v1/navigation", headers=owner_headers)

        body = response.json()
        assert body["has_full_access"] is True
        assert len(body["items"]) == 8

    async def test_user_without_profile_sees_nothing(
        self, client: AsyncClient, make_headers
    ) -> None:
        response = await client.get("/api/v1/navigation", headers=make_headers(uuid4()))

        assert response.status_code == 200
        assert response.json()["items"] == []

    async def test_requires_authentication(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/navigation")
        assert response.status_code == 401


class TestPages:
    """Tests for guarded dashboard pages."""

    async def test_view_only_page(self, client: AsyncClient, viewer_headers) -> None:
        response = await client.get("/api/v1/dashboard/billing", headers=viewer_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["can_edit"] is False
        assert body["controls"] == []
        assert [c["path"] for c in body["children"]] == ["/dashboard/billing/entries"]

    async def test_editable_page(self, client: AsyncClient, owner_headers) -> None:
        response = await client.get("/api/v1/dashboard/billing", headers=owner_headers)

        body = response.json()
        assert body["can_edit"] is True
        assert body["controls"] == ["create", "update", "delete"]
        assert len(body["children"]) == 3

    async def test_overview(self, client: AsyncClient, viewer_headers) -> None:
        response = await client.get("/api/v1/dashboard", headers=viewer_headers)

        assert response.status_code == 200
        assert response.json()["path"] == "/dashboard"

    async def test_denied_page(self, client: AsyncClient, viewer_headers) -> None:
        response = await client.get("/api/v1/dashboard/config", headers=viewer_headers)

        assert response.status_code == 403
        body = response.json()
        assert body["page"] == "/dashboard/config"
        assert "reason" not in body

    async def test_child_does_not_inherit(self, client: AsyncClient, viewer_headers) -> None:
        response = await client.get(
            "/api/v1/dashboard/billing/invoice", headers=viewer_headers
        )
        assert response.status_code == 403

    async def test_unregistered_page(self, client: AsyncClient, owner_headers) -> None:
        response = await client.get("/api/v1/dashboard/nowhere", headers=owner_headers)
        assert response.status_code == 404

    async def test_unauthenticated(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/dashboard/billing")
        assert response.status_code == 401
