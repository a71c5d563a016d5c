"""Integration tests for health and info endpoints."""

import pytest
from httpx import AsyncClient

from backoffice import __version__


pytestmark = pytest.mark.integration


class TestHealth:
    async def test_liveness(self, client: AsyncClient) -> None:
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    async def test_readiness(self, client: AsyncClient) -> None:
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"] == {"database": "ok"}

    async def test_info(self, client: AsyncClient) -> None:
        response = await client.get("/info")

        body = response.json()
        assert body["version"] == __version__
        assert body["permission_strategy"] == "strict"

    async def test_request_id_is_echoed(self, client: AsyncClient) -> None:
        response = await client.get("/health/live", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"
