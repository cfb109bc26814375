"""
tests.test_smoke

Smoke tests: the app boots in every service shape and serves its probes.
"""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from learnhub.api.app import create_app
from learnhub.settings import Settings
from tests.conftest import TEST_SECRET


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "all"}

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("service", "mounted", "absent"),
    [
        ("identity", "/me", "/courses"),
        ("courses", "/courses", "/me"),
        ("enrollments", "/enrollments/my-courses", "/courses"),
    ],
)
async def test_service_shapes_mount_only_their_routes(
    tmp_path: Path, service: str, mounted: str, absent: str
) -> None:
    settings = Settings(
        env="test",
        service=service,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'shape.db'}",
        jwt_secret=TEST_SECRET,
    )
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            # Mounted routes answer (401 without a token, 200 for public reads).
            assert (await client.get(mounted)).status_code in (200, 401)
            assert (await client.get(absent)).status_code == 404
            assert (await client.get("/healthz")).json()["service"] == service
