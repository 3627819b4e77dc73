"""
HTTP Surface Test Suite.

Drives the FastAPI application with a stubbed statistics service, covering
authentication, username resolution and validation, error mapping and the
preview image endpoint.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from httpx import ASGITransport, AsyncClient

from app import create_app
from config import settings
from miners.errors import NotFound, RemoteAPIError

AUTH = {"Authorization": "Bearer t0k3n", "X-GitHub-Username": "OctoCat"}
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture
def stats_service(empty_stats):
    """Statistics service returning an empty year."""
    return AsyncMock(return_value=empty_stats)


@pytest.fixture
def renderer():
    """Renderer stub returning fixed PNG bytes."""
    stub = Mock()
    stub.render.return_value = PNG_BYTES
    return stub


@pytest.fixture
def client(stats_service, renderer):
    """Async HTTP client bound to the application."""
    app = create_app(stats_service=stats_service, renderer=renderer)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_health(client):
    async with client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_stats_requires_session(client, stats_service):
    async with client:
        response = await client.get("/api/github/stats")

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized. Please sign in with GitHub."}
    stats_service.assert_not_awaited()


@pytest.mark.asyncio
async def test_stats_defaults_to_session_user(client, stats_service):
    async with client:
        response = await client.get("/api/github/stats", headers=AUTH)

    assert response.status_code == 200
    payload = response.json()
    assert payload["totalCommits"] == 0
    assert len(payload["achievements"]) == 7
    stats_service.assert_awaited_once_with("OctoCat", "t0k3n", True)


@pytest.mark.asyncio
async def test_stats_for_other_user_is_not_own_profile(client, stats_service):
    async with client:
        response = await client.get(
            "/api/github/stats", params={"username": "torvalds"}, headers=AUTH
        )

    assert response.status_code == 200
    stats_service.assert_awaited_once_with("torvalds", "t0k3n", False)


@pytest.mark.asyncio
async def test_own_profile_comparison_ignores_case(client, stats_service):
    async with client:
        await client.get("/api/github/stats", params={"username": "octocat"}, headers=AUTH)

    stats_service.assert_awaited_once_with("octocat", "t0k3n", True)


@pytest.mark.asyncio
async def test_stats_requires_a_username(client):
    async with client:
        response = await client.get(
            "/api/github/stats", headers={"Authorization": "Bearer t0k3n"}
        )

    assert response.status_code == 400
    assert response.json() == {"error": "Username is required."}


@pytest.mark.asyncio
async def test_stats_rejects_invalid_username(client, stats_service):
    async with client:
        response = await client.get(
            "/api/github/stats", params={"username": "-bad-"}, headers=AUTH
        )

    assert response.status_code == 400
    stats_service.assert_not_awaited()


@pytest.mark.asyncio
async def test_stats_unknown_user(client, stats_service):
    stats_service.side_effect = NotFound("user")

    async with client:
        response = await client.get("/api/github/stats", headers=AUTH)

    assert response.status_code == 404
    assert response.json() == {"error": "GitHub user not found"}


@pytest.mark.asyncio
async def test_stats_remote_failure(client, stats_service):
    stats_service.side_effect = RemoteAPIError("Service Unavailable", 503)

    async with client:
        response = await client.get("/api/github/stats", headers=AUTH)

    assert response.status_code == 500
    assert response.json() == {"error": "GitHub API error: Service Unavailable"}


@pytest.mark.asyncio
async def test_preview_image(client, stats_service, renderer):
    async with client:
        response = await client.get("/api/og/octocat/3", headers=AUTH)

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content == PNG_BYTES
    stats_service.assert_awaited_once_with("octocat", "t0k3n", True)
    content, _ = renderer.render.call_args.args
    assert content.title == "All Day Coder"


@pytest.mark.asyncio
async def test_preview_uses_fallback_token_without_session(
    client, stats_service, monkeypatch
):
    monkeypatch.setattr(settings, "github_token", None)

    async with client:
        response = await client.get("/api/og/octocat/1")

    assert response.status_code == 200
    stats_service.assert_awaited_once_with("octocat", None, False)


@pytest.mark.asyncio
async def test_preview_failure_is_generic_500(client, stats_service):
    stats_service.side_effect = RemoteAPIError("timeout")

    async with client:
        response = await client.get("/api/og/octocat/2")

    assert response.status_code == 500
    assert response.text == "Error generating image"


@pytest.mark.asyncio
@pytest.mark.parametrize("slide", ["0", "9", "abc"])
async def test_preview_slide_out_of_range(client, slide):
    async with client:
        response = await client.get(f"/api/og/octocat/{slide}")

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_share_card(client, stats_service, renderer):
    async with client:
        response = await client.get("/api/og")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content == PNG_BYTES
    stats_service.assert_not_awaited()
    content, year = renderer.render.call_args.args
    assert content.title == str(year)
    assert content.description == "Your year in code"


@pytest.mark.asyncio
async def test_share_card_failure_is_generic_500(client, renderer):
    renderer.render.side_effect = RuntimeError("no fonts")

    async with client:
        response = await client.get("/api/og")

    assert response.status_code == 500
    assert response.text == "Error generating image"
