"""
tests.test_smoke

Smoke tests to validate the service can boot and serve its endpoints.

Responsibilities:
- Ensure the FastAPI app starts and health/readiness probes answer.
- Exercise `/v1/{api_version}/fetch` against a mocked Content API.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from route_composer.api.app import create_app
from route_composer.settings import Settings


def _content_api(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/tags/slug/news/"):
        return httpx.Response(200, json={"tags": [{"slug": "news", "name": "News"}]})
    if path.endswith("/tags/slug/missing/"):
        return httpx.Response(404, json={"errors": [{"message": "Resource not found"}]})
    if path.endswith("/posts/"):
        return httpx.Response(
            200,
            json={
                "posts": [{"id": "p1"}],
                "meta": {"pagination": {"page": int(request.url.params.get("page", 1))}},
            },
        )
    return httpx.Response(500)


@pytest_asyncio.fixture
async def client():
    app = create_app(
        settings=Settings(env="test", api_versions=["v3"]),
        transport=httpx.MockTransport(_content_api),
    )

    # httpx ASGITransport does not manage lifespan automatically; do it explicitly.
    await app.router.startup()
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        await app.router.shutdown()


def _tag_route(slug: str) -> dict:
    return {
        "path_options": {"slug": slug, "page": 2},
        "router_options": {
            "filter": "tags:'%s'",
            "data": {
                "tag": {
                    "type": "read",
                    "resource": "tags",
                    "controller": "tags",
                    "options": {"slug": "%s"},
                }
            },
        },
    }


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json() == {"status": "ready", "api_versions": ["v3"]}


@pytest.mark.asyncio
async def test_fetch_merges_route_data(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/v3/fetch", json=_tag_route("news"), headers={"x-request-id": "req-1"})

    assert r.status_code == 200
    assert r.headers["x-request-id"] == "req-1"
    body = r.json()
    assert body["posts"] == [{"id": "p1"}]
    assert body["meta"]["pagination"]["page"] == 2
    assert body["data"]["tag"] == [{"slug": "news", "name": "News"}]


@pytest.mark.asyncio
async def test_fetch_error_mapping(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/v9/fetch", json={})
    assert r.status_code == 404

    r = await client.post(
        "/v1/v3/fetch",
        json={"router_options": {"data": {"x": {"controller": "settings"}}}},
    )
    assert r.status_code == 400

    # Upstream 404 for the auxiliary tag fails the whole fetch.
    r = await client.post("/v1/v3/fetch", json=_tag_route("missing"))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_read_without_slug_is_a_client_error(client: httpx.AsyncClient) -> None:
    # No slug on the path: the tag read resolves to `slug=""` and cannot be addressed.
    body = _tag_route("")
    del body["path_options"]["slug"]

    r = await client.post("/v1/v3/fetch", json=body)
    assert r.status_code == 400
    assert "requires an 'id' or 'slug'" in r.json()["detail"]


@pytest.mark.asyncio
async def test_malformed_upstream_body_is_bad_gateway() -> None:
    def html_only(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    app = create_app(
        settings=Settings(env="test", api_versions=["v3"]),
        transport=httpx.MockTransport(html_only),
    )
    await app.router.startup()
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            r = await c.post("/v1/v3/fetch", json={})
    finally:
        await app.router.shutdown()

    assert r.status_code == 502
    assert r.json() == {"detail": "content API returned malformed JSON"}
