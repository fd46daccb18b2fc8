"""
route_composer.content_clients.content_http

HTTP client boundary for a Ghost-style Content API.

Responsibilities:
- Translate processed query options into Content API requests.
- Forward the member scope (developer experiments) as a header.
- Build the versioned `ApiRegistry` the composer dispatches against.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any

import httpx

from route_composer.queries.capabilities import ApiRegistry, ApiResult, ContentApi, QueryFn
from route_composer.queries.descriptors import QueryType
from route_composer.queries.errors import InvalidQueryError
from route_composer.settings import Settings

MEMBER_HEADER = "X-Member-Id"

# Controller name -> Content API resource path segment.
CONTROLLER_RESOURCES: dict[str, str] = {
    "posts": "posts",
    "pages": "pages",
    "tags": "tags",
    "authors": "authors",
    "users": "authors",
}


class ContentApiClient:
    """
    One API version's worth of Content API calls over a shared `httpx.AsyncClient`.

    Errors are not translated: non-2xx responses raise `httpx.HTTPStatusError`
    and transport failures raise `httpx.TransportError`.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, version: str) -> None:
        self._settings = settings
        self._http = http
        self.version = version

    def _base_path(self, controller: str) -> str:
        try:
            resource = CONTROLLER_RESOURCES[controller]
        except KeyError:
            raise InvalidQueryError(f"unknown content controller {controller!r}") from None
        return f"/ghost/api/{self.version}/content/{resource}"

    async def browse(self, controller: str, options: Mapping[str, Any]) -> ApiResult:
        params, headers = self._request_parts(options)
        r = await self._http.get(f"{self._base_path(controller)}/", params=params, headers=headers)
        r.raise_for_status()
        return r.json()

    async def read(self, controller: str, options: Mapping[str, Any]) -> ApiResult:
        options = dict(options)
        # Ghost addresses single entities by id first, then by slug.
        if options.get("id") is not None:
            path = f"{self._base_path(controller)}/{options.pop('id')}/"
            options.pop("slug", None)
        elif options.get("slug"):
            path = f"{self._base_path(controller)}/slug/{options.pop('slug')}/"
        else:
            raise InvalidQueryError(f"read query on {controller!r} requires an 'id' or 'slug' option")

        params, headers = self._request_parts(options)
        r = await self._http.get(path, params=params, headers=headers)
        r.raise_for_status()
        return r.json()

    def _request_parts(self, options: Mapping[str, Any]) -> tuple[dict[str, str], dict[str, str]]:
        params: dict[str, str] = {}
        headers: dict[str, str] = {}

        for name, value in options.items():
            if name == "context":
                member_id = _member_id(value)
                if member_id:
                    headers[MEMBER_HEADER] = member_id
                continue
            encoded = _encode_param(value)
            if encoded is not None:
                params[name] = encoded

        if self._settings.content_api_key:
            params["key"] = self._settings.content_api_key
        return params, headers


def _encode_param(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def _member_id(context: Any) -> str | None:
    if not isinstance(context, Mapping):
        return None
    member = context.get("member")
    if not isinstance(member, Mapping):
        return None
    raw = member.get("uuid") or member.get("id")
    return str(raw) if raw else None


def build_content_api(client: ContentApiClient) -> ContentApi:
    handlers: dict[tuple[str, QueryType], QueryFn] = {}
    for controller in CONTROLLER_RESOURCES:
        handlers[(controller, "browse")] = partial(client.browse, controller)
        handlers[(controller, "read")] = partial(client.read, controller)
    return ContentApi(client.version, handlers)


def build_registry(*, settings: Settings, http: httpx.AsyncClient) -> ApiRegistry:
    return ApiRegistry(
        build_content_api(ContentApiClient(settings=settings, http=http, version=version))
        for version in settings.api_versions
    )


# --- Module Notes -----------------------------------------------------------
# base_url, timeouts and transport are owned by whoever creates the AsyncClient
# (see `api.app.create_app`); this module only shapes requests.
