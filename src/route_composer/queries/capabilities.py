"""
route_composer.queries.capabilities

Explicit capability surface of the content API.

Responsibilities:
- Map `(controller, type)` pairs to async query functions per API version.
- Fail with a clear error for unknown versions or unsupported pairs.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from route_composer.queries.descriptors import QueryType
from route_composer.queries.errors import UnknownApiVersionError, UnsupportedQueryError

ApiResult = dict[str, Any]
QueryFn = Callable[[dict[str, Any]], Awaitable[ApiResult]]


class ContentApi:
    """
    One version of the content API, e.g. `v3`.

    `handlers` maps `("tags", "read")` style keys to coroutine functions that
    accept the processed options and return `{<resource>: ..., "meta": ...}`.
    """

    def __init__(self, version: str, handlers: Mapping[tuple[str, QueryType], QueryFn]) -> None:
        self.version = version
        self._handlers = dict(handlers)

    def resolve(self, controller: str, type: str) -> QueryFn:
        fn = self._handlers.get((controller, type))  # type: ignore[arg-type]
        if fn is None:
            raise UnsupportedQueryError(version=self.version, controller=controller, type=type)
        return fn

    def supports(self, controller: str, type: str) -> bool:
        return (controller, type) in self._handlers

    @property
    def controllers(self) -> list[str]:
        return sorted({controller for controller, _ in self._handlers})


class ApiRegistry:
    """Versioned registry of `ContentApi` surfaces, indexed by version identifier."""

    def __init__(self, apis: Iterable[ContentApi]) -> None:
        self._apis = {api.version: api for api in apis}

    def get(self, version: str) -> ContentApi:
        try:
            return self._apis[version]
        except KeyError:
            raise UnknownApiVersionError(version, self.versions) from None

    @property
    def versions(self) -> list[str]:
        return sorted(self._apis)


# --- Module Notes -----------------------------------------------------------
# Production handlers come from `content_clients.content_http.build_registry`;
# tests register plain coroutine functions.
