"""
tests.conftest

Shared fixtures: an in-memory content API that records every dispatched query.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from route_composer.queries.capabilities import ApiRegistry, ContentApi
from route_composer.queries.composer import QueryComposer
from route_composer.queries.descriptors import Locals


class FakeContentApi:
    """
    Canned results keyed by `(controller, type)`; values may be dicts or
    exceptions (raised when dispatched). Every call is recorded in order.
    """

    def __init__(self, results: dict[tuple[str, str], Any] | None = None) -> None:
        self.results: dict[tuple[str, str], Any] = dict(results or {})
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.delays: dict[tuple[str, str], float] = {}
        self.completed: list[tuple[str, str]] = []

    def handler(self, controller: str, type: str):
        async def _call(options: dict[str, Any]) -> dict[str, Any]:
            self.calls.append((controller, type, options))
            delay = self.delays.get((controller, type))
            if delay:
                await asyncio.sleep(delay)
            self.completed.append((controller, type))
            result = self.results.get((controller, type), {controller: []})
            if isinstance(result, BaseException):
                raise result
            return result

        return _call

    def registry(self, version: str = "v3") -> ApiRegistry:
        pairs = [
            (controller, type)
            for controller in ("posts", "pages", "tags", "authors", "users")
            for type in ("browse", "read")
        ]
        return ApiRegistry([ContentApi(version, {p: self.handler(*p) for p in pairs})])

    def options_for(self, controller: str, type: str) -> list[dict[str, Any]]:
        return [opts for c, t, opts in self.calls if (c, t) == (controller, type)]


@pytest.fixture
def fake_api() -> FakeContentApi:
    return FakeContentApi(
        {
            ("posts", "browse"): {
                "posts": [{"id": "p1", "title": "Hello"}],
                "meta": {"pagination": {"page": 1, "limit": 15, "pages": 1, "total": 1}},
            },
        }
    )


@pytest.fixture
def composer(fake_api: FakeContentApi) -> QueryComposer:
    return QueryComposer(fake_api.registry())


@pytest.fixture
def locals_v3() -> Locals:
    return Locals(api_version="v3")
