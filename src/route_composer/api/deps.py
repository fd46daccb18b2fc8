"""
route_composer.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide the shared composer to routers.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from route_composer.queries.composer import QueryComposer


def composer_dep(request: Request) -> QueryComposer:
    # The composer is created on app startup in `route_composer.api.app.create_app`.
    return request.app.state.composer  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Per-request resources beyond the composer (tracing spans, etc.) belong here too.
