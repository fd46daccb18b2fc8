"""
route_composer.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) listing the API versions the composer can reach.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from route_composer.api.deps import composer_dep
from route_composer.queries.composer import QueryComposer

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(composer: QueryComposer = Depends(composer_dep)) -> dict[str, Any]:
    return {"status": "ready", "api_versions": composer.registry.versions}
