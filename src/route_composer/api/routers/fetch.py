"""
route_composer.api.routers.fetch

Route data endpoint.

Responsibilities:
- Accept path/router options for one matched route.
- Delegate to `QueryComposer.fetch_data` and return the merged response.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from route_composer.api.deps import composer_dep
from route_composer.queries.composer import QueryComposer
from route_composer.queries.descriptors import Locals, PathOptions, RouterOptions

router = APIRouter(prefix="/v1", tags=["fetch"])


class FetchRequest(BaseModel):
    path_options: PathOptions = Field(default_factory=PathOptions)
    router_options: RouterOptions = Field(default_factory=RouterOptions)
    member: dict[str, Any] | None = None


@router.post("/{api_version}/fetch")
async def fetch(
    api_version: str,
    body: FetchRequest,
    composer: QueryComposer = Depends(composer_dep),
) -> dict[str, Any]:
    return await composer.fetch_data(
        body.path_options,
        body.router_options,
        Locals(api_version=api_version, member=body.member),
    )
