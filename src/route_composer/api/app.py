"""
route_composer.api.app

FastAPI app factory for the route composer service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose the shared Content API HTTP client.
- Map composer and upstream errors to HTTP responses.
"""

from __future__ import annotations

import json

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_502_BAD_GATEWAY,
)

from route_composer.api.routers.fetch import router as fetch_router
from route_composer.api.routers.health import router as health_router
from route_composer.content_clients.content_http import build_registry
from route_composer.observability.logging import configure_logging, get_logger
from route_composer.observability.middleware import RequestContextMiddleware
from route_composer.queries.composer import QueryComposer
from route_composer.queries.errors import (
    InvalidQueryError,
    UnknownApiVersionError,
    UnsupportedQueryError,
)
from route_composer.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    app = FastAPI(
        title="Route Composer",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(fetch_router)
    _register_error_handlers(app)

    @app.on_event("startup")
    async def _startup() -> None:
        log.info("startup", env=settings.env, api_versions=settings.api_versions)
        # One pooled client per process; `transport` lets tests swap in a MockTransport.
        http = httpx.AsyncClient(
            base_url=settings.content_api_base_url,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )
        app.state.http = http
        app.state.composer = QueryComposer(
            build_registry(settings=settings, http=http),
            enable_developer_experiments=settings.enable_developer_experiments,
        )

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        http = getattr(app.state, "http", None)
        if http is not None:
            await http.aclose()
        log.info("shutdown")

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(UnknownApiVersionError)
    async def _unknown_version(_: Request, exc: UnknownApiVersionError) -> JSONResponse:
        return JSONResponse(status_code=HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(UnsupportedQueryError)
    async def _unsupported(_: Request, exc: UnsupportedQueryError) -> JSONResponse:
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(InvalidQueryError)
    async def _bad_query(_: Request, exc: InvalidQueryError) -> JSONResponse:
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(json.JSONDecodeError)
    async def _upstream_malformed(_: Request, exc: json.JSONDecodeError) -> JSONResponse:
        # Raised by `Response.json()` when the content API answers with a non-JSON body.
        log.warning("upstream.malformed", error=str(exc))
        return JSONResponse(status_code=HTTP_502_BAD_GATEWAY, content={"detail": "content API returned malformed JSON"})

    @app.exception_handler(httpx.HTTPStatusError)
    async def _upstream_status(_: Request, exc: httpx.HTTPStatusError) -> JSONResponse:
        # Upstream status passes through (e.g. 404 for an unknown tag slug).
        log.warning(
            "upstream.error",
            status_code=exc.response.status_code,
            path=exc.request.url.path,
        )
        return JSONResponse(
            status_code=exc.response.status_code,
            content={"detail": f"content API responded {exc.response.status_code}"},
        )

    @app.exception_handler(httpx.TransportError)
    async def _upstream_unreachable(_: Request, exc: httpx.TransportError) -> JSONResponse:
        log.warning("upstream.unreachable", error=type(exc).__name__)
        return JSONResponse(status_code=HTTP_502_BAD_GATEWAY, content={"detail": "content API unreachable"})


# --- Module Notes -----------------------------------------------------------
# App composition stays here; query logic stays in `route_composer.queries`.
