"""
route_composer.observability.middleware

HTTP middleware for request-scoped logging context.

Responsibilities:
- Generate/propagate request IDs.
- Bind request metadata (including the requested content API version) into
  structlog contextvars.
"""

from __future__ import annotations

import re
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Route params are not resolved yet when middleware runs; match the versioned prefix directly.
_VERSIONED_PATH = re.compile(r"^/v1/(?P<api_version>[^/]+)/")


def api_version_from_path(path: str) -> str | None:
    match = _VERSIONED_PATH.match(path)
    return match.group("api_version") if match else None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds `request_id`, `path`, `method` and, for versioned routes, `api_version`
    on every log line of a request; echoes the request id in `x-request-id`.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        context = {
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
        }
        api_version = api_version_from_path(request.url.path)
        if api_version is not None:
            context["api_version"] = api_version

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(**context)
        try:
            response: Response = await call_next(request)
        finally:
            # Contextvars must not leak between requests sharing a worker.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response
