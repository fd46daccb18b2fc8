"""
route_composer.queries.composer

Builds and executes the queries a route needs, then merges the results.

Responsibilities:
- Turn path/router options into one primary `posts` query plus named auxiliary queries.
- Dispatch all queries concurrently and join on the full set (fail fast).
- Shape the combined results into a single response document.
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any

from route_composer.observability.logging import get_logger
from route_composer.queries.capabilities import ApiRegistry, ApiResult, QueryFn
from route_composer.queries.descriptors import (
    DEFAULT_POST_QUERY,
    Locals,
    PathOptions,
    QueryDescriptor,
    RouterOptions,
)

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PreparedQuery:
    """A fully defaulted descriptor bound to the function that will execute it."""

    descriptor: QueryDescriptor
    fn: QueryFn

    def run(self) -> Awaitable[ApiResult]:
        return self.fn(self.descriptor.options)


class QueryComposer:
    """
    Query composition over a versioned content API.

    `enable_developer_experiments` scopes every outgoing query to the calling
    member (`options.context.member`).
    """

    def __init__(self, registry: ApiRegistry, *, enable_developer_experiments: bool = False) -> None:
        self._registry = registry
        self._enable_developer_experiments = enable_developer_experiments

    @property
    def registry(self) -> ApiRegistry:
        return self._registry

    def prepare_query(
        self,
        query: QueryDescriptor | Mapping[str, Any] | None,
        slug: str | None,
        request_locals: Locals,
    ) -> PreparedQuery:
        api = self._registry.get(request_locals.api_version)

        # Fresh copy with defaults filled in; the caller's descriptor is never touched.
        descriptor = QueryDescriptor.coerce(query).with_slug(slug)

        if self._enable_developer_experiments:
            descriptor = descriptor.with_options(context={"member": request_locals.member})

        return PreparedQuery(descriptor=descriptor, fn=api.resolve(descriptor.controller, descriptor.type))

    def process_query(
        self,
        query: QueryDescriptor | Mapping[str, Any] | None,
        slug: str | None,
        request_locals: Locals,
    ) -> Awaitable[ApiResult]:
        """
        Returns the awaitable of the underlying API call, result shape unmodified.
        """
        return self.prepare_query(query, slug, request_locals).run()

    async def fetch_data(
        self,
        path_options: PathOptions | Mapping[str, Any] | None,
        router_options: RouterOptions | Mapping[str, Any] | None,
        request_locals: Locals,
    ) -> dict[str, Any]:
        path_opts = _coerce(PathOptions, path_options)
        router_opts = _coerce(RouterOptions, router_options)
        aux = router_opts.data or {}

        # Validate every query before dispatching any, so an unsupported entry
        # never leaves half the fan-out running.
        prepared: dict[str, PreparedQuery] = {
            "posts": self.prepare_query(build_post_query(path_opts, router_opts), path_opts.slug, request_locals)
        }
        for name, query in aux.items():
            prepared[name] = self.prepare_query(query, path_opts.slug, request_locals)

        log.debug(
            "fetch_data.dispatch",
            api_version=request_locals.api_version,
            queries=list(prepared),
        )

        names = list(prepared)
        tasks = [asyncio.ensure_future(prepared[name].run()) for name in names]
        try:
            settled = await asyncio.gather(*tasks)
        except Exception as e:
            # Siblings keep running; results of the others are discarded.
            log.warning("fetch_data.failed", api_version=request_locals.api_version, error=type(e).__name__)
            raise
        results = dict(zip(names, settled))

        return format_response(results, {name: prepared[name].descriptor for name in aux})


def build_post_query(path_options: PathOptions, router_options: RouterOptions) -> QueryDescriptor:
    """
    Primary posts query: the default post template overlaid with router
    filter/order and path page/limit.
    """
    updates: dict[str, Any] = {}
    if router_options.filter:
        updates["filter"] = router_options.filter
    if router_options.order:
        updates["order"] = router_options.order

    # Presence, not truthiness: an explicit None still overrides.
    for field in ("page", "limit"):
        if field in path_options.model_fields_set:
            updates[field] = getattr(path_options, field)

    return DEFAULT_POST_QUERY.with_options(**updates)


def format_response(
    results: Mapping[str, ApiResult],
    aux: Mapping[str, QueryDescriptor],
) -> dict[str, Any]:
    response = copy.deepcopy(results["posts"])

    if aux:
        response["data"] = {}
        for name, descriptor in aux.items():
            if descriptor.type == "browse":
                response["data"][name] = results[name]
            else:
                # Single-entity reads arrive enveloped, e.g. {"tags": [...]}; a missing key yields None.
                response["data"][name] = results[name].get(descriptor.resource)

    return response


def _coerce(model: type, value: Any) -> Any:
    if value is None:
        return model()
    if isinstance(value, model):
        return value
    return model.model_validate(value)


# --- Module Notes -----------------------------------------------------------
# No retries, caching or error translation live here: downstream failures surface
# unchanged and the HTTP layer decides how to present them.
