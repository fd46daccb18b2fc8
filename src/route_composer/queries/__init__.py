"""
route_composer.queries

Query composition: descriptors, capability registry, composer.
"""

from route_composer.queries.capabilities import ApiRegistry, ContentApi
from route_composer.queries.composer import PreparedQuery, QueryComposer
from route_composer.queries.descriptors import (
    DEFAULT_POST_QUERY,
    DEFAULT_QUERY,
    Locals,
    PathOptions,
    QueryDescriptor,
    RouterOptions,
)
from route_composer.queries.errors import (
    QueryCompositionError,
    UnknownApiVersionError,
    UnsupportedQueryError,
)

__all__ = [
    "ApiRegistry",
    "ContentApi",
    "DEFAULT_POST_QUERY",
    "DEFAULT_QUERY",
    "Locals",
    "PathOptions",
    "PreparedQuery",
    "QueryComposer",
    "QueryCompositionError",
    "QueryDescriptor",
    "RouterOptions",
    "UnknownApiVersionError",
    "UnsupportedQueryError",
]
