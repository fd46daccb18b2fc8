"""
route_composer.queries.descriptors

Value types describing what a route wants fetched.

Responsibilities:
- Define `QueryDescriptor` and the default (post) query templates.
- Define the per-request inputs: `PathOptions`, `RouterOptions`, `Locals`.
- Apply the `%s` slug placeholder to string options.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

QueryType = Literal["browse", "read"]

SLUG_PLACEHOLDER = "%s"


class QueryDescriptor(BaseModel):
    """
    One call against the content API: `api[controller][type](options)`.

    Instances are frozen; derive new ones via `with_options` instead of mutating
    `options` in place. Partial mappings are deep-defaulted on validation, so
    `QueryDescriptor.model_validate({"type": "read"})` is a complete descriptor.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: QueryType = "browse"
    resource: str = "posts"
    controller: str = "posts"
    options: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def coerce(cls, query: QueryDescriptor | Mapping[str, Any] | None) -> QueryDescriptor:
        if query is None:
            return cls()
        if isinstance(query, QueryDescriptor):
            return query.model_copy(deep=True)
        # Validation copies the top level only; nested option values are shared otherwise.
        return cls.model_validate(copy.deepcopy(dict(query)))

    def with_options(self, **updates: Any) -> QueryDescriptor:
        options = copy.deepcopy(self.options)
        options.update(updates)
        return self.model_copy(update={"options": options})

    def with_slug(self, slug: str | None) -> QueryDescriptor:
        return self.model_copy(update={"options": substitute_slug(self.options, slug)})


# Shared templates. Never mutated; every use goes through `coerce`/`with_options`.
DEFAULT_QUERY = QueryDescriptor()

# @deprecated: the `author` include will be removed once every theme uses `authors`.
DEFAULT_POST_QUERY = QueryDescriptor(
    options={"include": "author,authors,tags", "formats": "html"},
)


def substitute_slug(options: Mapping[str, Any], slug: str | None) -> dict[str, Any]:
    """
    Replace every `%s` in string-valued options with `slug`.

    Non-string values (numbers, lists, nested mappings) are deep-copied untouched.
    A missing slug substitutes the empty string.
    """
    # Empty string, never the text "None", when the route has no slug.
    replacement = slug if slug is not None else ""
    out: dict[str, Any] = {}
    for name, value in options.items():
        if isinstance(value, str):
            out[name] = value.replace(SLUG_PLACEHOLDER, replacement)
        else:
            out[name] = copy.deepcopy(value)
    return out


class PathOptions(BaseModel):
    """
    Options derived from the matched URL.

    Explicitly passed fields are tracked in `model_fields_set`, so
    `PathOptions(page=None)` still overrides the page option.
    """

    model_config = ConfigDict(extra="ignore")

    slug: str | None = None
    page: int | None = None
    limit: int | str | None = None


class RouterOptions(BaseModel):
    """Per-route query configuration: filter/order for posts plus named auxiliary data."""

    model_config = ConfigDict(extra="ignore")

    filter: str | None = None
    order: str | None = None
    data: dict[str, QueryDescriptor] | None = None


@dataclass(frozen=True, slots=True)
class Locals:
    """
    Request-scoped context handed down from the router layer.
    """

    api_version: str
    member: Mapping[str, Any] | None = None


# --- Module Notes -----------------------------------------------------------
# Descriptors are transient: built per fetch, discarded once the fetch settles.
