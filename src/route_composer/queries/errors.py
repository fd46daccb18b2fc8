"""
route_composer.queries.errors

Errors raised while composing or addressing queries.

Downstream API failures are never wrapped; they propagate as raised.
"""

from __future__ import annotations


class QueryCompositionError(Exception):
    """Base class for composer-level failures."""


class UnknownApiVersionError(QueryCompositionError):
    def __init__(self, version: str, available: list[str]) -> None:
        super().__init__(
            f"unknown API version {version!r} (available: {', '.join(available) or 'none'})"
        )
        self.version = version
        self.available = available


class UnsupportedQueryError(QueryCompositionError):
    def __init__(self, *, version: str, controller: str, type: str) -> None:
        super().__init__(
            f"unsupported query {controller}.{type} for API version {version!r}"
        )
        self.version = version
        self.controller = controller
        self.type = type


class InvalidQueryError(QueryCompositionError):
    """A resolved query whose options cannot address anything (e.g. a read with no id or slug)."""
