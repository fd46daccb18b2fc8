"""
tests.test_middleware

Request-context middleware helpers.
"""

from __future__ import annotations

import pytest

from route_composer.observability.middleware import api_version_from_path


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/v1/v3/fetch", "v3"),
        ("/v1/canary/fetch", "canary"),
        ("/healthz", None),
        ("/v1/", None),
    ],
)
def test_api_version_from_path(path: str, expected: str | None) -> None:
    assert api_version_from_path(path) == expected
