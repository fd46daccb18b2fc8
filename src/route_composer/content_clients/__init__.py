"""
route_composer.content_clients

Content API client package.

Responsibilities:
- Provide the HTTP-backed implementation of the composer's capability registry.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The composer depends on `queries.capabilities`, never on HTTP directly.
