"""
route_composer.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., content API key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    - Strict env-driven configuration
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(env_prefix="ROUTE_COMPOSER_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "route-composer"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Scopes every outgoing query to the current member's visibility rules.
    enable_developer_experiments: bool = False

    # Content API (downstream)
    content_api_base_url: str = "http://localhost:2368"
    content_api_key: str | None = Field(default=None, repr=False)
    api_versions: list[str] = Field(default_factory=lambda: ["v2", "v3"])
    http_timeout_seconds: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The composer never reads settings directly; the app factory threads the
# experiments flag into `QueryComposer` explicitly.
