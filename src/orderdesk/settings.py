"""
orderdesk.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven settings (prefix `ORDERDESK_`), defaults safe for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="ORDERDESK_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "orderdesk-api"
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "orderdesk"
    jwt_audience: str = "orderdesk-api"
    jwt_secret: str = Field(default="dev-secret-change-me-0123456789abcdef", repr=False)

    # Response annotation
    api_path_prefix: str = "api/"
    # Exact `application/json` only; False also accepts parameters like `; charset=utf-8`.
    json_content_type_strict: bool = True

    # Admin guard
    admin_path_prefixes: list[str] = Field(default_factory=lambda: ["api/admin/"])


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Path prefixes are written without a leading slash (`api/`), matching how
# `orderdesk.middleware.paths.path_matches` normalizes request paths.
