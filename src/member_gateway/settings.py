"""
member_gateway.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API and the remote clients.
- Hold one base URL per backend service the gateway fronts.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `MG_`), defaults suitable for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="MG_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "member-gateway"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Backend services. The gateway owns no storage; every entity lives behind one of these.
    package_service_url: str = "http://localhost:8081"
    update_service_url: str = "http://localhost:8082"
    device_service_url: str = "http://localhost:8083"
    deployment_service_url: str = "http://localhost:8084"
    component_service_url: str = "http://localhost:8085"

    # Single-attempt calls; the timeout is the only knob on remote latency.
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    # Upper bound on concurrent per-item resolutions when detailing a page of updates.
    detail_fanout_limit: int = Field(default=16, ge=1)

    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=200, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()
