"""Client Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - api_base_url never ends with "/" (joined with paths in core/request_building.py)
    - session_timeout_seconds is strictly positive
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - MERIDIAN_ env prefix: the client is embedded in host processes that own
      their own unprefixed variables
    - Storage keys derived from one namespace so two clients in one process can
      keep separate sessions
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from meridian.core.domain_types import AuthProtocol


class Settings(BaseSettings):
    """Client settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="MERIDIAN_", case_sensitive=False,
    )

    # Backend
    api_base_url: str = "http://localhost:8080"
    request_timeout_seconds: float = 30.0

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    # Session
    session_timeout_seconds: float = 30 * 60
    storage_namespace: str = "meridian"

    # ADR: which login protocol is authoritative is unresolved with the
    # backend owner. Both are supported; token exchange is the default.
    auth_protocol: AuthProtocol = AuthProtocol.TOKEN

    @field_validator("session_timeout_seconds")
    @classmethod
    def check_positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("session_timeout_seconds must be positive")
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def token_key(self) -> str:
        return f"{self.storage_namespace}_auth_token"

    @property
    def user_key(self) -> str:
        return f"{self.storage_namespace}_user_data"

    @property
    def credentials_key(self) -> str:
        return f"{self.storage_namespace}_credentials"

    @property
    def expires_key(self) -> str:
        return f"{self.storage_namespace}_expires_at"


@lru_cache
def get_settings() -> Settings:
    return Settings()
