from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_TRUE_VALUE = "true"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SECURE_API_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000

    # Proxy
    trust_proxy: bool = False

    # Logging
    log_level: str = "info"
    log_format: str = "json"
    log_dir: Optional[str] = None
    log_backup_count: int = 14

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Request limits
    rate_limit: str = "100 per 15 minutes"
    trusted_ips: str = ""
    max_body_bytes: int = 10 * 1024
    max_message_length: int = 100

    @field_validator("trust_proxy", mode="before")
    @classmethod
    def coerce_trust_proxy(cls, v) -> bool:
        """Only the literal "true" enables trust; anything else disables it without failing."""
        if isinstance(v, bool):
            return v
        return str(v) == _TRUE_VALUE

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def trusted_ip_list(self) -> List[str]:
        return [ip.strip() for ip in self.trusted_ips.split(",") if ip.strip()]


def load_settings() -> Settings:
    """Read settings from the environment without caching."""
    return Settings()


@lru_cache
def get_settings() -> Settings:
    return Settings()


# Module-level singleton for app wiring
settings = get_settings()
