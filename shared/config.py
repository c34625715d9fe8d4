"""
Shared configuration management for Permix.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PermixSettings(BaseSettings):
    """Engine settings, read from ``PERMIX_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PERMIX_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local", description="Deployment environment")
    log_level: str = Field(default="info", description="Log level name")

    # Readiness flag visibility; False for server-side rendering contexts
    client_context: bool = Field(default=True, description="Expose readiness through is_ready()")

    # Observability
    metrics_enabled: bool = Field(default=True, description="Record Prometheus metrics")

    @property
    def is_development(self) -> bool:
        return self.env.lower() == "development"


def get_settings(**overrides) -> PermixSettings:
    """Get engine settings, with optional explicit overrides."""
    return PermixSettings(**overrides)
