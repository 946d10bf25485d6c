"""
Shared configuration management for the Access Policy Engine.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="ACCESS_POLICY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    log_json: bool = Field(default=True)


class EngineConfig(BaseConfig):
    """Policy engine configuration."""

    service_name: str = Field(default="policy_engine")

    # Emit a debug log line for every decision made through PolicyEngine
    trace_decisions: bool = Field(default=False)


def get_config(**overrides) -> EngineConfig:
    """Get engine configuration from the environment."""
    return EngineConfig(**overrides)
