"""Configuration from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """mcp-devkit configuration loaded from environment variables."""

    # Project metadata directory, relative to the project root
    mcp_devkit_dir: str = ".mcp"

    # Per-rule time limit in seconds for asynchronous rules (unset = no limit)
    mcp_devkit_rule_timeout: float | None = 30.0

    # Directory of JSON Schemas for the schema rule (unset = bundled schemas)
    mcp_devkit_schemas_dir: str | None = None

    mcp_devkit_log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
