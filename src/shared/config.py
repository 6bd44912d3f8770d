"""Configuration management for the Shortcut MCP server.

Supports YAML configuration files and environment variable overrides.
Configuration is loaded once and cached for performance.

The Shortcut API token is deliberately absent: the server always starts
unconfigured and receives the token through the ``configure`` tool.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.app.shortcut.com/api/v3"


class ShortcutSettings(BaseSettings):
    """Shortcut REST API connection defaults."""
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API base URL used when configure omits one")
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="SHORTCUT_",
        env_file=".env",
        extra="ignore"
    )


class ServerSettings(BaseSettings):
    """MCP server identity and behaviour."""
    name: str = Field(default="shortcut-server")
    version: str = Field(default="0.1.0")
    enable_audit: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="SHORTCUT_MCP_SERVER_",
        env_file=".env",
        extra="ignore"
    )


class Settings(BaseSettings):
    """Main application settings."""
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    # Component settings
    shortcut: ShortcutSettings = Field(default_factory=ShortcutSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    model_config = SettingsConfigDict(
        env_prefix="SHORTCUT_MCP_",
        env_file=".env",
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        return cls(**load_yaml_config(path))


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file."""
    path = Path(path)
    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    config_path = os.environ.get("SHORTCUT_MCP_CONFIG_PATH", "config/settings.yaml")
    return Settings.from_yaml(config_path)
