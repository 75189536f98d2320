from __future__ import annotations

from enum import Enum
from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import AliasChoices, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "aikido_mcp"
ENV_PREFIX = "AIKIDO_MCP_"


class Region(str, Enum):
    """Aikido data region."""

    EU = "eu"
    US = "us"
    ME = "me"


REGION_BASE_URLS: dict[Region, str] = {
    Region.EU: "https://app.aikido.dev/api",
    Region.US: "https://app.us.aikido.dev/api",
    Region.ME: "https://app.me.aikido.dev/api",
}


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_log_dir)


class DirectoryConfig(BaseSettings):
    """Directory configuration."""

    model_config = SettingsConfigDict(env_prefix=f"{ENV_PREFIX}DIRECTORIES__")

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for aikido_mcp files",
    )

    @property
    def logs_dir(self) -> Path:
        """Logs directory for the JSON lines server log."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class CredentialsConfig(BaseSettings):
    """OAuth client credentials.

    Read from ``AIKIDO_CLIENT_ID`` / ``AIKIDO_API_KEY`` or the nested
    ``AIKIDO_MCP_CREDENTIALS__CLIENT_ID`` / ``AIKIDO_MCP_CREDENTIALS__CLIENT_SECRET``.
    Missing values are tolerated here and reported on first API use.
    """

    model_config = SettingsConfigDict(populate_by_name=True)

    client_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(f"{ENV_PREFIX}CREDENTIALS__CLIENT_ID", "AIKIDO_CLIENT_ID"),
        description="Aikido OAuth client id",
    )

    client_secret: str | None = Field(
        default=None,
        validation_alias=AliasChoices(f"{ENV_PREFIX}CREDENTIALS__CLIENT_SECRET", "AIKIDO_API_KEY"),
        description="Aikido OAuth client secret (API key)",
    )

    @property
    def is_complete(self) -> bool:
        return bool(self.client_id and self.client_secret)


class ApiConfig(BaseSettings):
    """Remote API location."""

    model_config = SettingsConfigDict(env_prefix=f"{ENV_PREFIX}API__")

    region: Region = Field(
        default=Region.EU,
        description="Data region (eu, us, me)",
    )

    base_url: str | None = Field(
        default=None,
        description="Explicit API base URL; overrides region",
    )

    @computed_field
    @property
    def resolved_base_url(self) -> str:
        """Base URL actually used for requests."""
        return (self.base_url or REGION_BASE_URLS[self.region]).rstrip("/")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix=f"{ENV_PREFIX}LOGGING__")

    logger_name: str = Field(
        default=APP_NAME,
        description="Root logger name for the application",
    )

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    console_output: bool = Field(
        default=True,
        description="Write human-readable logs to stderr",
    )

    json_file: bool = Field(
        default=False,
        description="Append JSON lines logs to <home>/logs/server.jsonl",
    )


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with AIKIDO_MCP_ prefix.
    Use double underscore for nested config: AIKIDO_MCP_API__REGION

    Example env vars:
        # Required (checked on first API call, not at startup)
        export AIKIDO_CLIENT_ID=xxxxxxxx
        export AIKIDO_API_KEY=xxxxxxxx

        # Optional (with defaults)
        export AIKIDO_MCP_API__REGION=us
        export AIKIDO_MCP_API__BASE_URL=https://app.aikido.dev/api
        export AIKIDO_MCP_LOGGING__LEVEL=DEBUG
        export AIKIDO_MCP_LOGGING__JSON_FILE=true
        export AIKIDO_MCP_DIRECTORIES__HOME=/custom/path
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)

    @computed_field
    @property
    def log_file(self) -> Path | None:
        """JSON lines log path, or None when file logging is off."""
        if not self.logging.json_file:
            return None
        return self.directories.logs_dir / "server.jsonl"
