"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``QRMINT_``, nested via ``__``)
2. YAML config file (``QRMINT_CONFIG_PATH`` env var)
3. Defaults defined here
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

# ---------------------------------------------------------------------------
# Enums for validated choices
# ---------------------------------------------------------------------------


class Environment(enum.StrEnum):
    """Deployment mode. Controls how much error detail reaches clients."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class ServerConfig(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(
        env_prefix="QRMINT_SERVER__",
        case_sensitive=False,
    )

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000


class DatabaseConfig(BaseSettings):
    """Database settings.

    ``dsn`` is the datastore URL and ``key`` the credential used to reach it.
    When ``key`` is set it replaces the password component of the URL.
    """

    model_config = SettingsConfigDict(
        env_prefix="QRMINT_DB__",
        case_sensitive=False,
    )

    dsn: str = Field(
        default="sqlite+aiosqlite:///./qrmint.db",
        description="Async database connection string",
    )
    key: str = Field(default="", description="Database credential")
    max_idle_connections: int = 5
    max_open_connections: int = 10
    debug_sql: bool = False

    def resolved_dsn(self) -> str:
        """Return the connection string with ``key`` applied as the password."""
        if not self.key:
            return self.dsn
        url = make_url(self.dsn).set(password=self.key)
        return url.render_as_string(hide_password=False)


class CORSConfig(BaseSettings):
    """Cross-origin settings for the browser frontend."""

    model_config = SettingsConfigDict(
        env_prefix="QRMINT_CORS__",
        case_sensitive=False,
    )

    frontend_url: str = "http://localhost:5173"
    allowed_origins: list[str] = Field(default_factory=list)

    def origins(self) -> list[str]:
        """Full allow-list: the frontend URL followed by any extra origins."""
        merged = [self.frontend_url, *self.allowed_origins]
        return [o.rstrip("/") for o in merged if o]


class RateLimitConfig(BaseSettings):
    """Per-client request cap on the API path prefix."""

    model_config = SettingsConfigDict(
        env_prefix="QRMINT_RATE_LIMIT__",
        case_sensitive=False,
    )

    enabled: bool = True
    max_requests: int = 100
    window_seconds: int = 15 * 60
    path_prefix: str = "/api"


class MetricsConfig(BaseSettings):
    """Prometheus metrics settings."""

    model_config = SettingsConfigDict(
        env_prefix="QRMINT_METRICS__",
        case_sensitive=False,
    )

    enabled: bool = True


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``QRMINT_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="QRMINT_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    environment: Environment = Environment.DEVELOPMENT
    require_credentials: bool = False
    log_level: str = "INFO"
    version: str = "0.1.0"
    config_path: str = ""

    server: ServerConfig = Field(default_factory=ServerConfig)
    db: DatabaseConfig = Field(default_factory=DatabaseConfig)
    cors: CORSConfig = Field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                values[key] = {**val, **values[key]}
        return values

    @model_validator(mode="after")
    def _check_credentials(self) -> Self:
        """Refuse to build a hardened config without datastore URL and key."""
        dsn_given = "dsn" in self.db.model_fields_set and bool(self.db.dsn)
        if self.require_credentials and not (dsn_given and self.db.key):
            msg = "QRMINT_DB__DSN and QRMINT_DB__KEY are required when require_credentials is set"
            raise ValueError(msg)
        return self

    @property
    def is_production(self) -> bool:
        """Whether internal error details must be hidden from clients."""
        return self.environment == Environment.PRODUCTION

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
