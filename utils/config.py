"""Configuration management for the burn explorer.

Settings come from environment variables with defaults that work out of the
box against Canton MainNet.  Values are validated when the config is built
so a bad deployment fails at startup, not on the first page load.
"""

from typing import Any, Dict
import os

DEFAULT_SCAN_URL = "https://scan.sv-1.global.canton.network.sync.global/api/scan"
ROUNDS_PATH = "/v0/open-and-issuing-mining-rounds"
UPDATES_PATH = "/v1/updates"

DATA_SOURCES = ("live", "demo")
LOG_FORMATS = ("text", "json")


class Config:
    """Base configuration class for organizing application settings."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all public config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary, overriding defaults key by key."""
        config = cls()
        for key, value in data.items():
            setattr(config, key, value)
        return config


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _choice_env(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    Environment variables:
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_PORT: API server port (default: 8000)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
        BURN_DATA_SOURCE: "live" (Scan API) or "demo" (static data)
        CANTON_SCAN_URL: Scan API base URL
        CANTON_ROUNDS_URL: Open mining rounds endpoint (default: derived from base)
        CANTON_UPDATES_URL: Updates endpoint (default: derived from base)
        CANTON_UPDATES_COUNT: Updates fetched per aggregation (default: 100)
        CANTON_TIMEOUT_SECONDS: Per-request upstream timeout (default: 30)
        DASHBOARD_SESSION_TTL: Idle seconds before a dashboard session expires
        DASHBOARD_MAX_SESSIONS: Maximum dashboard sessions kept in memory
    """

    def __init__(self) -> None:
        self.api_host = os.getenv("APP_HOST", "127.0.0.1")
        self.api_port = _int_env("APP_PORT", 8000, minimum=1)
        self.log_format = _choice_env("APP_LOG_FORMAT", "text", LOG_FORMATS)
        raw_origins = os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )
        self.data_source = _choice_env("BURN_DATA_SOURCE", "live", DATA_SOURCES)
        scan_url = os.getenv("CANTON_SCAN_URL", DEFAULT_SCAN_URL).rstrip("/")
        self.scan_url = scan_url
        self.rounds_url = os.getenv("CANTON_ROUNDS_URL", scan_url + ROUNDS_PATH)
        self.updates_url = os.getenv("CANTON_UPDATES_URL", scan_url + UPDATES_PATH)
        self.updates_count = _int_env("CANTON_UPDATES_COUNT", 100, minimum=1)
        self.timeout_seconds = _int_env("CANTON_TIMEOUT_SECONDS", 30, minimum=1)
        self.session_ttl = _int_env("DASHBOARD_SESSION_TTL", 1800, minimum=1)
        self.max_sessions = _int_env("DASHBOARD_MAX_SESSIONS", 1000, minimum=1)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
