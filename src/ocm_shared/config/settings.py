"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)

Mock mode, auth bypass and debug output are resolved here once at startup
and handed to the client factory, the stream controller and the auth
dependency when they are constructed. Nothing reads them from the process
environment while serving a request.
"""

from enum import Enum
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class KubernetesSettings(BaseSettings):
    """Hub cluster API access.

    When ``in_cluster`` is left unset the client factory tries the service
    account first and falls back to the kubeconfig.
    """

    model_config = SettingsConfigDict(env_prefix="KUBE_", populate_by_name=True)

    kubeconfig: str | None = Field(
        default=None,
        validation_alias=AliasChoices("KUBE_KUBECONFIG", "KUBECONFIG"),
        description="Path to a kubeconfig file",
    )
    context: str | None = Field(default=None, description="Kubeconfig context to use")
    in_cluster: bool | None = Field(
        default=None,
        description="Force (true) or skip (false) in-cluster configuration",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for list/get requests against the API server",
    )
    watch_timeout_seconds: int = Field(
        default=1800,
        gt=0,
        description="Server-side lifetime of a watch; the stream session ends when it expires",
    )


class DashboardSettings(BaseSettings):
    """Dashboard behaviour switches."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    use_mock: bool = Field(default=False, description="Serve fixture data instead of a hub")
    bypass_auth: bool = Field(default=False, description="Skip bearer token validation")
    debug: bool = Field(default=False, description="Verbose debug logging")
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="CORS allowed origins",
    )


class StreamingSettings(BaseSettings):
    """Server-Sent Events change stream configuration."""

    model_config = SettingsConfigDict(env_prefix="STREAM_")

    keepalive_seconds: float = Field(
        default=30.0,
        description="Idle time after the last write before a ping frame is sent",
    )
    cluster_event_name: str = Field(
        default="clusters",
        description="SSE event name carrying cluster snapshots",
    )
    mock_update_interval_seconds: float = Field(
        default=5.0,
        description="Interval between synthetic watch events in mock mode",
    )

    @field_validator("keepalive_seconds", "mock_update_interval_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Intervals must be strictly positive."""
        if v <= 0:
            raise ValueError("interval must be greater than zero")
        return v


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For nested settings, use the appropriate prefix (e.g., KUBE_CONTEXT).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="ocm-dashboard", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested settings
    kubernetes: KubernetesSettings = Field(default_factory=KubernetesSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)
    streaming: StreamingSettings = Field(default_factory=StreamingSettings)

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Ensure the port is a usable TCP port."""
        if not 0 < v < 65536:
            raise ValueError(f"invalid port: {v}")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def effective_log_level(self) -> LogLevel:
        """Log level after applying the dashboard debug switch."""
        if self.dashboard.debug or self.debug:
            return LogLevel.DEBUG
        return self.log_level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()
