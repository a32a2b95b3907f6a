"""
Application Settings - Main Layer

Pydantic Settings read from environment variables, an optional ``.env``
file and defaults.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from predict_sidecar.shared import EnumEnvironment, EnumLogLevel
from predict_sidecar.shared.env import load_secret_file_variables  # noqa: F401


class SidecarSettings(BaseSettings):
    """HTTP server and build metadata."""

    title: str = Field(default="Predict Sidecar", description="Service title")
    description: str = Field(
        default="Scores buffered time series against pre-trained "
        "forecasting models and republishes the predictions",
        description="Service description",
    )
    version: str = Field(default="0.1.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("SIDECAR_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("SIDECAR_BUILD_TIME", "BUILD_TIME"),
    )
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SIDECAR_", case_sensitive=False, extra="ignore"
    )


class ScoringSettings(BaseSettings):
    """Series buffering and scoring cycle configuration."""

    model_paths: str = Field(
        default="",
        description="Colon-separated list of model directories",
    )
    max_points: int = Field(
        default=1000, ge=1, description="Maximum points buffered per series"
    )
    interval_seconds: float = Field(
        default=60.0, gt=0, description="Seconds between scoring cycles"
    )
    inference_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Upper bound of a single inference call"
    )
    enabled: bool = Field(
        default=True, description="Run the periodic scoring cycle"
    )

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    sidecar: SidecarSettings = Field(default_factory=SidecarSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
