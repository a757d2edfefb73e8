"""Configuration management for the document store."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Storage backend configuration."""

    backend: Literal["file", "memory"] = Field(
        default="file", description="Persistence backend used for database blobs"
    )
    data_dir: Path = Field(default=Path("."), description="Directory holding database files")
    file_extension: str = Field(
        default=".json", pattern=r"^\.[A-Za-z0-9_]+$", description="Suffix of database files"
    )
    sync: bool = Field(default=True, description="fsync database files after each write")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="doggo_db", description="Service name for tracing")
    metrics_port: int | None = Field(
        default=None, ge=1, le=65535, description="Port for the Prometheus HTTP endpoint"
    )


class Config(BaseSettings):
    """Main configuration for the document store."""

    model_config = SettingsConfigDict(
        env_prefix="DOGGO_DB_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def ensure_directories(self) -> None:
        """Ensure the data directory exists when the file backend is selected."""
        if self.storage.backend == "file":
            self.storage.data_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    config = Config()
    config.ensure_directories()
    return config
