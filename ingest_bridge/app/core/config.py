"""Centralized configuration management for the ingest bridge."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseModel):
    """Where and how to reach the remote ingestion service."""

    base_url: str = Field(default="http://localhost:5000", description="Ingestion service root URL")
    timeout_s: float = Field(default=30.0, gt=0, description="Transport timeout per request")


class SourceDefaults(BaseModel):
    """Values a new session starts with."""

    source: Literal["clickhouse", "flatfile"] = Field(default="clickhouse", description="Initial source")
    host: str = "localhost"
    port: str = "9000"
    database: str = "ingestion_db"
    user: str = "default"
    credential: str = Field(default="", repr=False)
    file_path: str = ""
    delimiter: str = ","


class IngestBridgeSettings(BaseSettings):
    """Application-wide settings loaded from env, .env, and defaults."""

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    defaults: SourceDefaults = Field(default_factory=SourceDefaults)
    log_level: str = Field(default="INFO", description="Log verbosity")

    model_config = SettingsConfigDict(
        env_prefix="INGEST_BRIDGE_",
        env_file=".env",
        extra="ignore",
        env_nested_delimiter="__",
    )


@lru_cache(maxsize=1)
def get_settings() -> IngestBridgeSettings:
    """Return a cached settings instance."""

    return IngestBridgeSettings()
