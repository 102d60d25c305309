"""Shared API dependencies."""

from functools import lru_cache

from ingest_bridge.app.core.config import get_settings
from ingest_bridge.app.services.transfer import (
    ColumnarConfig,
    FlatFileConfig,
    IngestionServiceClient,
    SourceConfig,
    SourceKind,
    TransferSession,
)


def default_source_config() -> SourceConfig:
    """Build the session's starting config from settings."""
    defaults = get_settings().defaults
    return SourceConfig(
        kind=SourceKind(defaults.source),
        columnar=ColumnarConfig(
            host=defaults.host,
            port=defaults.port,
            database=defaults.database,
            user=defaults.user,
            credential=defaults.credential,
        ),
        flat_file=FlatFileConfig(path=defaults.file_path, delimiter=defaults.delimiter),
    )


@lru_cache(maxsize=1)
def get_service_client() -> IngestionServiceClient:
    """Return the process-wide ingestion service client."""
    service = get_settings().service
    return IngestionServiceClient(service.base_url, timeout_s=service.timeout_s)


@lru_cache(maxsize=1)
def get_transfer_session() -> TransferSession:
    """Return the process-wide transfer session."""
    return TransferSession(get_service_client(), default_source_config())
