"""Transfer service - source config, schema discovery, selection, preview
and ingestion against the remote ingestion service.
"""

from .client import IngestionServiceClient
from .errors import (
    ConfigError,
    IncompleteSelectionError,
    IngestionError,
    InvalidFieldError,
    MissingFieldError,
    PreviewFetchError,
    SchemaFetchError,
    SelectionError,
    ServiceRequestError,
    SubmissionInProgressError,
    TransferError,
    UnknownColumnError,
    UnknownTableError,
)
from .ingestion import IngestionOrchestrator
from .models import (
    ColumnarConfig,
    ColumnDescriptor,
    FlatFileConfig,
    IngestionOutcome,
    PreviewResult,
    SchemaSnapshot,
    Selection,
    SessionState,
    SourceConfig,
    SourceKind,
    TableDescriptor,
)
from .preview import NOTHING_TO_PREVIEW, PreviewEngine
from .schema_sync import SchemaSynchronizer
from .selection import SelectionState
from .session import TransferSession
from .validator import validate_config

__all__ = [
    # Data model
    "SourceKind",
    "ColumnarConfig",
    "FlatFileConfig",
    "SourceConfig",
    "ColumnDescriptor",
    "TableDescriptor",
    "SchemaSnapshot",
    "Selection",
    "PreviewResult",
    "IngestionOutcome",
    "SessionState",
    # Components
    "validate_config",
    "IngestionServiceClient",
    "SchemaSynchronizer",
    "SelectionState",
    "PreviewEngine",
    "NOTHING_TO_PREVIEW",
    "IngestionOrchestrator",
    "TransferSession",
    # Errors
    "TransferError",
    "ConfigError",
    "MissingFieldError",
    "InvalidFieldError",
    "SelectionError",
    "UnknownTableError",
    "UnknownColumnError",
    "IncompleteSelectionError",
    "SchemaFetchError",
    "PreviewFetchError",
    "IngestionError",
    "SubmissionInProgressError",
    "ServiceRequestError",
]
