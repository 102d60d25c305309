"""Transfer data model.

Every value here is immutable. Edits produce new values so downstream
components detect staleness by version instead of deep comparison.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import UnknownTableError


class SourceKind(str, Enum):
    """Which backing system the transfer reads from."""

    COLUMNAR = "clickhouse"
    FLAT_FILE = "flatfile"


@dataclass(frozen=True)
class ColumnarConfig:
    """Connection parameters for the columnar store."""

    host: str = ""
    port: str = ""
    database: str = ""
    user: str = ""
    credential: str = field(default="", repr=False)  # never logged


@dataclass(frozen=True)
class FlatFileConfig:
    """Location and format of the delimited file."""

    path: str = ""
    delimiter: str = ","


@dataclass(frozen=True)
class SourceConfig:
    """Tagged configuration for the active source.

    Both shapes are retained so switching the source keeps prior edits; only
    the shape matching ``kind`` is active. ``version`` is not part of equality.
    """

    kind: SourceKind = SourceKind.COLUMNAR
    columnar: ColumnarConfig = field(default_factory=ColumnarConfig)
    flat_file: FlatFileConfig = field(default_factory=FlatFileConfig)
    version: int = field(default=0, compare=False)

    @property
    def active(self) -> ColumnarConfig | FlatFileConfig:
        if self.kind is SourceKind.COLUMNAR:
            return self.columnar
        return self.flat_file

    @property
    def is_columnar(self) -> bool:
        return self.kind is SourceKind.COLUMNAR

    def switch_to(self, kind: SourceKind) -> "SourceConfig":
        return replace(self, kind=SourceKind(kind), version=self.version + 1)

    def with_columnar(self, **changes: str) -> "SourceConfig":
        return replace(self, columnar=replace(self.columnar, **changes), version=self.version + 1)

    def with_flat_file(self, **changes: str) -> "SourceConfig":
        return replace(self, flat_file=replace(self.flat_file, **changes), version=self.version + 1)

    def describe(self) -> str:
        """Log-safe one-line summary (no credential)."""
        if self.is_columnar:
            c = self.columnar
            return f"clickhouse {c.user}@{c.host}:{c.port}/{c.database} v{self.version}"
        return f"flatfile {self.flat_file.path!r} delimiter={self.flat_file.delimiter!r} v{self.version}"


@dataclass(frozen=True)
class ColumnDescriptor:
    """A column as reported by the source; ``type`` is an opaque tag."""

    name: str
    type: str = ""

    @property
    def identifier(self) -> str:
        return self.name

    @property
    def label(self) -> str:
        return f"{self.name} ({self.type})" if self.type else self.name


@dataclass(frozen=True)
class TableDescriptor:
    """A table and its ordered columns. Flat files use one unnamed table."""

    name: str
    columns: Tuple[ColumnDescriptor, ...] = ()

    def column_identifiers(self) -> Tuple[str, ...]:
        return tuple(c.identifier for c in self.columns)

    def has_column(self, identifier: str) -> bool:
        return any(c.identifier == identifier for c in self.columns)


@dataclass(frozen=True)
class SchemaSnapshot:
    """Point-in-time schema for one SourceConfig version."""

    source_config_version: int
    tables: Tuple[TableDescriptor, ...] = ()

    def table(self, name: str) -> TableDescriptor:
        for table in self.tables:
            if table.name == name:
                return table
        raise UnknownTableError(name)

    def table_names(self) -> Tuple[str, ...]:
        return tuple(t.name for t in self.tables)


@dataclass(frozen=True)
class Selection:
    """Chosen table (columnar) or target table (flat file) plus columns."""

    table_name: str = ""
    target_table_name: str = ""
    columns: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.table_name and not self.target_table_name and not self.columns


PreviewRow = Mapping[str, Any]


@dataclass(frozen=True)
class PreviewResult:
    """Sampled rows tagged with the request they answer."""

    source_config_version: int
    table_name: str
    columns: Tuple[str, ...]
    rows: Tuple[PreviewRow, ...] = ()
    message: Optional[str] = None

    def matches(self, config: SourceConfig, selection: Selection) -> bool:
        return (
            self.source_config_version == config.version
            and self.table_name == selection.table_name
            and self.columns == selection.columns
        )

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class IngestionOutcome:
    """Result of a completed ingestion job."""

    record_count: int
    output_descriptor: str

    def summary(self) -> str:
        return (
            "Ingestion completed successfully. "
            f"{self.record_count} records processed. Output file: {self.output_descriptor}"
        )


@dataclass(frozen=True)
class SessionState:
    """Everything a presentation layer needs to render one step."""

    config: SourceConfig
    snapshot: Optional[SchemaSnapshot] = None
    selection: Selection = field(default_factory=Selection)
    preview: Optional[PreviewResult] = None
    outcome: Optional[IngestionOutcome] = None
    status: Optional[str] = None
    error: Optional[str] = None
    submitting: bool = False

    def to_dict(self) -> Dict[str, Any]:
        columnar = self.config.columnar
        return {
            "source": self.config.kind.value,
            "config_version": self.config.version,
            "columnar": {
                "host": columnar.host,
                "port": columnar.port,
                "database": columnar.database,
                "user": columnar.user,
                "has_credential": bool(columnar.credential),
            },
            "flat_file": {
                "path": self.config.flat_file.path,
                "delimiter": self.config.flat_file.delimiter,
            },
            "tables": [
                {
                    "name": t.name,
                    "columns": [{"name": c.name, "type": c.type} for c in t.columns],
                }
                for t in (self.snapshot.tables if self.snapshot else ())
            ],
            "selection": {
                "table_name": self.selection.table_name,
                "target_table_name": self.selection.target_table_name,
                "columns": list(self.selection.columns),
            },
            "preview": (
                {
                    "columns": list(self.preview.columns),
                    "rows": [dict(r) for r in self.preview.rows],
                    "message": self.preview.message,
                }
                if self.preview
                else None
            ),
            "outcome": (
                {
                    "record_count": self.outcome.record_count,
                    "output_file": self.outcome.output_descriptor,
                }
                if self.outcome
                else None
            ),
            "status": self.status,
            "error": self.error,
            "submitting": self.submitting,
        }
