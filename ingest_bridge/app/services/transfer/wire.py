"""Request and response bodies for the ingestion service."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .models import (
    ColumnDescriptor,
    IngestionOutcome,
    SchemaSnapshot,
    Selection,
    SourceConfig,
    TableDescriptor,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ClickHouseConfigPayload(_WireModel):
    host: str
    port: str
    database: str
    user: str
    jwt_token: str = Field("", alias="jwtToken")
    table: Optional[str] = None


class FlatFileConfigPayload(_WireModel):
    file_name: str = Field(..., alias="fileName")
    delimiter: str


class ColumnPayload(BaseModel):
    name: str
    type: str = ""


class TablePayload(BaseModel):
    name: str
    columns: List[Union[ColumnPayload, str]] = Field(default_factory=list)


class IngestResponsePayload(BaseModel):
    record_count: int = Field(..., alias="recordCount", ge=0)
    output_file: str = Field("", alias="outputFile")


_TABLES = TypeAdapter(List[TablePayload])
_COLUMNS = TypeAdapter(List[Union[ColumnPayload, str]])
_ROWS = TypeAdapter(List[Dict[str, Any]])


def _clickhouse_payload(config: SourceConfig, table: Optional[str] = None) -> Dict[str, Any]:
    c = config.columnar
    return ClickHouseConfigPayload(
        host=c.host,
        port=c.port,
        database=c.database,
        user=c.user,
        jwt_token=c.credential,
        table=table,
    ).to_wire()


def _flat_file_payload(config: SourceConfig) -> Dict[str, Any]:
    f = config.flat_file
    return FlatFileConfigPayload(file_name=f.path, delimiter=f.delimiter).to_wire()


def _active_shapes(config: SourceConfig) -> Dict[str, Any]:
    return {
        "source": config.kind.value,
        "clickHouseConfig": _clickhouse_payload(config) if config.is_columnar else {},
        "flatFileConfig": {} if config.is_columnar else _flat_file_payload(config),
    }


def build_schema_request(config: SourceConfig) -> Dict[str, Any]:
    return _active_shapes(config)


def build_preview_request(config: SourceConfig, selection: Selection) -> Dict[str, Any]:
    body = _active_shapes(config)
    body["table"] = selection.table_name
    # The service reads the table under either key.
    body["tableName"] = selection.table_name
    body["columns"] = list(selection.columns)
    return body


def build_ingest_request(config: SourceConfig, selection: Selection) -> Dict[str, Any]:
    """Carry both config shapes; ``table`` is the source or destination table."""
    table = selection.table_name if config.is_columnar else selection.target_table_name
    return {
        "source": config.kind.value,
        "clickHouseConfig": _clickhouse_payload(config, table=table),
        "flatFileConfig": _flat_file_payload(config),
        "selectedColumns": list(selection.columns),
    }


def _column(entry: Union[ColumnPayload, str]) -> ColumnDescriptor:
    if isinstance(entry, str):
        return ColumnDescriptor(name=entry)
    return ColumnDescriptor(name=entry.name, type=entry.type)


def parse_schema_response(config: SourceConfig, data: Any) -> SchemaSnapshot:
    """Normalize a schema payload; raises ``pydantic.ValidationError``."""
    if config.is_columnar:
        tables = tuple(
            TableDescriptor(name=t.name, columns=tuple(_column(c) for c in t.columns))
            for t in _TABLES.validate_python(data)
        )
    else:
        header = tuple(_column(c) for c in _COLUMNS.validate_python(data))
        tables = (TableDescriptor(name="", columns=header),)
    return SchemaSnapshot(source_config_version=config.version, tables=tables)


def parse_preview_rows(data: Any) -> List[Dict[str, Any]]:
    return _ROWS.validate_python(data)


def parse_ingest_response(data: Any) -> IngestionOutcome:
    payload = IngestResponsePayload.model_validate(data)
    return IngestionOutcome(record_count=payload.record_count, output_descriptor=payload.output_file)
