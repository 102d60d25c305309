"""Schemas for transfer session endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class SwitchSourceRequest(BaseModel):
    """Request to change the active source."""

    source: Literal["clickhouse", "flatfile"] = Field(..., description="Source kind")


class ColumnarConfigUpdate(BaseModel):
    """Partial update of the ClickHouse connection fields.

    Omitted fields keep their current value; explicit nulls are rejected.
    """

    host: str = ""
    port: str = ""
    database: str = ""
    user: str = ""
    credential: str = Field("", alias="jwtToken", description="JWT token")

    model_config = {"populate_by_name": True}


class FlatFileConfigUpdate(BaseModel):
    """Partial update of the flat file fields."""

    path: str = Field("", alias="fileName", description="File path")
    delimiter: str = ","

    model_config = {"populate_by_name": True}


class ChooseTableRequest(BaseModel):
    name: str = Field(..., description="Table in the current schema")


class ToggleColumnRequest(BaseModel):
    column: str = Field(..., description="Column identifier")


class TargetTableRequest(BaseModel):
    name: str = Field(..., description="Destination table name in ClickHouse")


class ColumnarConfigResponse(BaseModel):
    host: str
    port: str
    database: str
    user: str
    has_credential: bool


class FlatFileConfigResponse(BaseModel):
    path: str
    delimiter: str


class ColumnResponse(BaseModel):
    name: str
    type: str


class TableResponse(BaseModel):
    name: str
    columns: List[ColumnResponse] = []


class SelectionResponse(BaseModel):
    table_name: str
    target_table_name: str
    columns: List[str] = []


class PreviewResponse(BaseModel):
    columns: List[str]
    rows: List[Dict[str, Any]]
    message: Optional[str] = None


class OutcomeResponse(BaseModel):
    record_count: int
    output_file: str


class SessionStateResponse(BaseModel):
    """Everything needed to render the transfer screen."""

    source: str
    config_version: int
    columnar: ColumnarConfigResponse
    flat_file: FlatFileConfigResponse
    tables: List[TableResponse] = []
    selection: SelectionResponse
    preview: Optional[PreviewResponse] = None
    outcome: Optional[OutcomeResponse] = None
    status: Optional[str] = None
    error: Optional[str] = None
    submitting: bool = False
