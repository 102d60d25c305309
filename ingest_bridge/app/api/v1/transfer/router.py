"""Transfer API Router - drives one TransferSession for a presentation layer.

Every endpoint answers with the full session state. User-visible failures
(validation, rejected selections, service errors) are reported in its
``error`` field.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ingest_bridge.app.api.deps import get_transfer_session
from ingest_bridge.app.api.v1.transfer.schemas import (
    ChooseTableRequest,
    ColumnarConfigUpdate,
    FlatFileConfigUpdate,
    SessionStateResponse,
    SwitchSourceRequest,
    TargetTableRequest,
    ToggleColumnRequest,
)
from ingest_bridge.app.services.transfer import SessionState, SourceKind, TransferSession


router = APIRouter()


def _state_to_response(state: SessionState) -> SessionStateResponse:
    return SessionStateResponse.model_validate(state.to_dict())


# =============================================================================
# Session & Configuration
# =============================================================================


@router.get("/session", response_model=SessionStateResponse)
async def get_session(
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Return the current session state."""
    return _state_to_response(session.state)


@router.put("/source", response_model=SessionStateResponse)
async def switch_source(
    request: SwitchSourceRequest,
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Switch between ClickHouse and flat file sources."""
    state = await session.switch_source(SourceKind(request.source))
    return _state_to_response(state)


@router.patch("/config/columnar", response_model=SessionStateResponse)
async def update_columnar_config(
    request: ColumnarConfigUpdate,
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Edit ClickHouse connection fields; only provided fields change."""
    state = await session.update_columnar(**request.model_dump(exclude_unset=True))
    return _state_to_response(state)


@router.patch("/config/flat-file", response_model=SessionStateResponse)
async def update_flat_file_config(
    request: FlatFileConfigUpdate,
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Edit flat file path or delimiter."""
    state = await session.update_flat_file(**request.model_dump(exclude_unset=True))
    return _state_to_response(state)


@router.post("/schema/refresh", response_model=SessionStateResponse)
async def refresh_schema(
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Re-read the schema without changing the configuration."""
    return _state_to_response(await session.refresh_schema())


# =============================================================================
# Selection & Preview
# =============================================================================


@router.post("/table", response_model=SessionStateResponse)
async def choose_table(
    request: ChooseTableRequest,
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Choose the ClickHouse table whose columns are offered."""
    return _state_to_response(await session.choose_table(request.name))


@router.post("/columns/toggle", response_model=SessionStateResponse)
async def toggle_column(
    request: ToggleColumnRequest,
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Add or remove a column from the selection."""
    return _state_to_response(await session.toggle_column(request.column))


@router.put("/target-table", response_model=SessionStateResponse)
async def set_target_table(
    request: TargetTableRequest,
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Set the destination table for flat file ingestion."""
    return _state_to_response(session.set_target_table(request.name))


@router.post("/preview/refresh", response_model=SessionStateResponse)
async def refresh_preview(
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Fetch preview rows again for the current selection."""
    return _state_to_response(await session.refresh_preview())


# =============================================================================
# Ingestion
# =============================================================================


@router.post("/ingest", response_model=SessionStateResponse)
async def ingest(
    session: TransferSession = Depends(get_transfer_session),
) -> SessionStateResponse:
    """Start one ingestion job for the current configuration and selection."""
    return _state_to_response(await session.submit())
