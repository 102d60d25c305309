"""Transfer session - the single actor driving config, schema, selection,
preview and ingestion.

Every transition replaces ``SessionState`` wholesale. Upstream changes
invalidate downstream components in order:

    config edit -> schema sync -> selection reset -> preview refresh

Ingestion only runs on an explicit ``submit``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .client import IngestionServiceClient
from .errors import (
    ConfigError,
    PreviewFetchError,
    SchemaFetchError,
    SelectionError,
    SubmissionInProgressError,
    TransferError,
)
from .ingestion import IngestionOrchestrator
from .models import Selection, SessionState, SourceConfig, SourceKind
from .preview import PreviewEngine
from .schema_sync import SchemaSynchronizer
from .selection import SelectionState
from .validator import validate_config

logger = logging.getLogger(__name__)


class TransferSession:
    """Owns the configuration/selection/result state for one operator."""

    def __init__(
        self,
        client: IngestionServiceClient,
        config: Optional[SourceConfig] = None,
    ) -> None:
        config = config or SourceConfig()
        self._schema = SchemaSynchronizer(client)
        self._selection = SelectionState(config.kind)
        self._preview = PreviewEngine(client)
        self._ingestion = IngestionOrchestrator(client)
        self._state = SessionState(config=config)

    @property
    def state(self) -> SessionState:
        return self._state

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    async def start(self) -> SessionState:
        """Discover the schema for the initial configuration."""
        return await self.replace_config(self._state.config)

    async def switch_source(self, kind: SourceKind) -> SessionState:
        return await self.replace_config(self._state.config.switch_to(kind))

    async def update_columnar(self, **changes: str) -> SessionState:
        return await self.replace_config(self._state.config.with_columnar(**changes))

    async def update_flat_file(self, **changes: str) -> SessionState:
        return await self.replace_config(self._state.config.with_flat_file(**changes))

    async def replace_config(self, config: SourceConfig) -> SessionState:
        """Install ``config`` and restart everything downstream of it."""
        current = self._state.config
        if config is not current and config.version <= current.version:
            config = replace(config, version=current.version + 1)

        self._schema.invalidate(config.version)
        self._preview.invalidate()
        self._selection.reset(config.kind)
        self._state = SessionState(config=config, submitting=self._state.submitting)
        logger.info("Source config is now %s", config.describe())

        try:
            validate_config(config)
        except ConfigError as e:
            return self._fail(e)
        return await self._sync_schema(config, reconcile=False)

    async def refresh_schema(self) -> SessionState:
        """Re-read the schema for the unchanged config, keeping what survives."""
        config = self._state.config
        try:
            validate_config(config)
        except ConfigError as e:
            return self._fail(e)
        return await self._sync_schema(config, reconcile=True)

    async def _sync_schema(self, config: SourceConfig, *, reconcile: bool) -> SessionState:
        try:
            snapshot = await self._schema.refresh(config)
        except SchemaFetchError as e:
            self._selection.reset(config.kind)
            self._preview.invalidate()
            self._state = replace(
                self._state, snapshot=None, selection=Selection(), preview=None
            )
            return self._fail(e)

        if snapshot is None or config.version != self._state.config.version:
            return self._state

        if not reconcile:
            self._preview.invalidate()
            selection = self._selection.reset(config.kind, snapshot)
            self._state = replace(
                self._state, snapshot=snapshot, selection=selection, preview=None, error=None
            )
            return self._state

        previous = self._state.selection
        selection = self._selection.reconcile(snapshot)
        self._state = replace(self._state, snapshot=snapshot, selection=selection, error=None)
        if selection != previous:
            return await self.refresh_preview()
        return self._state

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    async def choose_table(self, name: str) -> SessionState:
        try:
            selection = self._selection.choose_table(name)
        except SelectionError as e:
            return self._fail(e)
        return await self._selection_changed(selection)

    async def toggle_column(self, identifier: str) -> SessionState:
        try:
            selection = self._selection.toggle_column(identifier)
        except SelectionError as e:
            return self._fail(e)
        return await self._selection_changed(selection)

    def set_target_table(self, name: str) -> SessionState:
        try:
            selection = self._selection.set_target_table(name)
        except SelectionError as e:
            return self._fail(e)
        self._state = replace(self._state, selection=selection, status=None, error=None)
        return self._state

    async def _selection_changed(self, selection: Selection) -> SessionState:
        self._state = replace(
            self._state, selection=selection, preview=None, status=None, error=None
        )
        return await self.refresh_preview()

    # -------------------------------------------------------------------------
    # Preview
    # -------------------------------------------------------------------------

    def _is_live(self, config: SourceConfig, selection: Selection) -> bool:
        return (
            config.version == self._state.config.version
            and selection.table_name == self._state.selection.table_name
            and selection.columns == self._state.selection.columns
        )

    async def refresh_preview(self) -> SessionState:
        config, selection = self._state.config, self._state.selection
        try:
            result = await self._preview.request_preview(config, selection)
        except (ConfigError, PreviewFetchError) as e:
            if not self._is_live(config, selection):
                return self._state
            self._state = replace(self._state, preview=None)
            return self._fail(e)

        if result is None or not result.matches(self._state.config, self._state.selection):
            return self._state
        self._state = replace(self._state, preview=result)
        return self._state

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    async def submit(self) -> SessionState:
        """Run one ingestion for the current config and selection."""
        if self._state.submitting:
            return self._fail(SubmissionInProgressError())

        config, selection = self._state.config, self._state.selection
        self._state = replace(
            self._state,
            outcome=None,
            error=None,
            status="Starting ingestion...",
            submitting=True,
        )
        try:
            outcome = await self._ingestion.submit(config, selection)
        except TransferError as e:
            self._state = replace(self._state, outcome=None, status=None, submitting=False)
            return self._fail(e)
        except BaseException:
            self._state = replace(self._state, status=None, submitting=False)
            raise

        if config.version != self._state.config.version:
            logger.info(
                "Ingestion for superseded config v%d finished: %d records -> %s",
                config.version,
                outcome.record_count,
                outcome.output_descriptor,
            )
            self._state = replace(self._state, status=None, submitting=False)
            return self._state

        self._state = replace(
            self._state,
            outcome=outcome,
            status=outcome.summary(),
            error=None,
            submitting=False,
        )
        return self._state

    def _fail(self, error: TransferError) -> SessionState:
        logger.warning("%s: %s", type(error).__name__, error)
        self._state = replace(self._state, error=str(error))
        return self._state
