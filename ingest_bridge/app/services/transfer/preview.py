"""Sampled row preview with generation stamping."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from .client import IngestionServiceClient
from .errors import ConfigError, PreviewFetchError, ServiceRequestError
from .models import PreviewResult, Selection, SourceConfig
from .validator import validate_config
from .wire import build_preview_request, parse_preview_rows

logger = logging.getLogger(__name__)

NOTHING_TO_PREVIEW = "Select a table and columns to preview data"


class PreviewEngine:
    """Requests preview rows; only the latest generation is ever applied."""

    def __init__(self, client: IngestionServiceClient) -> None:
        self._client = client
        self._generation = 0
        self.result: Optional[PreviewResult] = None

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> None:
        """Supersede any in-flight request and clear the shown result."""
        self._generation += 1
        self.result = None

    async def request_preview(
        self, config: SourceConfig, selection: Selection
    ) -> Optional[PreviewResult]:
        """Fetch rows for ``selection``.

        Returns ``None`` when a newer request superseded this one before the
        response arrived.
        """
        has_table = bool(selection.table_name) or not config.is_columnar
        if not has_table or not selection.columns:
            self.invalidate()
            self.result = PreviewResult(
                source_config_version=config.version,
                table_name=selection.table_name,
                columns=selection.columns,
                message=NOTHING_TO_PREVIEW,
            )
            return self.result

        try:
            validate_config(config)
        except ConfigError:
            self.invalidate()
            raise

        self._generation += 1
        generation = self._generation
        logger.info(
            "Requesting preview generation %s: table=%r columns=%s",
            generation,
            selection.table_name,
            list(selection.columns),
        )

        try:
            data = await self._client.fetch_preview(build_preview_request(config, selection))
            rows = parse_preview_rows(data)
        except ServiceRequestError as e:
            return self._fail(generation, str(e), e)
        except ValidationError as e:
            return self._fail(generation, "Invalid response format from server", e)

        if generation != self._generation:
            logger.debug(
                "Dropping preview generation %s (latest is %s)", generation, self._generation
            )
            return None

        self.result = PreviewResult(
            source_config_version=config.version,
            table_name=selection.table_name,
            columns=selection.columns,
            rows=tuple(rows),
        )
        return self.result

    def _fail(self, generation: int, message: str, cause: Exception) -> None:
        if generation != self._generation:
            logger.debug("Dropping failed preview generation %s", generation)
            return None
        self.result = None
        raise PreviewFetchError(message) from cause
