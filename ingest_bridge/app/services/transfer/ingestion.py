"""Ingestion submission."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from .client import IngestionServiceClient
from .errors import IncompleteSelectionError, IngestionError, ServiceRequestError
from .models import IngestionOutcome, Selection, SourceConfig
from .validator import validate_config
from .wire import build_ingest_request, parse_ingest_response

logger = logging.getLogger(__name__)


def check_ready(config: SourceConfig, selection: Selection) -> None:
    """Raise ``ConfigError`` or ``IncompleteSelectionError`` if not submittable."""
    validate_config(config)
    if not selection.columns:
        raise IncompleteSelectionError()
    if config.is_columnar and not selection.table_name:
        raise IncompleteSelectionError()
    if not config.is_columnar and not selection.target_table_name:
        raise IncompleteSelectionError()


class IngestionOrchestrator:
    """Submits one ingestion request per call.

    Holds no state between calls and does not serialize concurrent submits;
    the caller owns the trigger.
    """

    def __init__(self, client: IngestionServiceClient) -> None:
        self._client = client

    async def submit(self, config: SourceConfig, selection: Selection) -> IngestionOutcome:
        check_ready(config, selection)

        body = build_ingest_request(config, selection)
        logger.info(
            "Submitting ingestion from %s: table=%r columns=%d",
            config.describe(),
            body["clickHouseConfig"].get("table"),
            len(selection.columns),
        )

        try:
            data = await self._client.ingest(body)
        except ServiceRequestError as e:
            raise IngestionError(str(e)) from e

        try:
            outcome = parse_ingest_response(data)
        except ValidationError as e:
            raise IngestionError("Invalid response format from server") from e

        logger.info(
            "Ingestion finished: %d records -> %s", outcome.record_count, outcome.output_descriptor
        )
        return outcome
