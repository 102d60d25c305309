"""Schema discovery for the configured source."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from .client import IngestionServiceClient
from .errors import SchemaFetchError, ServiceRequestError
from .models import SchemaSnapshot, SourceConfig
from .wire import build_schema_request, parse_schema_response

logger = logging.getLogger(__name__)


class SchemaSynchronizer:
    """Fetches one schema per SourceConfig version.

    A response is applied only if the version it was issued for is still the
    latest one seen when it arrives; anything older is dropped, including
    failures.
    """

    def __init__(self, client: IngestionServiceClient) -> None:
        self._client = client
        self._latest_version: Optional[int] = None
        self.snapshot: Optional[SchemaSnapshot] = None

    @property
    def latest_version(self) -> Optional[int]:
        return self._latest_version

    def invalidate(self, version: int) -> None:
        """Mark ``version`` as current and drop the applied snapshot."""
        self._latest_version = version
        self.snapshot = None

    def _is_current(self, version: int) -> bool:
        return version == self._latest_version

    async def refresh(self, config: SourceConfig) -> Optional[SchemaSnapshot]:
        """Fetch and apply the schema for an already validated ``config``.

        Returns ``None`` if a newer config superseded this one in flight.
        """
        version = config.version
        self.invalidate(version)
        logger.info("Fetching schema for %s", config.describe())

        try:
            data = await self._client.fetch_schema(build_schema_request(config))
        except ServiceRequestError as e:
            if not self._is_current(version):
                logger.debug("Dropping failed schema fetch for stale version %s", version)
                return None
            raise SchemaFetchError(str(e)) from e

        if not self._is_current(version):
            logger.debug(
                "Dropping schema for version %s (latest is %s)", version, self._latest_version
            )
            return None

        try:
            snapshot = parse_schema_response(config, data)
        except ValidationError as e:
            logger.warning("Malformed schema payload for version %s: %s", version, e)
            raise SchemaFetchError("Invalid response format from server") from e

        self.snapshot = snapshot
        logger.info(
            "Applied schema version %s: %d table(s)", version, len(snapshot.tables)
        )
        return snapshot
