"""Async HTTP transport for the ingestion service."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Dict, Optional

import httpx

from .errors import ServiceRequestError

logger = logging.getLogger(__name__)


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


class IngestionServiceClient:
    """Posts JSON bodies to ``/schema``, ``/preview`` and ``/ingest``.

    Never retries. Any failure, whether transport, non-2xx status or
    undecodable body, surfaces as ``ServiceRequestError`` whose message is the
    server-provided ``error`` when there is one.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_s),
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "IngestionServiceClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def fetch_schema(self, body: Dict[str, Any]) -> Any:
        return await self._post("/schema", body)

    async def fetch_preview(self, body: Dict[str, Any]) -> Any:
        return await self._post("/preview", body)

    async def ingest(self, body: Dict[str, Any]) -> Any:
        return await self._post("/ingest", body)

    async def _post(self, path: str, body: Dict[str, Any]) -> Any:
        logger.debug("POST %s source=%s", path, body.get("source"))
        try:
            response = await self._client.post(path, json=body)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise ServiceRequestError(path, None, f"Failed to reach ingestion service: {e}") from e

        if not response.is_success:
            message = _server_message(response) or f"HTTP error! status: {response.status_code}"
            logger.warning("POST %s returned %s: %s", path, response.status_code, message)
            raise ServiceRequestError(path, response.status_code, message)

        try:
            return response.json()
        except ValueError as e:
            raise ServiceRequestError(path, response.status_code, "Invalid response format from server") from e
