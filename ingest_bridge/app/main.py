"""ASGI entrypoint for the ingest bridge."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ingest_bridge.app.api.deps import get_service_client, get_transfer_session
from ingest_bridge.app.api.router import api_router
from ingest_bridge.app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info("Ingestion service at %s", settings.service.base_url)
    await get_transfer_session().start()
    try:
        yield
    finally:
        await get_service_client().aclose()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Ingest Bridge", lifespan=lifespan)
    app.include_router(api_router)
    return app


app = create_app()
