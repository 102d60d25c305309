"""FastAPI router wiring for the ingest bridge."""

from fastapi import APIRouter

from .v1 import transfer

api_router = APIRouter()
api_router.include_router(transfer.router, prefix="/api/v1/transfer", tags=["transfer"])
