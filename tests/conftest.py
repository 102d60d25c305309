"""Shared fixtures for transfer tests."""

from __future__ import annotations

import pytest

from ingest_bridge.app.services.transfer import (
    ColumnarConfig,
    FlatFileConfig,
    SourceConfig,
    SourceKind,
)
from tests.helpers.fake_service import FakeServiceClient


@pytest.fixture
def fake_client() -> FakeServiceClient:
    return FakeServiceClient()


@pytest.fixture
def columnar_config() -> SourceConfig:
    return SourceConfig(
        kind=SourceKind.COLUMNAR,
        columnar=ColumnarConfig(
            host="localhost",
            port="9000",
            database="ingestion_db",
            user="default",
            credential="s3cr3t-token",
        ),
        version=1,
    )


@pytest.fixture
def flat_file_config(columnar_config: SourceConfig) -> SourceConfig:
    return SourceConfig(
        kind=SourceKind.FLAT_FILE,
        columnar=columnar_config.columnar,
        flat_file=FlatFileConfig(path="/data/in.csv", delimiter=","),
        version=1,
    )
