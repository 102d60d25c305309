"""Tests for ingestion service request/response bodies."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ingest_bridge.app.services.transfer import Selection, SourceConfig
from ingest_bridge.app.services.transfer.wire import (
    build_ingest_request,
    build_preview_request,
    build_schema_request,
    parse_ingest_response,
    parse_schema_response,
)
from tests.helpers.fake_service import EVENTS_SCHEMA, PEOPLE_HEADER


def test_schema_request_sends_only_active_shape(columnar_config: SourceConfig):
    body = build_schema_request(columnar_config)

    assert body == {
        "source": "clickhouse",
        "clickHouseConfig": {
            "host": "localhost",
            "port": "9000",
            "database": "ingestion_db",
            "user": "default",
            "jwtToken": "s3cr3t-token",
        },
        "flatFileConfig": {},
    }


def test_preview_request_for_flat_file(flat_file_config: SourceConfig):
    body = build_preview_request(flat_file_config, Selection(columns=("name", "age")))

    assert body["source"] == "flatfile"
    assert body["clickHouseConfig"] == {}
    assert body["flatFileConfig"] == {"fileName": "/data/in.csv", "delimiter": ","}
    assert body["table"] == ""
    assert body["columns"] == ["name", "age"]


def test_ingest_request_for_flat_file_targets_clickhouse_table(flat_file_config: SourceConfig):
    selection = Selection(target_table_name="people", columns=("name", "age"))

    body = build_ingest_request(flat_file_config, selection)

    assert body["source"] == "flatfile"
    assert body["flatFileConfig"]["fileName"] == "/data/in.csv"
    assert body["selectedColumns"] == ["name", "age"]
    assert body["clickHouseConfig"]["table"] == "people"
    assert body["clickHouseConfig"]["host"] == "localhost"


def test_ingest_request_for_columnar_uses_chosen_table(columnar_config: SourceConfig):
    body = build_ingest_request(columnar_config, Selection(table_name="events", columns=("id",)))

    assert body["clickHouseConfig"]["table"] == "events"
    assert body["flatFileConfig"] == {"fileName": "", "delimiter": ","}


def test_parse_columnar_schema(columnar_config: SourceConfig):
    snapshot = parse_schema_response(columnar_config, EVENTS_SCHEMA)

    assert snapshot.source_config_version == columnar_config.version
    assert snapshot.table_names() == ("events", "users")
    events = snapshot.table("events")
    assert events.column_identifiers() == ("id", "ts")
    assert events.columns[1].type == "DateTime"


def test_parse_flat_file_schema_builds_single_unnamed_table(flat_file_config: SourceConfig):
    snapshot = parse_schema_response(flat_file_config, PEOPLE_HEADER)

    assert len(snapshot.tables) == 1
    assert snapshot.tables[0].name == ""
    assert snapshot.tables[0].column_identifiers() == ("name", "age")


def test_plain_string_columns_are_not_split(columnar_config: SourceConfig):
    snapshot = parse_schema_response(
        columnar_config, [{"name": "events", "columns": ["id (UInt64)"]}]
    )

    column = snapshot.table("events").columns[0]
    assert column.name == "id (UInt64)"
    assert column.type == ""


def test_malformed_schema_raises(columnar_config: SourceConfig):
    with pytest.raises(ValidationError):
        parse_schema_response(columnar_config, {"error": "not a list"})


def test_parse_ingest_response():
    outcome = parse_ingest_response(
        {"status": "success", "recordCount": 7, "outputFile": "/srv/output/output.csv"}
    )

    assert outcome.record_count == 7
    assert outcome.output_descriptor == "/srv/output/output.csv"


def test_negative_record_count_is_rejected():
    with pytest.raises(ValidationError):
        parse_ingest_response({"recordCount": -1, "outputFile": "x"})
