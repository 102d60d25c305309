"""Ingest bridge - client-side orchestration for ClickHouse and flat-file transfers."""
