"""Completeness checks run before any request reaches the network."""

from __future__ import annotations

from .errors import InvalidFieldError, MissingFieldError
from .models import SourceConfig

_REQUIRED_COLUMNAR_FIELDS = ("host", "port", "database", "user")


def validate_config(config: SourceConfig) -> None:
    """Raise ``ConfigError`` if ``config`` cannot be queried yet."""
    if config.is_columnar:
        missing = [name for name in _REQUIRED_COLUMNAR_FIELDS if not getattr(config.columnar, name)]
        if missing:
            raise MissingFieldError(
                missing,
                f"Missing required ClickHouse configuration ({', '.join(missing)})",
            )
        return

    flat_file = config.flat_file
    if not flat_file.path:
        raise MissingFieldError(["path"], "Missing required file name")
    if not flat_file.delimiter:
        raise MissingFieldError(["delimiter"], "Missing required delimiter")
    if len(flat_file.delimiter) != 1:
        raise InvalidFieldError("delimiter", "Delimiter must be a single character")

