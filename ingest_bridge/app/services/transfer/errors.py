"""Transfer service errors."""

from __future__ import annotations

from typing import Optional, Sequence


class TransferError(Exception):
    """Base error for transfer operations."""

    pass


class ConfigError(TransferError):
    """Source configuration is not complete enough to query."""

    pass


class MissingFieldError(ConfigError):
    """One or more required configuration fields are empty."""

    def __init__(self, fields: Sequence[str], message: str):
        self.fields = tuple(fields)
        super().__init__(message)


class InvalidFieldError(ConfigError):
    """A configuration field holds an unusable value."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(message)


class SelectionError(TransferError):
    """Selection change is not valid for the current source or schema."""

    pass


class UnknownTableError(SelectionError):
    """Table is not present in the current schema snapshot."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table '{table_name}' not found in schema")


class UnknownColumnError(SelectionError):
    """Column is not present in the table currently in scope."""

    def __init__(self, column: str, table_name: str = ""):
        self.column = column
        self.table_name = table_name
        where = f"table '{table_name}'" if table_name else "the selected source"
        super().__init__(f"Column '{column}' not found in {where}")


class IncompleteSelectionError(SelectionError):
    """Selection is missing fields required for ingestion."""

    def __init__(self, message: str = "Please select the required fields first"):
        super().__init__(message)


class SchemaFetchError(TransferError):
    """Error retrieving schema metadata from the ingestion service."""

    pass


class PreviewFetchError(TransferError):
    """Error retrieving preview rows from the ingestion service."""

    pass


class IngestionError(TransferError):
    """Error reported for an ingestion submission."""

    pass


class SubmissionInProgressError(TransferError):
    """An ingestion submission is already outstanding."""

    def __init__(self) -> None:
        super().__init__("Ingestion already in progress")


class ServiceRequestError(Exception):
    """Transport-level failure talking to the ingestion service.

    Raised by the HTTP client only; components convert it to their own typed
    error before it reaches a caller.
    """

    def __init__(self, path: str, status_code: Optional[int], message: str):
        self.path = path
        self.status_code = status_code
        super().__init__(message)
