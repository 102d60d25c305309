"""Table and column selection scoped to the current schema snapshot."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .errors import SelectionError, UnknownColumnError
from .models import SchemaSnapshot, Selection, SourceKind, TableDescriptor


class SelectionState:
    """Tracks the user's Selection against the latest SchemaSnapshot.

    Each mutation returns the new immutable ``Selection``; a rejected
    mutation raises and leaves the current one untouched.
    """

    def __init__(self, kind: SourceKind = SourceKind.COLUMNAR) -> None:
        self._kind = kind
        self._snapshot: Optional[SchemaSnapshot] = None
        self._scoped: Optional[TableDescriptor] = None
        self.current = Selection()

    @property
    def kind(self) -> SourceKind:
        return self._kind

    @property
    def scoped_table(self) -> Optional[TableDescriptor]:
        return self._scoped

    def reset(self, kind: SourceKind, snapshot: Optional[SchemaSnapshot] = None) -> Selection:
        """Clear the selection; a flat-file snapshot scopes its only table."""
        self._kind = kind
        self._snapshot = snapshot
        self._scoped = None
        if kind is SourceKind.FLAT_FILE and snapshot is not None and snapshot.tables:
            self._scoped = snapshot.tables[0]
        self.current = Selection()
        return self.current

    def reconcile(self, snapshot: SchemaSnapshot) -> Selection:
        """Keep what still exists in ``snapshot`` and drop the rest."""
        self._snapshot = snapshot
        if self._kind is SourceKind.FLAT_FILE:
            self._scoped = snapshot.tables[0] if snapshot.tables else None
        elif self.current.table_name in snapshot.table_names():
            self._scoped = snapshot.table(self.current.table_name)
        else:
            self._scoped = None
            self.current = replace(self.current, table_name="")

        table = self._scoped
        columns = tuple(c for c in self.current.columns if table is not None and table.has_column(c))
        self.current = replace(self.current, columns=columns)
        return self.current

    def choose_table(self, name: str) -> Selection:
        if self._kind is not SourceKind.COLUMNAR:
            raise SelectionError("Table selection is only available for ClickHouse sources")
        if self._snapshot is None:
            raise SelectionError("Schema has not been loaded")

        self._scoped = self._snapshot.table(name)
        self.current = replace(self.current, table_name=name, columns=())
        return self.current

    def toggle_column(self, identifier: str) -> Selection:
        table = self._scoped
        if table is None or not table.has_column(identifier):
            raise UnknownColumnError(identifier, table.name if table else "")

        columns = self.current.columns
        if identifier in columns:
            columns = tuple(c for c in columns if c != identifier)
        else:
            columns = columns + (identifier,)
        self.current = replace(self.current, columns=columns)
        return self.current

    def set_target_table(self, name: str) -> Selection:
        if self._kind is not SourceKind.FLAT_FILE:
            raise SelectionError("Target table is only used for flat file sources")
        self.current = replace(self.current, target_table_name=name.strip())
        return self.current
