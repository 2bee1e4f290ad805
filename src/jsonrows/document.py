"""Document: the editable row list behind one JSON object."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from . import rowstore
from .codec import format_value, parse_value
from .errors import LoadError
from .model import Row, TypeTag
from .validator import is_valid

_LOG = logging.getLogger(__name__)

ChangeSink = Callable[[dict[str, Any]], None]


@dataclass
class Document:
    """Holds the rows of one JSON object and reports every change.

    Each mutating method updates ``rows``, re-exports the object into
    ``data`` and passes it to ``on_change``.
    """

    on_change: ChangeSink | None = None
    rows: list[Row] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Not a dataclass field; the object exported after the last change
        self._data: dict[str, Any] = rowstore.to_json(self.rows)

    # -- Convenience accessors ------------------------------------------

    @property
    def data(self) -> dict[str, Any]:
        """The JSON object exported after the most recent change."""
        return self._data

    def __len__(self) -> int:
        return len(self.rows)

    # -- Loading --------------------------------------------------------

    def set_source(self, obj: Any) -> None:
        """Replace all rows with the entries of *obj* (a JSON object)."""
        if not isinstance(obj, dict):
            raise LoadError(f"expected a JSON object, got {type(obj).__name__}")
        self.rows = rowstore.from_json(obj)
        _LOG.debug("loaded %d rows", len(self.rows))
        self._changed()

    # -- Row edits ------------------------------------------------------

    def add_row(self) -> Row:
        row = rowstore.add_row(self.rows)
        self._changed()
        return row

    def delete_row(self, index: int) -> Row:
        row = rowstore.delete_row(self.rows, index)
        self._changed()
        return row

    def set_key(self, index: int, key: str) -> Row:
        row = rowstore.set_key(self.rows, index, key)
        self._changed()
        return row

    def set_value(self, index: int, raw: Any) -> Row:
        row = rowstore.set_value(self.rows, index, raw)
        if not is_valid(row.value, row.type):
            _LOG.debug("row %d: invalid %s value %r", index, row.type, row.value)
        self._changed()
        return row

    def change_type(self, index: int, new_type: TypeTag | str) -> Row:
        row = rowstore.change_type(self.rows, index, new_type)
        self._changed()
        return row

    # -- Queries --------------------------------------------------------

    def validate(self, index: int) -> bool:
        row = self.rows[index]
        return is_valid(row.value, row.type)

    def invalid_rows(self) -> list[int]:
        """Indices of rows whose current value fails validation."""
        return [i for i, row in enumerate(self.rows) if not is_valid(row.value, row.type)]

    def display_value(self, index: int) -> Any:
        row = self.rows[index]
        return format_value(row.value, row.type)

    def parsed_value(self, index: int) -> Any:
        row = self.rows[index]
        return parse_value(row.value, row.type)

    # -- Export ---------------------------------------------------------

    def export_json(self) -> dict[str, Any]:
        return rowstore.to_json(self.rows)

    def export_schema(self) -> list[dict[str, Any]]:
        """Rows as ``{"key", "type", "value"}`` records, empty keys included."""
        return rowstore.to_schema(self.rows)

    def _changed(self) -> None:
        self._data = rowstore.to_json(self.rows)
        if self.on_change is not None:
            self.on_change(self._data)
