"""Row list operations: import/export of a JSON object and row edits.

Rows are addressed by position. Every function here mutates or reads the
list it is given and never raises for bad values; index errors from
``delete_row`` / ``set_*`` propagate as ``IndexError``.
"""

from __future__ import annotations

from typing import Any

from .codec import parse_value
from .detector import detect
from .model import Row, TypeTag
from .validator import is_valid


def from_json(obj: dict[str, Any]) -> list[Row]:
    """One row per key of *obj*, in order, typed by detect(); values unchanged."""
    return [Row(key=key, type=detect(value), value=value) for key, value in obj.items()]


def to_json(rows: list[Row]) -> dict[str, Any]:
    """Export *rows* as a JSON object.

    Rows with an empty key are skipped; when keys repeat, the last row wins.
    """
    result: dict[str, Any] = {}
    for row in rows:
        if row.key:
            result[row.key] = parse_value(row.value, row.type)
    return result


def to_schema(rows: list[Row]) -> list[dict[str, Any]]:
    """Export every row as ``{"key", "type", "value"}`` with the value parsed."""
    return [
        {"key": row.key, "type": str(row.type), "value": parse_value(row.value, row.type)}
        for row in rows
    ]


def change_type(rows: list[Row], index: int, new_type: TypeTag | str) -> Row:
    """Switch the type of ``rows[index]``.

    The value is re-parsed only when it is valid for *new_type*; otherwise the
    raw value is kept so it can still be corrected.
    """
    row = rows[index]
    tag = TypeTag.coerce(new_type)
    row.type = tag
    if is_valid(row.value, tag):
        row.value = parse_value(row.value, tag)
    return row


def add_row(rows: list[Row]) -> Row:
    row = Row(key="", type=TypeTag.STRING, value="")
    rows.append(row)
    return row


def delete_row(rows: list[Row], index: int) -> Row:
    return rows.pop(index)


def set_key(rows: list[Row], index: int, key: str) -> Row:
    row = rows[index]
    row.key = key
    return row


def set_value(rows: list[Row], index: int, value: Any) -> Row:
    row = rows[index]
    row.value = value
    return row
