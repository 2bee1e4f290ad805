"""Data model for jsonrows: type tags, rows and the absent-value sentinel."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


# ---------------------------------------------------------------------------
# Missing: singleton for absent values
# ---------------------------------------------------------------------------

class _MissingType:
    """Sentinel for a value that is absent, as opposed to JSON ``null``."""

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Missing"

    def __bool__(self) -> bool:
        return False


Missing = _MissingType()


JSONValue = Union[str, int, float, bool, None, list[Any], dict[str, Any]]


# ---------------------------------------------------------------------------
# TypeTag
# ---------------------------------------------------------------------------

class TypeTag(str, Enum):
    STRING = "string"
    NUMBER = "number"
    MONEY = "money"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    URL = "url"
    ARRAY_OF_STRINGS = "array of strings"
    TAG_LIST = "tag list"
    LOCATION = "location"
    JSON = "json"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, label: TypeTag | str) -> TypeTag:
        """Return the tag for *label*; raises ValueError for unknown labels."""
        if isinstance(label, cls):
            return label
        try:
            return cls(label.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(f"unknown type tag: {label!r}") from None


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

LOCATION_KEYS: tuple[str, ...] = ("latitude", "longitude", "altitude")
LOCATION_DEFAULT = "0.00"


def default_location() -> dict[str, str]:
    return {k: LOCATION_DEFAULT for k in LOCATION_KEYS}


# ---------------------------------------------------------------------------
# Row
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Row:
    """One editable top-level entry of a document.

    ``value`` holds the typed JSON value right after import, or the raw
    string / bool the user last entered.
    """
    key: str = ""
    type: TypeTag = TypeTag.STRING
    value: Any = ""
