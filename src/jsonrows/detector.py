"""Type inference: guess a TypeTag for a value read from an untyped document."""

from __future__ import annotations

import re

from .model import LOCATION_KEYS, TypeTag, _MissingType
from .scalars import is_number, is_url, number_to_string, parse_calendar

_MONEY_RE = re.compile(r"^\d+\.\d{2}$")
_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def detect(value: object) -> TypeTag:
    """Return the TypeTag for *value*. Never raises.

    Checks run in a fixed order and the first match wins:

    1. bool → boolean
    2. None / Missing → string
    3. list → tag list when every item is a string without a space,
       otherwise array of strings
    4. dict → location when it has latitude, longitude and altitude,
       otherwise json
    5. number → money when its decimal text has exactly two fractional
       digits, otherwise number
    6. str → url, then datetime, then date, then string
    """
    if isinstance(value, bool):
        return TypeTag.BOOLEAN
    if value is None or isinstance(value, _MissingType):
        return TypeTag.STRING
    if isinstance(value, (list, tuple)):
        if all(isinstance(item, str) and " " not in item for item in value):
            return TypeTag.TAG_LIST
        return TypeTag.ARRAY_OF_STRINGS
    if isinstance(value, dict):
        if all(k in value for k in LOCATION_KEYS):
            return TypeTag.LOCATION
        return TypeTag.JSON
    if is_number(value):
        if _MONEY_RE.match(number_to_string(value)):
            return TypeTag.MONEY
        return TypeTag.NUMBER
    if isinstance(value, str):
        return _detect_text(value)
    return TypeTag.STRING


def _detect_text(text: str) -> TypeTag:
    if is_url(text):
        return TypeTag.URL
    if parse_calendar(text) is not None:
        if "T" in text or _DATETIME_RE.search(text):
            return TypeTag.DATETIME
        if _DATE_RE.search(text):
            return TypeTag.DATE
    return TypeTag.STRING
