"""Validation of raw values against a TypeTag."""

from __future__ import annotations

import math
from typing import Any, Callable

from .model import LOCATION_KEYS, TypeTag, _MissingType
from .scalars import (
    decode_json,
    is_number,
    is_strict_number,
    is_url,
    parse_calendar,
    parse_float_prefix,
    split_list,
)


def _is_blank(raw: Any) -> bool:
    return raw is None or isinstance(raw, _MissingType) or (isinstance(raw, str) and raw == "")


def _always(raw: Any) -> bool:
    return True


def _valid_number(raw: Any) -> bool:
    if isinstance(raw, bool):
        return False
    return parse_float_prefix(raw) is not None and is_strict_number(raw)


def _valid_money(raw: Any) -> bool:
    value = parse_float_prefix(raw)
    return value is not None and math.isfinite(value)


def _valid_calendar(raw: Any) -> bool:
    return parse_calendar(raw) is not None


def _valid_location(raw: Any) -> bool:
    if isinstance(raw, str):
        ok, raw = decode_json(raw)
        if not ok:
            return False
    if not isinstance(raw, dict):
        return False
    if not all(k in raw for k in LOCATION_KEYS):
        return False
    return all(_coordinate_ok(raw[k]) for k in LOCATION_KEYS)


def _coordinate_ok(value: Any) -> bool:
    if value is None or value == "":
        return True
    if isinstance(value, bool):
        return False
    return is_number(value) or parse_float_prefix(value) is not None


def _valid_json(raw: Any) -> bool:
    if not isinstance(raw, str):
        return True
    return decode_json(raw)[0]


def _valid_tags(raw: Any) -> bool:
    if isinstance(raw, str):
        tags = split_list(raw)
    elif isinstance(raw, (list, tuple)):
        tags = raw
    else:
        return True
    return all(isinstance(tag, str) and " " not in tag for tag in tags)


_CHECKS: dict[TypeTag, Callable[[Any], bool]] = {
    TypeTag.BOOLEAN: _always,
    TypeTag.STRING: _always,
    TypeTag.ARRAY_OF_STRINGS: _always,
    TypeTag.NUMBER: _valid_number,
    TypeTag.MONEY: _valid_money,
    TypeTag.DATE: _valid_calendar,
    TypeTag.DATETIME: _valid_calendar,
    TypeTag.URL: is_url,
    TypeTag.LOCATION: _valid_location,
    TypeTag.JSON: _valid_json,
    TypeTag.TAG_LIST: _valid_tags,
}


def is_valid(raw: Any, type_: TypeTag | str) -> bool:
    """Return whether *raw* is acceptable input for *type_*. Never raises.

    Blank input (``""``, ``None`` or ``Missing``) is valid for every type.
    Unknown tags accept anything.
    """
    if _is_blank(raw):
        return True
    try:
        tag = TypeTag.coerce(type_)
    except ValueError:
        return True
    return _CHECKS[tag](raw)
