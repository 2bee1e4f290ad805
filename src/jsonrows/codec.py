"""Value codec: raw editable form ⇄ typed JSON value, per TypeTag.

Both directions are total. Input that cannot be read as the target type
falls back to that type's zero value instead of raising.
"""

from __future__ import annotations

import json
import math
import re
from datetime import date
from typing import Any, Callable

from .model import (
    LOCATION_DEFAULT,
    LOCATION_KEYS,
    JSONValue,
    TypeTag,
    default_location,
)
from .scalars import (
    decode_json,
    is_number,
    iso_date,
    iso_instant,
    local_minutes,
    number_to_string,
    parse_float_prefix,
    parse_instant,
    split_list,
)

_LOCAL_MINUTES_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$")
_ISO_DATE_PREFIX_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:$|[T ])")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def is_tag(item: object) -> bool:
    return isinstance(item, str) and item != "" and " " not in item


def _filled(value: object) -> bool:
    """False for the values a form treats as blank: None, False, 0, NaN, ""."""
    if value is None or value is False or value == "":
        return False
    if is_number(value):
        return value != 0 and not math.isnan(value)
    return bool(value) or isinstance(value, (list, dict))


def _text_or_blank(value: object) -> Any:
    return value if _filled(value) else ""


def _display_text(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return number_to_string(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else _display_text(v) for v in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def _coordinate(obj: object, key: str) -> str:
    """One location coordinate as text; blank or non-numeric reads as 0.00."""
    raw = obj.get(key) if isinstance(obj, dict) else None
    if raw is None or isinstance(raw, bool):
        return LOCATION_DEFAULT
    if is_number(raw):
        return number_to_string(raw) if math.isfinite(raw) else LOCATION_DEFAULT
    if isinstance(raw, str) and parse_float_prefix(raw) is not None:
        return raw
    return LOCATION_DEFAULT


# ---------------------------------------------------------------------------
# parse: raw → typed JSON value
# ---------------------------------------------------------------------------

def _parse_boolean(raw: Any) -> JSONValue:
    return raw is True or raw == "true"


def _parse_number(raw: Any, fallback: int | float) -> JSONValue:
    result = parse_float_prefix(raw)
    if result is None or not math.isfinite(result) or result == 0:
        return fallback
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if result.is_integer() and abs(result) < 2 ** 53:
        return int(result)
    return result


def _parse_array(raw: Any) -> JSONValue:
    if isinstance(raw, str):
        return split_list(raw)
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return []


def _parse_tags(raw: Any) -> JSONValue:
    if isinstance(raw, str):
        return [item for item in split_list(raw) if " " not in item]
    if isinstance(raw, (list, tuple)):
        return [item for item in raw if is_tag(item)]
    return []


def _parse_location(raw: Any) -> JSONValue:
    if isinstance(raw, str):
        if not raw.strip():
            return default_location()
        ok, raw = decode_json(raw)
        if not ok:
            return default_location()
    if not isinstance(raw, dict):
        return default_location()
    return {k: _coordinate(raw, k) for k in LOCATION_KEYS}


def _parse_json(raw: Any) -> JSONValue:
    if isinstance(raw, str):
        ok, decoded = decode_json(raw)
        return decoded if ok else {}
    if raw is None or isinstance(raw, (dict, list)):
        return raw
    return {}


def _parse_date(raw: Any) -> JSONValue:
    if isinstance(raw, date):
        return iso_date(raw)
    return _text_or_blank(raw)


def _parse_datetime(raw: Any) -> JSONValue:
    if isinstance(raw, date):
        return iso_instant(raw)
    return _text_or_blank(raw)


_PARSERS: dict[TypeTag, Callable[[Any], JSONValue]] = {
    TypeTag.BOOLEAN: _parse_boolean,
    TypeTag.NUMBER: lambda raw: _parse_number(raw, 0),
    TypeTag.MONEY: lambda raw: _parse_number(raw, 0.0),
    TypeTag.ARRAY_OF_STRINGS: _parse_array,
    TypeTag.TAG_LIST: _parse_tags,
    TypeTag.LOCATION: _parse_location,
    TypeTag.JSON: _parse_json,
    TypeTag.DATE: _parse_date,
    TypeTag.DATETIME: _parse_datetime,
    TypeTag.URL: _text_or_blank,
    TypeTag.STRING: _text_or_blank,
}


def parse_value(raw: Any, type_: TypeTag | str) -> JSONValue:
    """Convert *raw* (typed value or edited text) to a JSON value of *type_*.

    Never raises; unreadable input yields the type's zero value
    (``False``, ``0``, ``0.0``, ``[]``, ``{}``, ``""`` or the default
    location). Unknown tags are treated as ``string``.
    """
    parser = _PARSERS.get(_tag(type_), _text_or_blank)
    return parser(raw)


# ---------------------------------------------------------------------------
# format: typed JSON value → raw display form
# ---------------------------------------------------------------------------

def _format_list(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ", ".join("" if v is None else _display_text(v) for v in value)
    return value


def _format_object(value: Any) -> Any:
    if value is None or isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return value


def _format_money(value: Any) -> Any:
    if is_number(value) and math.isfinite(value):
        return f"{value:.2f}"
    return value


def _format_date(value: Any) -> Any:
    if isinstance(value, date):
        return iso_date(value)
    if isinstance(value, str):
        m = _ISO_DATE_PREFIX_RE.match(value.strip())
        if m:
            return m.group(1)
    return value


def _format_datetime(value: Any) -> Any:
    if isinstance(value, str) and _LOCAL_MINUTES_RE.match(value):
        return value
    if isinstance(value, (str, date)):
        instant = parse_instant(value)
        if instant is not None:
            return local_minutes(instant)
    return value


_FORMATTERS: dict[TypeTag, Callable[[Any], Any]] = {
    TypeTag.ARRAY_OF_STRINGS: _format_list,
    TypeTag.TAG_LIST: _format_list,
    TypeTag.LOCATION: _format_object,
    TypeTag.JSON: _format_object,
    TypeTag.MONEY: _format_money,
    TypeTag.DATE: _format_date,
    TypeTag.DATETIME: _format_datetime,
}


def format_value(value: Any, type_: TypeTag | str) -> Any:
    """Render *value* in the editable form used for *type_*.

    For display only; the result is not fed back through parse_value.
    """
    formatter = _FORMATTERS.get(_tag(type_))
    return formatter(value) if formatter else value


def _tag(type_: TypeTag | str) -> TypeTag | None:
    try:
        return TypeTag.coerce(type_)
    except ValueError:
        return None
