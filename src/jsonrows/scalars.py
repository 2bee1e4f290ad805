"""Scalar-level helpers: number, URL, calendar and JSON text recognition.

These follow the lenient rules of a browser form: numbers may carry trailing
garbage (``"12px"`` reads as ``12``) and URLs need a scheme. Calendar strings
are ISO-8601 or RFC 2822 only; free-form dates such as ``"March 7, 2024"``
are not recognised.
"""

from __future__ import annotations

import json
import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from email.utils import parsedate_to_datetime
from typing import Any
from urllib.parse import urlsplit

_FLOAT_PREFIX_RE = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_STRICT_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_WHITESPACE_RE = re.compile(r"[\s\x00-\x1f\x7f]")
_ISO_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Schemes that must name a host.
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def is_number(value: object) -> bool:
    """True for int / float values; bools are not numbers."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_float_prefix(value: object) -> float | None:
    """Read the leading number of *value*, or None.

    - int / float → itself as float (NaN → None)
    - str → longest numeric prefix after leading whitespace
    - anything else → None
    """
    if is_number(value):
        result = float(value)
    elif isinstance(value, str):
        m = _FLOAT_PREFIX_RE.match(value)
        if not m:
            return None
        result = float(m.group(1))
    else:
        return None
    return None if math.isnan(result) else result


def is_strict_number(value: object) -> bool:
    """True when the whole of *value* is a finite decimal number."""
    if is_number(value):
        return math.isfinite(value)
    if isinstance(value, str) and _STRICT_NUMBER_RE.match(value):
        return math.isfinite(float(value))
    return False


def number_to_string(value: int | float) -> str:
    """Shortest decimal text for *value* (``20.0`` → ``"20"``, ``1e16`` → digits)."""
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(repr(value)), "f")
    mantissa, _, exponent = repr(value).partition("e")
    return f"{mantissa}e{int(exponent):+d}"


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

def is_url(value: object) -> bool:
    """True when *value* is an absolute URL with a scheme.

    Web URLs may hold spaces in their path, query or fragment but not in the
    host. Other schemes allow no whitespace at all, so prose like
    ``"Note: call back"`` stays text.
    """
    if not isinstance(value, str):
        return False
    text = value.strip()
    if not _SCHEME_RE.match(text):
        return False
    try:
        parts = urlsplit(text)
        parts.port  # raises on a malformed port
    except ValueError:
        return False
    if parts.scheme.lower() in _HOST_SCHEMES:
        return bool(parts.hostname) and not _WHITESPACE_RE.search(parts.netloc)
    return not _WHITESPACE_RE.search(text)


# ---------------------------------------------------------------------------
# Calendar values
# ---------------------------------------------------------------------------

def parse_calendar(value: object) -> datetime | None:
    """Parse *value* as a calendar date or date-time, or return None.

    Accepts ``date`` / ``datetime`` objects, ISO-8601 strings and RFC 2822
    strings. The result may be naive.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def parse_instant(value: object) -> datetime | None:
    """Like parse_calendar but always timezone-aware.

    A bare ``YYYY-MM-DD`` string is midnight UTC; any other naive value is
    local time.
    """
    parsed = parse_calendar(value)
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        return parsed
    if isinstance(value, str) and _ISO_DATE_ONLY_RE.match(value.strip()):
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone()
    except (OverflowError, OSError, ValueError):
        return parsed.replace(tzinfo=timezone.utc)


def iso_instant(value: date) -> str:
    """UTC ``YYYY-MM-DDTHH:MM:SS.sssZ`` text for a date or datetime."""
    instant = parse_instant(value)
    utc = instant.astimezone(timezone.utc)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )


def iso_date(value: date) -> str:
    """``YYYY-MM-DD`` of a date, or of a datetime's UTC instant."""
    if not isinstance(value, datetime):
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    return iso_instant(value)[:10]


def local_minutes(value: datetime) -> str:
    """Local ``YYYY-MM-DDTHH:MM`` text, the datetime-local input format."""
    if value.tzinfo is not None:
        try:
            value = value.astimezone()
        except (OverflowError, OSError, ValueError):
            pass
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}"
    )


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def split_list(text: str) -> list[str]:
    """Split comma-separated *text*, trimming items and dropping empty ones."""
    return [item.strip() for item in text.split(",") if item.strip()]


# ---------------------------------------------------------------------------
# JSON text
# ---------------------------------------------------------------------------

def reject_json_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_json(text: str) -> tuple[bool, Any]:
    """Decode strict JSON *text* as ``(ok, value)``.

    ``NaN`` and ``Infinity`` are rejected, and nesting too deep to decode
    counts as malformed.
    """
    try:
        return True, json.loads(text, parse_constant=reject_json_constant)
    except (ValueError, RecursionError):
        return False, None
