"""YAML / JSON text conversion for documents.

The row engine works on decoded values only; these helpers sit at the edge
and turn text into values and back.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml

from .errors import ConversionError
from .scalars import reject_json_constant

_LOG = logging.getLogger(__name__)

YAML_INDENT = 2
JSON_INDENT = 2


class _JSONLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as strings, so results stay JSON values."""


_JSONLoader.yaml_implicit_resolvers = {
    key: [(tag, regexp) for tag, regexp in values if tag != "tag:yaml.org,2002:timestamp"]
    for key, values in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that writes repeated objects out in full."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------

def parse_yaml(text: str) -> Any:
    """Decode YAML *text*; raises ConversionError when it is malformed."""
    try:
        return yaml.load(text, Loader=_JSONLoader)
    except yaml.YAMLError as exc:
        raise ConversionError(f"invalid YAML: {exc}") from exc


def to_yaml(value: Any) -> str:
    """Encode *value* as block-style YAML, keys in their original order."""
    try:
        return yaml.dump(
            value,
            Dumper=_NoAliasDumper,
            indent=YAML_INDENT,
            width=float("inf"),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as exc:
        raise ConversionError(f"cannot represent value as YAML: {exc}") from exc


def parse_json_text(text: str) -> Any:
    """Decode JSON *text*; raises ConversionError when it is malformed."""
    try:
        return json.loads(text, parse_constant=reject_json_constant)
    except (ValueError, RecursionError) as exc:
        raise ConversionError(f"invalid JSON: {exc}") from exc


def to_json_text(value: Any) -> str:
    try:
        return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ConversionError(f"cannot represent value as JSON: {exc}") from exc


# ---------------------------------------------------------------------------
# YAMLConverter
# ---------------------------------------------------------------------------

class YAMLConverter:
    """Holds one decoded value and converts it to and from text.

    Setters report success as a bool and getters return ``""`` on failure;
    the cause is logged.

    Usage::

        conv = YAMLConverter()
        conv.set_yaml("name: x\\ncount: 3\\n")   # → True
        conv.get_json()                          # → '{\\n  "name": "x", ...'
    """

    def __init__(self) -> None:
        self.data: Any = {}

    def set_yaml(self, text: str) -> bool:
        try:
            self.data = parse_yaml(text)
        except ConversionError as exc:
            _LOG.error("Error parsing YAML: %s", exc)
            return False
        return True

    def get_yaml(self) -> str:
        try:
            return to_yaml(self.data)
        except ConversionError as exc:
            _LOG.error("Error converting to YAML: %s", exc)
            return ""

    def set_json(self, text: str) -> bool:
        try:
            self.data = parse_json_text(text)
        except ConversionError as exc:
            _LOG.error("Error parsing JSON: %s", exc)
            return False
        return True

    def get_json(self) -> str:
        try:
            return to_json_text(self.data)
        except ConversionError as exc:
            _LOG.error("Error converting to JSON: %s", exc)
            return ""

    def get_data(self) -> Any:
        return self.data

    def set_data(self, data: Any) -> None:
        self.data = data
