"""Reading and writing document files (.json, .yaml, .yml)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .errors import ConversionError, LoadError
from .yaml_converter import parse_json_text, parse_yaml, to_json_text, to_yaml

_LOG = logging.getLogger(__name__)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def is_yaml_path(path: str | Path) -> bool:
    return Path(path).suffix.lower() in _YAML_SUFFIXES


def load_document(path: str | Path) -> Any:
    """Read *path* and return the decoded value.

    YAML is chosen by suffix; anything else is read as JSON. Raises
    LoadError when the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"cannot read '{path}': {exc}") from exc
    try:
        value = parse_yaml(text) if is_yaml_path(path) else parse_json_text(text)
    except ConversionError as exc:
        raise LoadError(f"cannot decode '{path}': {exc}") from exc
    _LOG.debug("loaded %s", path)
    return value


def save_document(path: str | Path, value: Any) -> None:
    """Write *value* to *path* as YAML or JSON, chosen by suffix."""
    path = Path(path)
    text = to_yaml(value) if is_yaml_path(path) else to_json_text(value) + "\n"
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"cannot write '{path}': {exc}") from exc
    _LOG.debug("saved %s", path)
