"""jsonrows: edit a JSON object as typed (key, type, value) rows."""

from .codec import format_value, parse_value
from .detector import detect
from .document import Document
from .errors import ConversionError, JsonRowsError, LoadError
from .model import Missing, Row, TypeTag
from .rowstore import (
    add_row,
    change_type,
    delete_row,
    from_json,
    set_key,
    set_value,
    to_json,
    to_schema,
)
from .validator import is_valid
from .yaml_converter import YAMLConverter, parse_yaml, to_yaml
from .repl import RowEditorRepl

__all__ = [
    "detect",
    "parse_value",
    "format_value",
    "is_valid",
    "from_json",
    "to_json",
    "to_schema",
    "change_type",
    "add_row",
    "delete_row",
    "set_key",
    "set_value",
    "Document",
    "Missing",
    "Row",
    "TypeTag",
    "YAMLConverter",
    "parse_yaml",
    "to_yaml",
    "JsonRowsError",
    "LoadError",
    "ConversionError",
    "RowEditorRepl",
]
