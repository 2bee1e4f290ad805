"""Exceptions raised by the jsonrows collaborators.

The conversion core (detector, codec, validator, rowstore) never raises.
"""

from __future__ import annotations


class JsonRowsError(Exception):
    """Base class for jsonrows errors."""


class LoadError(JsonRowsError):
    """A document could not be read or is not a JSON object."""


class ConversionError(JsonRowsError):
    """Text could not be converted between YAML / JSON and a value."""
