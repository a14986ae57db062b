"""Format Converter - Convert between JSON, YAML, and TOML formats."""

from .converter import DataConverter, convert
from .errors import (
    ConversionError,
    FormatRequired,
    ParseError,
    QueryError,
    SerializeError,
    UnsupportedFormat,
)
from .formats import Format, Value, resolve_format, resolve_target_format

__all__ = [
    "DataConverter",
    "convert",
    "Format",
    "Value",
    "resolve_format",
    "resolve_target_format",
    "ConversionError",
    "FormatRequired",
    "ParseError",
    "QueryError",
    "SerializeError",
    "UnsupportedFormat",
]
