"""Exceptions raised by the format converter."""

from typing import Any, Optional


def _format_name(format: Any) -> str:
    return getattr(format, "value", format)


class ConversionError(ValueError):
    """Base exception for conversion operations."""


class UnsupportedFormat(ConversionError):
    """Format tag is not one of the supported formats."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Unsupported format: {tag!r}")


class FormatRequired(ConversionError):
    """Source format is 'auto' but cannot be inferred."""

    def __init__(self, filename: Optional[str] = None):
        self.filename = filename
        if filename is None:
            message = "Input format is required when reading from stdin (use --from)"
        else:
            message = f"Cannot auto-detect format for: {filename} (use --from)"
        super().__init__(message)


class ParseError(ConversionError):
    """
    Input text is not a valid document of the declared format.

    Attributes:
        format: Format that failed to parse
        detail: Message from the underlying parser
        line: 1-based line number, when the parser reports one
        column: 1-based column number, when the parser reports one
    """

    def __init__(
        self,
        format: Any,
        detail: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.format = format
        self.detail = detail
        self.line = line
        self.column = column

        message = f"Failed to parse {_format_name(format)}: {detail}"
        if line is not None:
            message += f" (line {line}, column {column})"
        super().__init__(message)


class SerializeError(ConversionError):
    """Value cannot be rendered in the target format."""

    def __init__(self, format: Any, detail: str):
        self.format = format
        self.detail = detail
        super().__init__(f"Failed to convert to {_format_name(format)}: {detail}")


class QueryError(ConversionError):
    """JMESPath expression is invalid."""

    def __init__(self, expression: str, detail: str):
        self.expression = expression
        self.detail = detail
        super().__init__(f"Query failed: {detail}")
