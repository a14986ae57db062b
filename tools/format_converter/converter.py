"""Core data conversion logic."""

from pathlib import Path
from typing import Optional, Union

import jmespath
from jmespath.exceptions import JMESPathError

from shared.logger import get_logger

from .errors import ConversionError, QueryError
from .formats import Format, Value, resolve_format, resolve_target_format

logger = get_logger(__name__)


def convert(
    text: str,
    source: Union[str, Format],
    target: Union[str, Format],
    pretty: bool = False,
    filename: Optional[Union[str, Path]] = None,
    indent: int = 2,
) -> str:
    """
    Convert a document from one format to another.

    The target is resolved first so an unsupported target is rejected
    before any parsing happens. Same-format conversions still go through
    parse and serialize, which validates and normalizes the input.

    Args:
        text: Input document
        source: Source format tag ("auto", "json", "yaml", "toml")
        target: Target format tag ("json", "yaml", "toml")
        pretty: Whether to pretty-print
        filename: Name used to detect the source format when it is "auto"
        indent: Indentation width for pretty JSON and YAML

    Returns:
        Converted document, without a trailing newline

    Raises:
        ConversionError: If a format cannot be resolved, or parsing or
            serialization fails
    """
    target_format = resolve_target_format(target)
    source_format = resolve_format(source, filename)

    value = source_format.parse(text)
    return target_format.serialize(value, pretty=pretty, indent=indent)


class DataConverter:
    """
    Convert between JSON, YAML, and TOML formats.

    Supports file loading with format auto-detection and JMESPath queries.
    """

    def __init__(self):
        """Initialize data converter."""
        logger.debug("Initialized DataConverter")

    def load_file(self, filepath: Path, format: Optional[Union[str, Format]] = None) -> Value:
        """
        Load data from file.

        Args:
            filepath: Path to file
            format: Format to parse (auto-detect if None)

        Returns:
            Parsed data

        Raises:
            FileNotFoundError: If the file does not exist
            FormatRequired: If the format cannot be detected
            ParseError: If parsing fails
        """
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        # Resolve before reading so an undetectable format fails without I/O
        source_format = resolve_format(format or "auto", filepath)

        logger.info(f"Loading {source_format.value} from {filepath}")
        content = filepath.read_text(encoding="utf-8")
        return self.parse(content, source_format)

    def parse(self, data: str, format: Union[str, Format]) -> Value:
        """
        Parse data string.

        Args:
            data: Data string
            format: Input format

        Returns:
            Parsed data

        Raises:
            ParseError: If parsing fails
        """
        source_format = resolve_format(format)
        try:
            return source_format.parse(data)
        except ConversionError as e:
            logger.debug(f"Parse failed: {e}")
            raise

    def serialize(
        self,
        data: Value,
        to_format: Union[str, Format],
        pretty: bool = False,
        indent: int = 2,
    ) -> str:
        """
        Serialize data to specified format.

        Args:
            data: Data to serialize
            to_format: Target format
            pretty: Whether to pretty-print (no effect on YAML)
            indent: Indentation level

        Returns:
            Formatted string

        Raises:
            SerializeError: If the data cannot be represented in the target format
        """
        target_format = resolve_target_format(to_format)
        try:
            output = target_format.serialize(data, pretty=pretty, indent=indent)
        except ConversionError as e:
            logger.debug(f"Serialize failed: {e}")
            raise

        logger.debug(f"Serialized {len(output)} characters of {target_format.value}")
        return output

    def convert_text(
        self,
        text: str,
        from_format: Union[str, Format],
        to_format: Union[str, Format],
        pretty: bool = False,
        indent: int = 2,
        filename: Optional[Union[str, Path]] = None,
    ) -> str:
        """Convert a document held in memory; see convert()."""
        logger.debug(f"Converting {from_format} to {to_format} (pretty={pretty})")
        return convert(text, from_format, to_format, pretty=pretty, filename=filename, indent=indent)

    def query(self, data: Value, query_str: str) -> Value:
        """
        Query data using JMESPath.

        Args:
            data: Data to query
            query_str: JMESPath query string

        Returns:
            Query result (None when nothing matches)

        Raises:
            QueryError: If the expression is invalid
        """
        try:
            return jmespath.search(query_str, data)

        except JMESPathError as e:
            logger.debug(f"Query {query_str!r} failed: {e}")
            raise QueryError(query_str, str(e)) from e
