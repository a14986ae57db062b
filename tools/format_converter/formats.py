"""Supported formats, format resolution and per-format parse/serialize routines."""

import datetime
import json
import re
from enum import Enum
from pathlib import PurePath
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, Union

import tomlkit
import yaml
from tomlkit.exceptions import TOMLKitError

try:
    import tomllib
except ImportError:  # Python < 3.11
    import tomli as tomllib

from shared.logger import get_logger

from .errors import FormatRequired, ParseError, SerializeError, UnsupportedFormat

logger = get_logger(__name__)

# Shared in-memory representation produced by every parser and consumed by every serializer.
Value = Union[None, bool, int, float, str, List["Value"], Dict[str, "Value"]]

AUTO = "auto"

# tomllib appends the error position to its message.
_TOML_POSITION = re.compile(
    r"^(?P<detail>.*) \(at line (?P<line>\d+), column (?P<column>\d+)\)$", re.DOTALL
)


class Format(str, Enum):
    """Supported conversion formats."""

    JSON = "json"
    YAML = "yaml"
    TOML = "toml"

    def parse(self, text: str) -> Value:
        """
        Parse text of this format into a generic value.

        Raises:
            ParseError: If the text is not a valid document
        """
        parser, _ = _CODECS[self]
        try:
            return normalize(parser(text), self)
        except RecursionError:
            raise ParseError(self, "document is nested too deeply") from None

    def serialize(self, value: Value, pretty: bool = False, indent: int = 2) -> str:
        """
        Render a generic value in this format, without a trailing newline.

        Raises:
            SerializeError: If the value cannot be represented in this format
        """
        _, serializer = _CODECS[self]
        return serializer(value, pretty, indent)


EXTENSIONS: Dict[str, Format] = {
    ".json": Format.JSON,
    ".yaml": Format.YAML,
    ".yml": Format.YAML,
    ".toml": Format.TOML,
}


def detect_format(filename: Optional[Union[str, PurePath]]) -> Format:
    """
    Infer a format from a filename extension (case-insensitive).

    Raises:
        FormatRequired: If there is no filename or the extension is unknown
    """
    if filename is None:
        raise FormatRequired()

    suffix = PurePath(filename).suffix.lower()
    if suffix not in EXTENSIONS:
        raise FormatRequired(str(filename))

    logger.debug(f"Detected {EXTENSIONS[suffix].value} from {filename}")
    return EXTENSIONS[suffix]


def resolve_format(
    tag: Union[str, Format],
    filename: Optional[Union[str, PurePath]] = None,
) -> Format:
    """
    Map a source format tag to a Format.

    Args:
        tag: One of "auto", "json", "yaml", "toml" (case-insensitive)
        filename: Name used for extension sniffing when tag is "auto"

    Returns:
        Resolved Format

    Raises:
        UnsupportedFormat: If the tag is not recognised
        FormatRequired: If "auto" cannot be resolved from the filename
    """
    if isinstance(tag, Format):
        return tag

    normalized = str(tag).strip().lower()
    if normalized == AUTO:
        return detect_format(filename)

    try:
        return Format(normalized)
    except ValueError:
        raise UnsupportedFormat(tag) from None


def resolve_target_format(tag: Union[str, Format]) -> Format:
    """Map a target format tag to a Format; "auto" is not a valid target."""
    if not isinstance(tag, Format) and str(tag).strip().lower() == AUTO:
        raise UnsupportedFormat(tag)
    return resolve_format(tag)


def normalize(data: Any, format: Format, _ancestors: Optional[Set[int]] = None) -> Value:
    """
    Convert parser output into the shared value representation.

    Timestamps become ISO-8601 strings, tuples become lists, mapping
    subclasses become plain dicts and non-string keys are spelled as JSON.
    Shared YAML anchors are copied; an alias that refers to one of its own
    ancestors cannot be represented as a tree.

    Raises:
        ParseError: If the document holds a value with no generic equivalent
            or a recursive alias
    """
    if data is None or isinstance(data, (bool, int, float, str)):
        return data

    if isinstance(data, (datetime.datetime, datetime.date, datetime.time)):
        return data.isoformat()

    if isinstance(data, (dict, list, tuple)):
        ancestors = _ancestors if _ancestors is not None else set()
        if id(data) in ancestors:
            raise ParseError(format, "recursive alias")

        ancestors.add(id(data))
        try:
            if isinstance(data, dict):
                return {
                    _normalize_key(key): normalize(item, format, ancestors)
                    for key, item in data.items()
                }
            return [normalize(item, format, ancestors) for item in data]
        finally:
            ancestors.discard(id(data))

    raise ParseError(format, f"unsupported value type: {type(data).__name__}")


def _normalize_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    if isinstance(key, (datetime.datetime, datetime.date, datetime.time)):
        return key.isoformat()
    return str(key)


# JSON


def _reject_constant(name: str) -> Any:
    raise ParseError(Format.JSON, f"{name} is not valid JSON")


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(Format.JSON, e.msg, e.lineno, e.colno) from e


def _serialize_json(value: Value, pretty: bool, indent: int) -> str:
    try:
        if pretty:
            return json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializeError(Format.JSON, str(e)) from e


# YAML


def _parse_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark or e.context_mark
        detail = " ".join(part for part in (e.context, e.problem) if part) or str(e)
        if mark is None:
            raise ParseError(Format.YAML, detail) from e
        raise ParseError(Format.YAML, detail, mark.line + 1, mark.column + 1) from e
    except yaml.YAMLError as e:
        raise ParseError(Format.YAML, str(e)) from e


def _serialize_yaml(value: Value, pretty: bool, indent: int) -> str:
    # Block style is always indented, so pretty has no effect here.
    try:
        text = yaml.safe_dump(
            value,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            indent=indent,
        )
    except yaml.YAMLError as e:
        raise SerializeError(Format.YAML, str(e)) from e
    return text.rstrip("\n")


# TOML


def _parse_toml(text: str) -> Any:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        match = _TOML_POSITION.match(str(e))
        if match is None:
            raise ParseError(Format.TOML, str(e)) from e
        raise ParseError(
            Format.TOML, match["detail"], int(match["line"]), int(match["column"])
        ) from e


def _check_toml(value: Value, path: Tuple[str, ...] = ()) -> None:
    """Reject nulls, which TOML has no spelling for."""
    if value is None:
        location = ".".join(path) or "<root>"
        raise SerializeError(Format.TOML, f"null is not representable (at {location})")

    if isinstance(value, dict):
        for key, item in value.items():
            _check_toml(item, path + (key,))

    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_toml(item, path + (str(index),))


def _serialize_toml(value: Value, pretty: bool, indent: int) -> str:
    if not isinstance(value, dict):
        raise SerializeError(Format.TOML, "root must be a table")

    _check_toml(value)

    try:
        text = tomlkit.dumps(value)
    except (TypeError, ValueError, TOMLKitError) as e:
        raise SerializeError(Format.TOML, str(e)) from e

    # Encoded strings escape their newlines, so dropping blank lines is safe.
    if not pretty:
        text = "\n".join(line for line in text.splitlines() if line.strip())
    return text.rstrip("\n")


_CODECS: Dict[Format, Tuple[Callable[[str], Any], Callable[[Value, bool, int], str]]] = {
    Format.JSON: (_parse_json, _serialize_json),
    Format.YAML: (_parse_yaml, _serialize_yaml),
    Format.TOML: (_parse_toml, _serialize_toml),
}
