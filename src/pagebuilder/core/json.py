"""Fast, type-safe JSON encoding and decoding for page documents."""

from typing import Any
import json
import sys

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def loads_object(text: str | bytes) -> dict[str, Any]:
    """
    Decode a JSON document whose top level must be an object.

    Args:
        text: JSON text or UTF-8 bytes

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If decoding fails or the top level is not an object
    """
    data = text.encode("utf-8") if isinstance(text, str) else text

    try:
        result = msgspec.json.decode(data)
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected dict, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Keys are sorted in compact mode so equal documents encode identically.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # Use orjson for compact output (fastest)
    if indent == 0:
        try:
            return orjson.dumps(obj, option=orjson.OPT_SORT_KEYS).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    # Use stdlib for pretty-printed output or as fallback (most compatible)
    return json.dumps(
        obj,
        indent=indent if indent > 0 else None,
        sort_keys=True,
        ensure_ascii=False,
        default=str,
    )


def validate_json_size(data: str | bytes, max_size: int, name: str = "JSON") -> None:
    """
    Validate JSON size before decoding.

    Args:
        data: JSON text to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        JSONParseError: If size exceeds limit
    """
    size = len(data) if isinstance(data, bytes) else sys.getsizeof(data)
    if size > max_size:
        raise JSONParseError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 64, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion when rendering.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        JSONParseError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise JSONParseError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
