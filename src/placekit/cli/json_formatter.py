"""
JSON Output Formatter for the placekit CLI

Envelope used by every command when the --json flag is given.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "encode", "lookup")
        data: The command's output data
        errors: List of error messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(success=True, command="encode", data={"placekey": "@5vg-7gq-tvz"})
    """
    if errors is None:
        errors = []

    # If there are errors, success should be False
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": safe_json_serialize(data),
        "errors": errors,
    }

    try:
        return orjson.dumps(
            json_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS,
        )
    except TypeError as e:
        error_data = {
            "success": False,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": command,
            "data": None,
            "errors": [f"JSON serialization failed: {e!s}"],
        }
        return orjson.dumps(
            error_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        )


def safe_json_serialize(obj: Any) -> Any:
    """
    Convert an object to a JSON-serializable structure.

    Sets become sorted lists, tuples become lists and objects exposing
    ``to_dict`` or ``model_dump`` are converted through them.

    Example:
        >>> safe_json_serialize({"neighbors": {"@b", "@a"}})
        {'neighbors': ['@a', '@b']}
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, dict):
        return {key: safe_json_serialize(value) for key, value in obj.items()}
    if isinstance(obj, (set, frozenset)):
        return sorted(safe_json_serialize(item) for item in obj)
    if isinstance(obj, (list, tuple)):
        return [safe_json_serialize(item) for item in obj]
    if hasattr(obj, "model_dump"):
        return safe_json_serialize(obj.model_dump())
    if hasattr(obj, "to_dict"):
        return safe_json_serialize(obj.to_dict())
    return str(obj)
