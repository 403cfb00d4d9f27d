"""Reading and writing the JSON documents tunneldoc tracks."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from tunneldoc.core.errors import ConfigParseError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def load_json_object(path: Path) -> dict[str, Any]:
    """Parse *path* as a strict JSON object.

    Raises ``FileNotFoundError`` when the file is absent and
    :class:`ConfigParseError` when it is not valid JSON or not an object.
    ``NaN`` and ``Infinity`` are rejected, as is nesting too deep to parse.
    """
    raw = path.read_bytes()
    try:
        data = json.loads(raw.decode("utf-8-sig"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise ConfigParseError(path, str(e)) from e
    except RecursionError as e:
        raise ConfigParseError(path, "document is nested too deeply") from e
    if not isinstance(data, dict):
        raise ConfigParseError(path, f"top level must be an object, got {type(data).__name__}")
    return data


def dump_json_object(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def child_object(parent: dict[str, Any], key: str, path: Path, dotted: str) -> dict[str, Any] | None:
    """Return ``parent[key]`` if it is an object, None if absent.

    Any other value is a shape error for the document at *path*.
    """
    value = parent.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ConfigParseError(path, f"{dotted} must be an object, got {type(value).__name__}")
    return value
