"""JSON metadata document helpers.

Keys are addressed with dotted paths (``"extents.x"``); missing keys read
back as the supplied default.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from .errors import E_METADATA, corrupt

__all__ = [
    "load_metadata",
    "dump_metadata",
    "get_value",
    "get_int",
    "get_uint",
    "get_str",
]

_MISSING = object()


def load_metadata(text: str) -> Dict[str, Any]:
    try:
        doc = json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as e:
        raise corrupt(f"Malformed metadata: {e}", code=E_METADATA) from e
    if not isinstance(doc, dict):
        raise corrupt("Metadata root must be an object", code=E_METADATA)
    return doc


def dump_metadata(doc: Dict[str, Any]) -> str:
    return json.dumps(doc, sort_keys=True, separators=(",", ":"))


def get_value(doc: Dict[str, Any], path: str, default: Any = None) -> Any:
    node: Any = doc
    for key in path.split("."):
        if not isinstance(node, dict):
            return default
        node = node.get(key, _MISSING)
        if node is _MISSING:
            return default
    return node


def get_int(doc: Dict[str, Any], path: str, default: int = 0) -> int:
    value = get_value(doc, path, default)
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise corrupt(
        f"Metadata field '{path}' is not an integer: {value!r}",
        {"field": path},
        code=E_METADATA,
    )


def get_uint(doc: Dict[str, Any], path: str, default: int = 0) -> int:
    value = get_int(doc, path, default)
    if value < 0:
        raise corrupt(
            f"Metadata field '{path}' is negative: {value}",
            {"field": path},
            code=E_METADATA,
        )
    return value


def get_str(doc: Dict[str, Any], path: str, default: str = "") -> str:
    value = get_value(doc, path, default)
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        raise corrupt(
            f"Metadata field '{path}' is not a string",
            {"field": path},
            code=E_METADATA,
        )
    return str(value)
