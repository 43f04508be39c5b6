"""IO helpers for build spec data sources."""

from __future__ import annotations
from pathlib import Path
from typing import Any, Tuple

from PIL import Image, UnidentifiedImageError

from ..constants import MAX_HEX_STRING_LENGTH, MAX_SPEC_DATA_SIZE
from ..errors import spec_error
from .paths import safe_file_path

__all__ = ["safe_read_file", "read_data_source", "read_image_rgba"]

_SOURCE_KEYS = ("data_hex", "file", "path", "data")


def safe_read_file(path: Path, max_size: int = MAX_SPEC_DATA_SIZE) -> bytes:
    if not path.is_file():
        raise spec_error(f"File not found: {path}", {"path": str(path)})
    size = path.stat().st_size
    if size > max_size:
        raise spec_error(f"File too large: {size}>{max_size}", {"path": str(path)})
    return path.read_bytes()


def read_data_source(
    entry: Any, base_dir: Path, label: str, max_size: int = MAX_SPEC_DATA_SIZE
) -> bytes:
    """Read the bytes named by a data-source object.

    Exactly one of ``data_hex``, ``file``, ``path`` (alias of ``file``) or
    ``data`` (UTF-8 text) must be present.
    """
    if not isinstance(entry, dict):
        raise spec_error(f"{label} must be an object with a data source")
    sources = [k for k in _SOURCE_KEYS if entry.get(k) is not None]
    if not sources:
        raise spec_error(f"{label}: no data source (data_hex|file|path|data)")
    if len(sources) > 1:
        raise spec_error(f"{label}: multiple data sources: {sources}")
    src = sources[0]
    value = entry[src]
    if src == "data_hex":
        if not isinstance(value, str):
            raise spec_error(f"{label}: data_hex must be string")
        h = "".join(value.split())
        if len(h) > MAX_HEX_STRING_LENGTH:
            raise spec_error(f"{label}: hex string too long")
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise spec_error(f"{label}: invalid hex: {e}") from e
    if src in ("file", "path"):
        if not isinstance(value, str):
            raise spec_error(f"{label}: {src} must be string")
        return safe_read_file(safe_file_path(base_dir, value), max_size)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise spec_error(f"{label}: data must be a string")


def read_image_rgba(path: Path) -> Tuple[int, int, bytes]:
    """Decode an image file to tightly packed RGBA8 pixels."""
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
            width, height = rgba.size
            return width, height, rgba.tobytes()
    except (OSError, UnidentifiedImageError) as e:
        raise spec_error(f"Cannot decode image {path.name}: {e}", {"path": str(path)}) from e
