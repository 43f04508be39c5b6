"""Path utilities (safe resolution)."""

from __future__ import annotations
from pathlib import Path

from ..errors import spec_error

__all__ = ["safe_file_path"]


def safe_file_path(base_dir: Path, file_path: str) -> Path:
    base_dir = base_dir.resolve()
    resolved = (base_dir / file_path).resolve()
    try:
        resolved.relative_to(base_dir)
    except ValueError as e:
        raise spec_error(
            f"Path escapes spec directory: {file_path}", {"path": file_path}
        ) from e
    return resolved
