"""Build spec loading (JSON/YAML)."""

from __future__ import annotations
from pathlib import Path
from typing import Any
import json

from ..errors import spec_error
from .models import ASSET_KINDS, AssetSpec

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore


def load_asset_spec(path: str | Path) -> AssetSpec:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("YAML spec provided but PyYAML not installed")
        try:
            data: Any = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise spec_error(f"Invalid YAML in {p.name}: {e}") from e
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise spec_error(f"Invalid JSON in {p.name}: {e}") from e
    if not isinstance(data, dict):
        raise spec_error("Root of specification must be an object")
    kind = data.get("type")
    if kind not in ASSET_KINDS:
        raise spec_error(
            f"Unknown asset type {kind!r}, expected one of {', '.join(ASSET_KINDS)}"
        )
    fields = {k: v for k, v in data.items() if k != "type"}
    return AssetSpec(kind=kind, base_dir=p.parent, fields=fields)


__all__ = ["load_asset_spec"]
