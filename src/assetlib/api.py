"""High-level API: build asset files from specs, inspect and verify them."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

from .compression import CompressionMode, compression_to_string, max_decoded_size
from .config import resolve_ratio_threshold
from .constants import IENV_TAG, ITEX_TAG, MESH_TAG
from .container import AssetContainer, load_asset_file, save_asset_file
from .environment import EnvironmentInfo, read_environment_info, unpack_environment
from .errors import AssetError, corrupt, version_mismatch
from .logging import get_logger
from .mesh import MeshInfo, read_mesh_info, unpack_mesh
from .metadata import load_metadata
from .reporting import get_reporter, task
from .spec import build_container, load_asset_spec
from .texture import TextureInfo, read_texture_info, unpack_texture
from .versions import format_version

__all__ = [
    "BuildOptions",
    "BuildResult",
    "build_asset",
    "read_asset_info",
    "inspect_asset",
    "verify_asset",
    "verify_container",
]

AssetInfo = TextureInfo | MeshInfo | EnvironmentInfo


@dataclass(slots=True)
class BuildOptions:
    input_spec: Path
    output_path: Path
    # None defers to ASSETLIB_COMPRESSION_RATIO / the built-in default
    ratio_threshold: float | None = None
    force: bool = False


@dataclass(slots=True)
class BuildResult:
    output_file: Path
    bytes_written: int
    compression: CompressionMode


_INFO_READERS: Dict[bytes, Callable[[AssetContainer], Any]] = {
    ITEX_TAG: read_texture_info,
    MESH_TAG: read_mesh_info,
    IENV_TAG: read_environment_info,
}


def read_asset_info(container: AssetContainer) -> AssetInfo:
    reader = _INFO_READERS.get(bytes(container.type_tag))
    if reader is None:
        raise version_mismatch(
            f"Unknown asset type tag {container.tag_name!r}",
            {"type_tag": container.tag_name},
        )
    return reader(container)


def build_asset(options: BuildOptions) -> BuildResult:
    logger = get_logger()
    rep = get_reporter()
    if options.output_path.exists() and not options.force:
        raise FileExistsError(options.output_path)
    ratio = resolve_ratio_threshold(options.ratio_threshold)
    spec = load_asset_spec(options.input_spec)
    with task("build.pack", f"Pack {spec.kind}"):
        container = build_container(spec, ratio_threshold=ratio)
    info = read_asset_info(container)
    bytes_written = save_asset_file(options.output_path, container)
    logger.info(
        "Built %s asset: %s (%d bytes)",
        container.tag_name,
        options.output_path.name,
        bytes_written,
    )
    rep.status(
        "Build summary: "
        + f"file={options.output_path.name} type={container.tag_name} "
        + f"bytes={bytes_written} payload={len(container.payload)} "
        + f"compression={compression_to_string(info.compression)}"
    )
    return BuildResult(
        output_file=options.output_path,
        bytes_written=bytes_written,
        compression=info.compression,
    )


def _info_dict(info: AssetInfo) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for f in fields(info):
        value = getattr(info, f.name)
        out[f.name] = value.value if isinstance(value, Enum) else value
    return out


def inspect_asset(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    container = load_asset_file(p)
    result: Dict[str, Any] = {
        "file": p.name,
        "file_size": p.stat().st_size,
        "type_tag": container.tag_name,
        "version": container.version,
        "version_string": format_version(container.version),
        "metadata_length": len(container.metadata.encode("utf-8")),
        "payload_length": len(container.payload),
        "metadata": load_metadata(container.metadata),
    }
    try:
        result["info"] = _info_dict(read_asset_info(container))
    except AssetError as e:
        result["info_error"] = e.to_dict()
    return result


def _declared_sizes(info: AssetInfo) -> Dict[str, int]:
    if isinstance(info, TextureInfo):
        return {"pixel": info.byte_size}
    if isinstance(info, MeshInfo):
        return {"vertex": info.vertex_bytes, "index": info.index_bytes}
    return {
        "hdr": info.hdr_bytes,
        "irradiance": info.irradiance_bytes,
        "specular": info.specular_bytes,
    }


def _scratch_unpack(info: AssetInfo, container: AssetContainer) -> Tuple[int, ...]:
    sizes = _declared_sizes(info)
    # metadata is untrusted: bound it by the payload before allocating
    limit = max_decoded_size(len(container.payload), info.compression)
    for label, size in sizes.items():
        if size > limit:
            raise corrupt(
                f"Declared {label} size {size} exceeds what a "
                f"{len(container.payload)}-byte payload can decode to",
                {"segment": label, "size": size, "limit": limit},
            )
    scratch = [bytearray(size) for size in sizes.values()]
    if isinstance(info, TextureInfo):
        return (unpack_texture(info, container, *scratch),)
    if isinstance(info, MeshInfo):
        return unpack_mesh(info, container, *scratch)
    return unpack_environment(info, container, *scratch)


def verify_container(container: AssetContainer) -> List[str]:
    """Decode every segment of ``container``; returns issues, empty when sound."""
    issues: List[str] = []
    try:
        info = read_asset_info(container)
        _scratch_unpack(info, container)
    except AssetError as e:
        issues.append(f"{type(e).__name__}: {e}")
    return issues


def verify_asset(path: str | Path) -> List[str]:
    try:
        container = load_asset_file(path)
    except AssetError as e:
        return [f"{type(e).__name__}: {e}"]
    return verify_container(container)
