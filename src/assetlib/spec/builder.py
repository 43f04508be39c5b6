"""Turn a loaded :class:`AssetSpec` into a packed container."""

from __future__ import annotations
from typing import Any, Callable, Dict, Type, TypeVar
from enum import Enum

from ..compression import DEFAULT_COMPRESSION_RATIO_THRESHOLD, CompressionMode
from ..container import AssetContainer
from ..environment import EnvironmentInfo, pack_environment
from ..errors import spec_error
from ..logging import get_logger
from ..mesh import MeshInfo, VertexFormat, pack_mesh, vertex_byte_size
from ..texture import ColorSpace, TextureFormat, TextureInfo, pack_texture
from ..utils.io import read_data_source, read_image_rgba
from ..utils.paths import safe_file_path
from .models import AssetSpec

__all__ = ["build_container"]

E = TypeVar("E", bound=Enum)


def _enum_field(spec: AssetSpec, key: str, enum_type: Type[E], default: E) -> E:
    raw = spec.get(key)
    if raw is None:
        return default
    for member in enum_type:
        if isinstance(raw, str) and member.value.lower() == raw.lower():
            return member
    allowed = ", ".join(m.value for m in enum_type if m.value != "Unknown")
    raise spec_error(f"Invalid {key} {raw!r}, expected one of {allowed}")


def _int_field(spec: AssetSpec, key: str, default: int | None = None) -> int:
    raw = spec.get(key, default)
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise spec_error(f"{key} must be a non-negative integer, got {raw!r}")
    return raw


def _element_count(data: bytes, element_size: int, label: str) -> int:
    if element_size <= 0 or len(data) % element_size:
        raise spec_error(
            f"{label} data length {len(data)} is not a multiple of {element_size}"
        )
    return len(data) // element_size


def _build_texture(spec: AssetSpec, ratio_threshold: float) -> AssetContainer:
    image = spec.get("image")
    if image is not None:
        if not isinstance(image, str):
            raise spec_error("image must be a path string")
        width, height, pixels = read_image_rgba(safe_file_path(spec.base_dir, image))
    else:
        width = _int_field(spec, "width")
        height = _int_field(spec, "height")
        pixels = read_data_source(spec.fields, spec.base_dir, "texture")
    info = TextureInfo(
        format=_enum_field(spec, "format", TextureFormat, TextureFormat.RGBA8),
        color_space=_enum_field(spec, "color_space", ColorSpace, ColorSpace.RGB),
        width=width,
        height=height,
        byte_size=len(pixels),
        mip_levels=_int_field(spec, "mip_levels", 1),
        compression=_enum_field(
            spec, "compression", CompressionMode, CompressionMode.LZ4
        ),
    )
    return pack_texture(info, pixels, ratio_threshold=ratio_threshold)


def _build_mesh(spec: AssetSpec, ratio_threshold: float) -> AssetContainer:
    fmt = _enum_field(spec, "vertex_format", VertexFormat, VertexFormat.PNTV32)
    index_bits = _int_field(spec, "index_bits", 32)
    if index_bits not in (16, 32):
        raise spec_error(f"index_bits must be 16 or 32, got {index_bits}")
    vertices = read_data_source(spec.get("vertices"), spec.base_dir, "vertices")
    indices = read_data_source(spec.get("indices"), spec.base_dir, "indices")
    info = MeshInfo(
        format=fmt,
        compression=_enum_field(
            spec, "compression", CompressionMode, CompressionMode.LZ4
        ),
        vertex_count=_element_count(vertices, vertex_byte_size(fmt), "vertices"),
        index_count=_element_count(indices, index_bits // 8, "indices"),
        index_bits=index_bits,
    )
    return pack_mesh(info, vertices, indices)


def _face_size(entry: Any) -> int:
    size = entry.get("size", 0) if isinstance(entry, dict) else 0
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise spec_error(f"size must be a non-negative integer, got {size!r}")
    return size


def _build_environment(spec: AssetSpec, ratio_threshold: float) -> AssetContainer:
    extents = spec.get("hdr_extents", [0, 0])
    if (
        not isinstance(extents, list)
        or len(extents) != 2
        or not all(isinstance(v, int) and v >= 0 for v in extents)
    ):
        raise spec_error(f"hdr_extents must be [width, height], got {extents!r}")
    hdr = read_data_source(spec.get("hdr"), spec.base_dir, "hdr")
    irradiance = read_data_source(spec.get("irradiance"), spec.base_dir, "irradiance")
    specular = read_data_source(spec.get("specular"), spec.base_dir, "specular")
    info = EnvironmentInfo(
        hdr_width=extents[0],
        hdr_height=extents[1],
        hdr_bytes=len(hdr),
        irradiance_size=_face_size(spec.get("irradiance")),
        irradiance_bytes=len(irradiance),
        specular_size=_face_size(spec.get("specular")),
        specular_bytes=len(specular),
    )
    return pack_environment(info, hdr, irradiance, specular)


_BUILDERS: Dict[str, Callable[[AssetSpec, float], AssetContainer]] = {
    "texture": _build_texture,
    "mesh": _build_mesh,
    "environment": _build_environment,
}


def build_container(
    spec: AssetSpec,
    *,
    ratio_threshold: float = DEFAULT_COMPRESSION_RATIO_THRESHOLD,
) -> AssetContainer:
    builder = _BUILDERS.get(spec.kind)
    if builder is None:
        raise spec_error(f"Unknown asset type {spec.kind!r}")
    container = builder(spec, ratio_threshold)
    get_logger().debug(
        "Built %s container (metadata=%d payload=%d)",
        container.tag_name,
        len(container.metadata),
        len(container.payload),
    )
    return container
