"""Mesh asset codec (``MESH``).

Metadata fields:

- ``vertex_count``: number of vertices
- ``index_count``: number of indices
- ``index_bits``: 16 or 32, width of one unsigned index
- ``index_binary_offset``: offset in the payload where the index segment starts
- ``vertex_format``: ``"PNTV32"``, position (3) normal (3) tangent (3) uv (2),
  all 32-bit floats
- ``compression_mode``: ``"None"`` or ``"LZ4"``, shared by both segments

Payload: ``[vertex segment][index segment]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .compression import (
    CompressionMode,
    compression_to_string,
    decode_segment,
    encode_segment,
    parse_compression_mode,
)
from .constants import MESH_TAG
from .container import AssetContainer, check_asset_type
from .errors import invalid
from .logging import get_logger
from .metadata import dump_metadata, get_str, get_uint, load_metadata
from .payload import PayloadBuilder, readable_view, segment, writable_view
from .versions import MESH_VERSION

__all__ = [
    "VertexFormat",
    "MeshInfo",
    "PNTV32_FLOATS",
    "vertex_byte_size",
    "validate_mesh_info",
    "read_mesh_info",
    "unpack_mesh",
    "pack_mesh",
]

# position(3) + normal(3) + tangent(3) + uv(2)
PNTV32_FLOATS = 3 + 3 + 3 + 2

_INDEX_BITS = (16, 32)


class VertexFormat(Enum):
    PNTV32 = "PNTV32"
    UNKNOWN = "Unknown"


def _parse_vertex_format(text: str) -> VertexFormat:
    if text == VertexFormat.PNTV32.value:
        return VertexFormat.PNTV32
    return VertexFormat.UNKNOWN


def vertex_byte_size(fmt: VertexFormat) -> int:
    if fmt is VertexFormat.PNTV32:
        return PNTV32_FLOATS * 4
    return 0


@dataclass(slots=True)
class MeshInfo:
    format: VertexFormat = VertexFormat.PNTV32
    compression: CompressionMode = CompressionMode.LZ4
    vertex_count: int = 0
    index_count: int = 0
    index_bits: int = 32
    # written by pack_mesh(), no need to set it before packing
    index_binary_offset: int = 0

    @property
    def vertex_bytes(self) -> int:
        return self.vertex_count * vertex_byte_size(self.format)

    @property
    def index_bytes(self) -> int:
        return self.index_count * (self.index_bits // 8)


def validate_mesh_info(info: MeshInfo) -> List[str]:
    issues: List[str] = []
    if info.index_bits not in _INDEX_BITS:
        issues.append(f"index_bits must be 16 or 32, got {info.index_bits}")
    if not isinstance(info.compression, CompressionMode):
        issues.append(f"Unsupported compression mode: {info.compression!r}")
    if info.format is not VertexFormat.PNTV32:
        issues.append(f"Unsupported vertex format: {info.format!r}")
    if info.vertex_count <= 0:
        issues.append("vertex_count must be positive")
    if info.index_count <= 0:
        issues.append("index_count must be positive")
    return issues


def read_mesh_info(container: AssetContainer) -> MeshInfo:
    check_asset_type(container, MESH_TAG, MESH_VERSION)
    doc = load_metadata(container.metadata)
    return MeshInfo(
        format=_parse_vertex_format(get_str(doc, "vertex_format")),
        compression=parse_compression_mode(get_str(doc, "compression_mode")),
        vertex_count=get_uint(doc, "vertex_count"),
        index_count=get_uint(doc, "index_count"),
        index_bits=get_uint(doc, "index_bits"),
        index_binary_offset=get_uint(doc, "index_binary_offset"),
    )


def unpack_mesh(
    info: MeshInfo, container: AssetContainer, dst_vertices, dst_indices
) -> Tuple[int, int]:
    """Decode both segments; returns ``(vertex_bytes, index_bytes)`` written."""
    if info.format is not VertexFormat.PNTV32:
        raise invalid(f"Unsupported vertex format: {info.format!r}")
    if info.index_bits not in _INDEX_BITS:
        raise invalid(f"index_bits must be 16 or 32, got {info.index_bits}")
    vtx_size = info.vertex_bytes
    idx_size = info.index_bytes
    vtx_out = writable_view(dst_vertices, vtx_size, "vertex")
    idx_out = writable_view(dst_indices, idx_size, "index")

    payload = container.payload
    split = info.index_binary_offset
    vertices = decode_segment(
        segment(payload, 0, split, "vertex"), vtx_size, info.compression, "vertex"
    )
    indices = decode_segment(
        segment(payload, split, len(payload), "index"),
        idx_size,
        info.compression,
        "index",
    )
    vtx_out[:] = vertices
    idx_out[:] = indices
    get_logger().debug(
        "Unpacked mesh: vertices=%d indices=%d index_bits=%d (%s)",
        info.vertex_count,
        info.index_count,
        info.index_bits,
        compression_to_string(info.compression),
    )
    return vtx_size, idx_size


def pack_mesh(info: MeshInfo, vertices, indices) -> AssetContainer:
    issues = validate_mesh_info(info)
    if issues:
        raise invalid("Invalid mesh description: " + "; ".join(issues), {"issues": issues})
    vtx_src = readable_view(vertices, info.vertex_bytes, "vertex")
    idx_src = readable_view(indices, info.index_bytes, "index")

    payload = PayloadBuilder()
    vtx_data, mode = encode_segment(vtx_src, info.compression)
    payload.append(vtx_data)
    idx_data, _ = encode_segment(idx_src, mode)
    # the vertex segment length is where the indices start
    index_offset = payload.append(idx_data)

    doc = {
        "vertex_count": info.vertex_count,
        "index_count": info.index_count,
        "index_bits": info.index_bits,
        "index_binary_offset": index_offset,
        "vertex_format": info.format.value,
        "compression_mode": compression_to_string(mode),
    }
    get_logger().debug(
        "Packed mesh: vertices=%d indices=%d payload=%d index_offset=%d",
        info.vertex_count,
        info.index_count,
        len(payload),
        index_offset,
    )
    return AssetContainer(
        type_tag=MESH_TAG,
        version=MESH_VERSION,
        metadata=dump_metadata(doc),
        payload=payload.getvalue(),
    )
