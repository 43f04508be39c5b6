"""Environment map asset codec (``IENV``).

Three LZ4 segments stored back to back: the HDR source image, the irradiance
map and the prefiltered specular map. ``irradiance_offset`` and
``specular_offset`` in the metadata mark where the later two start.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .compression import (
    CompressionMode,
    compression_to_string,
    decode_segment,
    encode_segment,
)
from .constants import IENV_TAG
from .container import AssetContainer, check_asset_type
from .errors import invalid
from .logging import get_logger
from .metadata import dump_metadata, get_uint, load_metadata
from .payload import PayloadBuilder, readable_view, segment, writable_view
from .versions import IENV_VERSION

__all__ = [
    "EnvironmentInfo",
    "read_environment_info",
    "unpack_environment",
    "pack_environment",
]


@dataclass(slots=True)
class EnvironmentInfo:
    # ignored by pack_environment(), LZ4 is always used
    compression: CompressionMode = CompressionMode.LZ4
    hdr_width: int = 0
    hdr_height: int = 0
    hdr_bytes: int = 0
    irradiance_size: int = 0
    irradiance_bytes: int = 0
    # written by pack_environment()
    irradiance_offset: int = 0
    specular_size: int = 0
    specular_bytes: int = 0
    # written by pack_environment()
    specular_offset: int = 0


def read_environment_info(container: AssetContainer) -> EnvironmentInfo:
    check_asset_type(container, IENV_TAG, IENV_VERSION)
    doc = load_metadata(container.metadata)
    return EnvironmentInfo(
        compression=CompressionMode.LZ4,
        hdr_width=get_uint(doc, "hdr_extents.x"),
        hdr_height=get_uint(doc, "hdr_extents.y"),
        hdr_bytes=get_uint(doc, "hdr_bytes"),
        irradiance_size=get_uint(doc, "irradiance_size"),
        irradiance_bytes=get_uint(doc, "irradiance_bytes"),
        irradiance_offset=get_uint(doc, "irradiance_offset"),
        specular_size=get_uint(doc, "specular_size"),
        specular_bytes=get_uint(doc, "specular_bytes"),
        specular_offset=get_uint(doc, "specular_offset"),
    )


def unpack_environment(
    info: EnvironmentInfo,
    container: AssetContainer,
    dst_hdr,
    dst_irradiance,
    dst_specular,
) -> Tuple[int, int, int]:
    """Decode the three segments; returns the bytes written to each destination."""
    outputs = (
        writable_view(dst_hdr, info.hdr_bytes, "hdr"),
        writable_view(dst_irradiance, info.irradiance_bytes, "irradiance"),
        writable_view(dst_specular, info.specular_bytes, "specular"),
    )
    payload = container.payload
    bounds = (
        ("hdr", 0, info.irradiance_offset, info.hdr_bytes),
        ("irradiance", info.irradiance_offset, info.specular_offset, info.irradiance_bytes),
        ("specular", info.specular_offset, len(payload), info.specular_bytes),
    )
    decoded = [
        decode_segment(segment(payload, start, end, label), size, info.compression, label)
        for label, start, end, size in bounds
    ]
    for out, data in zip(outputs, decoded):
        out[:] = data
    get_logger().debug(
        "Unpacked environment %dx%d (hdr=%d irradiance=%d specular=%d)",
        info.hdr_width,
        info.hdr_height,
        info.hdr_bytes,
        info.irradiance_bytes,
        info.specular_bytes,
    )
    return info.hdr_bytes, info.irradiance_bytes, info.specular_bytes


def pack_environment(
    info: EnvironmentInfo, hdr, irradiance, specular
) -> AssetContainer:
    for label, size in (
        ("hdr_bytes", info.hdr_bytes),
        ("irradiance_bytes", info.irradiance_bytes),
        ("specular_bytes", info.specular_bytes),
    ):
        if size <= 0:
            raise invalid(f"Environment {label} must be positive", {label: size})
    sources = (
        readable_view(hdr, info.hdr_bytes, "hdr"),
        readable_view(irradiance, info.irradiance_bytes, "irradiance"),
        readable_view(specular, info.specular_bytes, "specular"),
    )
    # strictly in order: hdr at 0, then irradiance, then specular
    payload = PayloadBuilder()
    for src in sources:
        data, _ = encode_segment(src, CompressionMode.LZ4)
        payload.append(data)
    _, irradiance_offset, specular_offset = payload.offsets

    doc = {
        "compression_mode": compression_to_string(CompressionMode.LZ4),
        "hdr_extents": {"x": info.hdr_width, "y": info.hdr_height},
        "hdr_bytes": info.hdr_bytes,
        "irradiance_size": info.irradiance_size,
        "irradiance_bytes": info.irradiance_bytes,
        "irradiance_offset": irradiance_offset,
        "specular_size": info.specular_size,
        "specular_bytes": info.specular_bytes,
        "specular_offset": specular_offset,
    }
    get_logger().debug(
        "Packed environment: payload=%d irradiance_offset=%d specular_offset=%d",
        len(payload),
        irradiance_offset,
        specular_offset,
    )
    return AssetContainer(
        type_tag=IENV_TAG,
        version=IENV_VERSION,
        metadata=dump_metadata(doc),
        payload=payload.getvalue(),
    )
