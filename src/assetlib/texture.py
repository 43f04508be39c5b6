"""Texture asset codec (``ITEX``).

Metadata fields:

- ``format``: texture format, ``"RGBA8"``
- ``color_space``: ``"sRGB"`` or ``"RGB"`` (``"RGB"`` when absent)
- ``extents``: object with ``x`` (width) and ``y`` (height)
- ``byte_size``: size in bytes of the pixel data after decompression
- ``mip_levels``: number of mip levels stored in the pixel data
- ``compression_mode``: ``"None"`` or ``"LZ4"``, describing the stored payload

The payload is a single segment holding the (possibly compressed) pixels.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .compression import (
    DEFAULT_COMPRESSION_RATIO_THRESHOLD,
    CompressionMode,
    compression_to_string,
    decode_segment,
    encode_segment,
    parse_compression_mode,
)
from .constants import ITEX_TAG
from .container import AssetContainer, check_asset_type
from .errors import invalid
from .logging import get_logger
from .metadata import dump_metadata, get_str, get_uint, load_metadata
from .payload import readable_view, writable_view
from .versions import ITEX_VERSION

__all__ = [
    "TextureFormat",
    "ColorSpace",
    "TextureInfo",
    "read_texture_info",
    "unpack_texture",
    "pack_texture",
]


class TextureFormat(Enum):
    UNKNOWN = "Unknown"
    RGBA8 = "RGBA8"


class ColorSpace(Enum):
    UNKNOWN = "Unknown"
    SRGB = "sRGB"
    RGB = "RGB"


def _parse_texture_format(text: str) -> TextureFormat:
    if text == TextureFormat.RGBA8.value:
        return TextureFormat.RGBA8
    return TextureFormat.UNKNOWN


def _parse_color_space(text: str) -> ColorSpace:
    lowered = text.lower()
    if lowered == "srgb":
        return ColorSpace.SRGB
    if lowered == "rgb":
        return ColorSpace.RGB
    return ColorSpace.UNKNOWN


@dataclass(slots=True)
class TextureInfo:
    format: TextureFormat = TextureFormat.RGBA8
    color_space: ColorSpace = ColorSpace.RGB
    width: int = 0
    height: int = 0
    # not serialized
    depth: int = 1
    byte_size: int = 0
    mip_levels: int = 1
    # requested mode when packing; may be downgraded to NONE
    compression: CompressionMode = CompressionMode.LZ4


def read_texture_info(container: AssetContainer) -> TextureInfo:
    check_asset_type(container, ITEX_TAG, ITEX_VERSION)
    doc = load_metadata(container.metadata)
    return TextureInfo(
        format=_parse_texture_format(get_str(doc, "format")),
        color_space=_parse_color_space(
            get_str(doc, "color_space", ColorSpace.RGB.value)
        ),
        width=get_uint(doc, "extents.x"),
        height=get_uint(doc, "extents.y"),
        byte_size=get_uint(doc, "byte_size"),
        mip_levels=get_uint(doc, "mip_levels", 1),
        compression=parse_compression_mode(get_str(doc, "compression_mode")),
    )


def unpack_texture(info: TextureInfo, container: AssetContainer, dst) -> int:
    """Decode the pixel payload into ``dst``; returns the bytes written."""
    out = writable_view(dst, info.byte_size, "pixel")
    out[:] = decode_segment(
        container.payload, info.byte_size, info.compression, "pixel"
    )
    get_logger().debug(
        "Unpacked texture %dx%d (%d bytes, %s)",
        info.width,
        info.height,
        info.byte_size,
        compression_to_string(info.compression),
    )
    return info.byte_size


def pack_texture(
    info: TextureInfo,
    pixel_data,
    *,
    ratio_threshold: float = DEFAULT_COMPRESSION_RATIO_THRESHOLD,
) -> AssetContainer:
    if info.byte_size <= 0:
        raise invalid(
            "Texture byte_size must be positive", {"byte_size": info.byte_size}
        )
    pixels = readable_view(pixel_data, info.byte_size, "pixel")
    stored, mode = encode_segment(
        pixels, info.compression, ratio_threshold=ratio_threshold
    )
    if mode is not info.compression:
        get_logger().debug(
            "Texture compression downgraded to %s (LZ4 ratio above %.2f)",
            compression_to_string(mode),
            ratio_threshold,
        )
    doc = {
        "format": info.format.value,
        "color_space": info.color_space.value,
        "extents": {"x": info.width, "y": info.height},
        "byte_size": info.byte_size,
        "mip_levels": info.mip_levels,
        "compression_mode": compression_to_string(mode),
    }
    return AssetContainer(
        type_tag=ITEX_TAG,
        version=ITEX_VERSION,
        metadata=dump_metadata(doc),
        payload=stored,
    )
