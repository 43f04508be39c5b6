"""LZ4 block compression adapter.

Wraps :mod:`lz4.block` with the error kinds used across assetlib and the
"is it worth it" heuristic that decides whether a compressed segment is kept.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

import lz4.block

from .constants import LZ4_MAX_INPUT_SIZE
from .errors import CompressionError, E_COMPRESS, corrupt, truncated
from .payload import byte_view

__all__ = [
    "CompressionMode",
    "compression_to_string",
    "parse_compression_mode",
    "compress_bound",
    "compress",
    "decompress",
    "worth_compressing",
    "encode_segment",
    "decode_segment",
    "DEFAULT_COMPRESSION_RATIO_THRESHOLD",
    "LZ4_MAX_EXPANSION",
    "max_decoded_size",
]

# Compressed/original ratio above which the raw bytes are stored instead
DEFAULT_COMPRESSION_RATIO_THRESHOLD = 0.8

# An LZ4 block never decodes to more than this many times its own length
LZ4_MAX_EXPANSION = 255


class CompressionMode(Enum):
    NONE = "None"
    LZ4 = "LZ4"


def compression_to_string(mode: CompressionMode) -> str:
    return mode.value


def parse_compression_mode(text: str) -> CompressionMode:
    """Parse a metadata compression string; unknown values map to ``NONE``."""
    if text == CompressionMode.LZ4.value:
        return CompressionMode.LZ4
    return CompressionMode.NONE


def compress_bound(size: int) -> int:
    if size < 0 or size > LZ4_MAX_INPUT_SIZE:
        return 0
    return size + size // 255 + 16


def compress(data) -> bytes:
    view = byte_view(data, "compress")
    size = view.nbytes
    bound = compress_bound(size)
    if bound == 0:
        raise CompressionError(
            code=E_COMPRESS,
            message=f"Input too large for LZ4: {size}>{LZ4_MAX_INPUT_SIZE}",
            context={"size": size},
        )
    try:
        out = lz4.block.compress(view, mode="default", store_size=False)
    except (lz4.block.LZ4BlockError, ValueError, OverflowError) as e:
        raise CompressionError(
            code=E_COMPRESS,
            message=f"LZ4 compression failed: {e}",
            context={"size": size},
        ) from e
    if len(out) > bound:
        raise CompressionError(
            code=E_COMPRESS,
            message=f"LZ4 output exceeds bound: {len(out)}>{bound}",
            context={"size": size},
        )
    return out


def decompress(data, expected_size: int) -> bytes:
    """Decode an LZ4 block that must expand to exactly ``expected_size`` bytes."""
    if expected_size <= 0:
        raise corrupt(
            f"Invalid decompressed size: {expected_size}",
            {"expected_size": expected_size},
        )
    stored = byte_view(data, "compressed")
    if expected_size > max_decoded_size(stored.nbytes, CompressionMode.LZ4):
        raise corrupt(
            f"Declared size {expected_size} exceeds what {stored.nbytes} LZ4 bytes can hold",
            {"expected_size": expected_size, "compressed_size": stored.nbytes},
        )
    try:
        out = lz4.block.decompress(data, uncompressed_size=expected_size)
    except (lz4.block.LZ4BlockError, ValueError) as e:
        raise corrupt(
            f"LZ4 decompression failed: {e}",
            {"expected_size": expected_size, "compressed_size": stored.nbytes},
        ) from e
    if len(out) != expected_size:
        raise corrupt(
            f"Decompressed size mismatch: {len(out)}!={expected_size}",
            {"expected_size": expected_size},
        )
    return out


def max_decoded_size(stored_size: int, mode: CompressionMode) -> int:
    """Upper bound on the decoded length of a stored segment of ``stored_size`` bytes."""
    if mode is CompressionMode.LZ4:
        return stored_size * LZ4_MAX_EXPANSION
    return stored_size


def worth_compressing(
    original_size: int,
    compressed_size: int,
    threshold: float = DEFAULT_COMPRESSION_RATIO_THRESHOLD,
) -> bool:
    if original_size <= 0:
        return False
    return compressed_size / original_size <= threshold


def encode_segment(
    data,
    mode: CompressionMode,
    *,
    ratio_threshold: float | None = None,
) -> Tuple[bytes, CompressionMode]:
    """Encode one payload segment.

    Returns the stored bytes together with the mode actually used. With a
    ``ratio_threshold`` an LZ4 result that fails :func:`worth_compressing` is
    discarded and the raw bytes are returned with ``CompressionMode.NONE``.
    Metadata must be written from the returned mode, never from ``mode``.
    """
    raw = byte_view(data, "segment")
    if mode is not CompressionMode.LZ4:
        return raw.tobytes(), CompressionMode.NONE
    packed = compress(raw)
    if ratio_threshold is not None and not worth_compressing(
        raw.nbytes, len(packed), ratio_threshold
    ):
        return raw.tobytes(), CompressionMode.NONE
    return packed, CompressionMode.LZ4


def decode_segment(data, size: int, mode: CompressionMode, label: str) -> bytes:
    """Inverse of :func:`encode_segment` for a segment of known decoded size."""
    if mode is CompressionMode.LZ4:
        return decompress(data, size)
    view = byte_view(data, label)
    if view.nbytes < size:
        raise truncated(
            f"{label} segment shorter than declared size: {view.nbytes}<{size}",
            {"segment": label, "size": view.nbytes, "required": size},
        )
    return view[:size].tobytes()
