"""Wire constants shared by the container and asset codecs."""

from __future__ import annotations

import struct

# Asset type tags (4 raw bytes at the start of every file)
ITEX_TAG = b"ITEX"
MESH_TAG = b"MESH"
IENV_TAG = b"IENV"

TYPE_TAG_SIZE = 4
# type_tag(4s) + version(u32) + metadata_len(u32) + payload_len(u32)
HEADER_STRUCT = struct.Struct("<4sIII")
HEADER_SIZE = HEADER_STRUCT.size
MAX_SEGMENT_LENGTH = 0xFFFFFFFF

# LZ4_MAX_INPUT_SIZE from lz4.h
LZ4_MAX_INPUT_SIZE = 0x7E000000

# Build spec data sources
MAX_SPEC_DATA_SIZE = 256 * 1024 * 1024
MAX_HEX_STRING_LENGTH = 64 * 1024 * 1024

__all__ = [
    "ITEX_TAG",
    "MESH_TAG",
    "IENV_TAG",
    "TYPE_TAG_SIZE",
    "HEADER_STRUCT",
    "HEADER_SIZE",
    "MAX_SEGMENT_LENGTH",
    "LZ4_MAX_INPUT_SIZE",
    "MAX_SPEC_DATA_SIZE",
    "MAX_HEX_STRING_LENGTH",
]
