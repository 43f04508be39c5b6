"""Outer envelope of every asset file.

Layout (little-endian)::

    [4s type_tag][u32 version][u32 metadata_len][u32 payload_len]
    [metadata_len bytes UTF-8 metadata][payload_len bytes payload]

The container codec does not interpret the tag or version; that is left to
the asset codecs (see :mod:`assetlib.texture`, :mod:`assetlib.mesh`,
:mod:`assetlib.environment`).
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from .constants import HEADER_SIZE, HEADER_STRUCT, MAX_SEGMENT_LENGTH, TYPE_TAG_SIZE
from .errors import E_METADATA, corrupt, invalid, truncated, version_mismatch
from .logging import get_logger
from .versions import format_version

__all__ = [
    "AssetContainer",
    "write_container",
    "read_container",
    "container_to_bytes",
    "container_from_bytes",
    "save_asset_file",
    "load_asset_file",
    "check_asset_type",
]


@dataclass(slots=True)
class AssetContainer:
    type_tag: bytes
    version: int
    metadata: str = ""
    payload: bytes = b""

    @property
    def tag_name(self) -> str:
        return self.type_tag.decode("ascii", errors="replace")


def _read_exact(source: BinaryIO, size: int, label: str) -> bytes:
    data = source.read(size)
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise truncated(
            f"Unexpected end of input while reading {label}",
            {"expected": size, "got": got},
        )
    return data


def write_container(sink: BinaryIO, container: AssetContainer) -> int:
    """Write ``container`` to ``sink`` and return the number of bytes written.

    Errors raised by ``sink.write`` propagate unchanged.
    """
    tag = bytes(container.type_tag)
    if len(tag) != TYPE_TAG_SIZE:
        raise invalid(
            f"Type tag must be {TYPE_TAG_SIZE} bytes", {"type_tag": tag}
        )
    if not 0 <= container.version <= 0xFFFFFFFF:
        raise invalid("Version does not fit in 32 bits", {"version": container.version})
    metadata = container.metadata.encode("utf-8")
    payload = container.payload
    for label, blob in (("metadata", metadata), ("payload", payload)):
        if len(blob) > MAX_SEGMENT_LENGTH:
            raise invalid(f"{label} too large", {"length": len(blob)})
    sink.write(HEADER_STRUCT.pack(tag, container.version, len(metadata), len(payload)))
    sink.write(metadata)
    sink.write(payload)
    return HEADER_SIZE + len(metadata) + len(payload)


def read_container(source: BinaryIO) -> AssetContainer:
    header = _read_exact(source, HEADER_SIZE, "header")
    tag, version, metadata_len, payload_len = HEADER_STRUCT.unpack(header)
    raw_metadata = _read_exact(source, metadata_len, "metadata")
    payload = _read_exact(source, payload_len, "payload")
    try:
        metadata = raw_metadata.decode("utf-8")
    except UnicodeDecodeError as e:
        raise corrupt(
            f"Metadata is not valid UTF-8: {e}", code=E_METADATA
        ) from e
    return AssetContainer(
        type_tag=tag, version=version, metadata=metadata, payload=payload
    )


def container_to_bytes(container: AssetContainer) -> bytes:
    buf = io.BytesIO()
    write_container(buf, container)
    return buf.getvalue()


def container_from_bytes(data: bytes) -> AssetContainer:
    if len(data) < HEADER_SIZE:
        raise truncated(
            "Input shorter than container header",
            {"expected": HEADER_SIZE, "got": len(data)},
        )
    _, _, metadata_len, payload_len = HEADER_STRUCT.unpack_from(data, 0)
    declared = HEADER_SIZE + metadata_len + payload_len
    if declared > len(data):
        raise truncated(
            f"Declared lengths exceed input: {declared}>{len(data)}",
            {"metadata_len": metadata_len, "payload_len": payload_len},
        )
    return read_container(io.BytesIO(data))


def save_asset_file(path: str | Path, container: AssetContainer) -> int:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("wb") as f:
        written = write_container(f, container)
    get_logger().debug(
        "Saved %s asset: %s (%d bytes)", container.tag_name, p.name, written
    )
    return written


def load_asset_file(path: str | Path) -> AssetContainer:
    p = Path(path)
    with p.open("rb") as f:
        container = read_container(f)
    get_logger().debug(
        "Loaded %s asset: %s (metadata=%d payload=%d)",
        container.tag_name,
        p.name,
        len(container.metadata),
        len(container.payload),
    )
    return container


def check_asset_type(container: AssetContainer, tag: bytes, version: int) -> None:
    """Raise :class:`VersionMismatchError` unless the container is ``tag``/``version``."""
    if bytes(container.type_tag) != tag:
        raise version_mismatch(
            f"Expected {tag.decode('ascii')} asset, got {container.tag_name!r}",
            {"expected_tag": tag.decode("ascii"), "type_tag": container.tag_name},
        )
    if container.version != version:
        raise version_mismatch(
            f"{tag.decode('ascii')} version {format_version(container.version)} "
            f"does not match codec version {format_version(version)}",
            {"expected_version": version, "version": container.version},
        )
