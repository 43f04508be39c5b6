"""Segment bookkeeping for multi-buffer payloads.

Payloads are built by appending encoded segments back to back; the offset of
each segment is the running length at the time it is appended. Readers slice
segments back out with bounds checks against the real payload length.
"""

from __future__ import annotations

from typing import List

from .errors import E_BUFFER_SIZE, invalid, truncated

__all__ = ["PayloadBuilder", "segment", "byte_view", "readable_view", "writable_view"]


class PayloadBuilder:
    def __init__(self) -> None:
        self._buf = bytearray()
        self.offsets: List[int] = []

    def append(self, data: bytes) -> int:
        """Append ``data`` and return the offset it starts at."""
        offset = len(self._buf)
        self._buf.extend(data)
        self.offsets.append(offset)
        return offset

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


def segment(payload: bytes, start: int, end: int, label: str) -> memoryview:
    if start < 0 or end < start:
        raise truncated(
            f"Invalid {label} segment bounds: [{start}, {end})",
            {"start": start, "end": end},
        )
    if end > len(payload):
        raise truncated(
            f"{label} segment runs past payload: {end}>{len(payload)}",
            {"start": start, "end": end, "payload_len": len(payload)},
        )
    return memoryview(payload)[start:end]


def byte_view(obj, label: str) -> memoryview:
    """Flat unsigned-byte view of any C-contiguous buffer."""
    try:
        return memoryview(obj).cast("B")
    except TypeError as e:
        raise invalid(
            f"{label} buffer is not a contiguous bytes-like object: {e}",
            {"buffer": label},
            code=E_BUFFER_SIZE,
        ) from e


def readable_view(src, size: int, label: str) -> memoryview:
    """Return the first ``size`` bytes of a caller source buffer."""
    view = byte_view(src, label)
    if view.nbytes < size:
        raise invalid(
            f"{label} buffer too small: {view.nbytes}<{size}",
            {"buffer": label, "size": view.nbytes, "required": size},
            code=E_BUFFER_SIZE,
        )
    return view[:size]


def writable_view(dst, size: int, label: str) -> memoryview:
    """Return a writable byte view over the first ``size`` bytes of ``dst``."""
    view = byte_view(dst, label)
    if view.readonly:
        raise invalid(
            f"{label} destination is read-only",
            {"buffer": label},
            code=E_BUFFER_SIZE,
        )
    if view.nbytes < size:
        raise invalid(
            f"{label} destination too small: {view.nbytes}<{size}",
            {"buffer": label, "size": view.nbytes, "required": size},
            code=E_BUFFER_SIZE,
        )
    return view[:size]
