"""Asset format version numbers.

A version is ``major.minor.patch`` packed into a ``uint32``:

- bits 0..7: patch
- bits 8..15: minor
- bits 16..23: major
- bits 24..31: reserved, always zero
"""

from __future__ import annotations

from typing import Tuple

from .errors import invalid

__all__ = [
    "pack_version",
    "major_version",
    "minor_version",
    "patch_version",
    "unpack_version",
    "format_version",
    "ITEX_VERSION",
    "MESH_VERSION",
    "IENV_VERSION",
]


def pack_version(major: int, minor: int, patch: int) -> int:
    for name, value in (("major", major), ("minor", minor), ("patch", patch)):
        if not 0 <= value <= 0xFF:
            raise invalid(
                f"Version {name} component out of range 0..255: {value}",
                {name: value},
            )
    return (major << 16) | (minor << 8) | patch


def major_version(version: int) -> int:
    return (version >> 16) & 0xFF


def minor_version(version: int) -> int:
    return (version >> 8) & 0xFF


def patch_version(version: int) -> int:
    return version & 0xFF


def unpack_version(version: int) -> Tuple[int, int, int]:
    return major_version(version), minor_version(version), patch_version(version)


def format_version(version: int) -> str:
    return "%d.%d.%d" % unpack_version(version)


ITEX_VERSION = pack_version(1, 0, 0)
MESH_VERSION = pack_version(0, 0, 1)
IENV_VERSION = pack_version(0, 0, 1)
