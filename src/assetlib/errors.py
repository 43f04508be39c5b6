"""Error definitions for assetlib."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_VERSION_MISMATCH = "E_VERSION_MISMATCH"
E_TRUNCATED = "E_TRUNCATED"
E_VALIDATION = "E_VALIDATION"
E_BUFFER_SIZE = "E_BUFFER_SIZE"
E_COMPRESS = "E_COMPRESS"
E_CORRUPT = "E_CORRUPT"
E_METADATA = "E_METADATA"
E_SPEC = "E_SPEC"


@dataclass(eq=False)
class AssetError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class VersionMismatchError(AssetError):
    pass


class TruncatedInputError(AssetError):
    pass


class ValidationError(AssetError):
    pass


class CompressionError(AssetError):
    pass


class CorruptPayloadError(AssetError):
    pass


class SpecError(AssetError):
    pass


def version_mismatch(
    message: str, context: Optional[Dict[str, Any]] = None
) -> VersionMismatchError:
    return VersionMismatchError(
        code=E_VERSION_MISMATCH, message=message, context=context
    )


def truncated(
    message: str, context: Optional[Dict[str, Any]] = None
) -> TruncatedInputError:
    return TruncatedInputError(code=E_TRUNCATED, message=message, context=context)


def invalid(
    message: str,
    context: Optional[Dict[str, Any]] = None,
    *,
    code: str = E_VALIDATION,
) -> ValidationError:
    return ValidationError(code=code, message=message, context=context)


def corrupt(
    message: str,
    context: Optional[Dict[str, Any]] = None,
    *,
    code: str = E_CORRUPT,
) -> CorruptPayloadError:
    return CorruptPayloadError(code=code, message=message, context=context)


def spec_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> SpecError:
    return SpecError(code=E_SPEC, message=message, context=context)


__all__ = [
    "AssetError",
    "VersionMismatchError",
    "TruncatedInputError",
    "ValidationError",
    "CompressionError",
    "CorruptPayloadError",
    "SpecError",
    "version_mismatch",
    "truncated",
    "invalid",
    "corrupt",
    "spec_error",
    "E_VERSION_MISMATCH",
    "E_TRUNCATED",
    "E_VALIDATION",
    "E_BUFFER_SIZE",
    "E_COMPRESS",
    "E_CORRUPT",
    "E_METADATA",
    "E_SPEC",
]
