"""Runtime configuration resolved from explicit options and environment."""

from __future__ import annotations

import os
from typing import Optional

from .compression import DEFAULT_COMPRESSION_RATIO_THRESHOLD
from .errors import invalid

__all__ = ["RATIO_ENV_VAR", "resolve_ratio_threshold"]

RATIO_ENV_VAR = "ASSETLIB_COMPRESSION_RATIO"


def resolve_ratio_threshold(explicit: Optional[float] = None) -> float:
    """Pick the compression ratio threshold.

    Order: explicit value, ``ASSETLIB_COMPRESSION_RATIO``, then
    :data:`DEFAULT_COMPRESSION_RATIO_THRESHOLD`.
    """
    source = "option"
    value: object = explicit
    if value is None:
        env = os.getenv(RATIO_ENV_VAR)
        if env is None or not env.strip():
            return DEFAULT_COMPRESSION_RATIO_THRESHOLD
        source = RATIO_ENV_VAR
        try:
            value = float(env)
        except ValueError as e:
            raise invalid(
                f"{RATIO_ENV_VAR} is not a number: {env!r}", {"value": env}
            ) from e
    ratio = float(value)  # type: ignore[arg-type]
    if not 0.0 < ratio <= 1.0:
        raise invalid(
            f"Compression ratio threshold must be in (0, 1], got {ratio} ({source})",
            {"value": ratio, "source": source},
        )
    return ratio
