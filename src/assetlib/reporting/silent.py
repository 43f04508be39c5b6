from __future__ import annotations

from typing import Any, Dict

from .base import Level, Reporter


class SilentReporter(Reporter):
    """Tracks tasks but prints nothing (``-r silent`` and tests)."""

    def _render_message(
        self, level: Level, message: str, fields: Dict[str, Any]
    ) -> None:
        pass
