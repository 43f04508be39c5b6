from __future__ import annotations

import sys
from typing import Any, Dict

from .base import Level, Reporter, TaskProgress, format_task_line

# label and ANSI color per message level
_LABELS = {
    Level.INFO: ("INFO", "32"),
    Level.WARNING: ("WARN", "33"),
    Level.ERROR: ("ERROR", "31"),
    Level.VERBOSE: ("VERB", "36"),
}


class PlainReporter(Reporter):
    """One line per event on a text stream; ANSI color when it is a TTY."""

    def __init__(self, stream=None, use_color: bool | None = None):
        super().__init__()
        self.stream = stream or sys.stderr
        if use_color is None:
            isatty = getattr(self.stream, "isatty", None)
            use_color = bool(isatty and isatty())
        self.use_color = use_color

    def _line(self, text: str) -> None:
        print(text, file=self.stream)

    def _label(self, level: Level, vlevel: int) -> str:
        text, color = _LABELS[level]
        if level is Level.VERBOSE:
            text += str(vlevel)
        return f"\x1b[{color}m{text}\x1b[0m" if self.use_color else text

    def _render_message(
        self, level: Level, message: str, fields: Dict[str, Any]
    ) -> None:
        self._line(f"{self._label(level, fields.get('vlevel', 1))}: {message}")

    def _render_advance(
        self, task_id: str, progress: TaskProgress, item: Any
    ) -> None:
        total = "?" if progress.total is None else progress.total
        item = item or f"item#{progress.completed}"
        self._line(f"   · {progress.name}: {item} ({progress.completed}/{total})")

    def _render_end(self, task_id: str, progress: TaskProgress) -> None:
        self._line(f" {format_task_line(progress)}")

    def section(self, title: str) -> None:
        self._line(f"\n[{title}]")
