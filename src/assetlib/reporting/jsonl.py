"""JSON lines reporter for scripted use (``assetlib -r json``).

Every event is one JSON object per line. Status messages of the form
``"Build summary: file=a.itex bytes=120"`` additionally produce a
``summary`` event with the ``key=value`` pairs lifted out, so tooling does
not have to parse the human text.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from .base import Level, Reporter, TaskProgress

SUMMARY_TYPES = frozenset({"build", "inspect", "verify"})
# keys the summary event sets itself; same-named tokens in the text are dropped
_RESERVED = frozenset({"event", "summary_type", "raw"})


def parse_summary(message: str) -> Optional[Dict[str, Any]]:
    head, sep, body = message.partition(":")
    words = head.lower().split()
    if not sep or len(words) != 2 or words[1] != "summary":
        return None
    if words[0] not in SUMMARY_TYPES:
        return None
    pairs = dict(token.split("=", 1) for token in body.split() if "=" in token)
    fields = {k: v for k, v in pairs.items() if k not in _RESERVED}
    return {**fields, "summary_type": words[0], "raw": message}


class JsonLinesReporter(Reporter):
    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream or sys.stdout

    def _emit(self, event: str, **payload: Any) -> None:
        self._write({**payload, "event": event})

    def _write(self, record: Dict[str, Any]) -> None:
        self.stream.write(json.dumps(record, sort_keys=True, default=str) + "\n")

    def _render_start(self, task_id: str, progress: TaskProgress) -> None:
        self._write(
            {
                **progress.stats,
                "event": "task_start",
                "id": task_id,
                "name": progress.name,
                "total": progress.total,
            }
        )

    def _render_advance(
        self, task_id: str, progress: TaskProgress, item: Any
    ) -> None:
        extra = {"current_item": item} if item is not None else {}
        self._emit("task_progress", id=task_id, completed=progress.completed, **extra)

    def _render_end(self, task_id: str, progress: TaskProgress) -> None:
        stats = {k: v for k, v in progress.stats.items() if k != "current_item"}
        self._write(
            {
                **stats,
                "event": "task_end",
                "id": task_id,
                "status": progress.status.value,
                "completed": progress.completed,
                "total": progress.total,
                "duration_seconds": round(progress.elapsed, 6),
            }
        )

    def _render_message(
        self, level: Level, message: str, fields: Dict[str, Any]
    ) -> None:
        if level is Level.INFO:
            summary = parse_summary(message)
            if summary is not None:
                self._write({**fields, **summary, "event": "summary"})
        self._write(
            {**fields, "event": "status", "level": level.value, "message": message}
        )

    def section(self, title: str) -> None:
        self._emit("section", title=title)
