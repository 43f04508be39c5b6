"""Reporter protocol shared by all output backends.

Backends only render. Task bookkeeping (counts, timing, final stats) lives in
:class:`Reporter` so every backend reports the same numbers; subclasses
override the ``_render_*`` hooks.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional

__all__ = [
    "TaskStatus",
    "Level",
    "TaskProgress",
    "Reporter",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
    "section",
    "task",
    "format_task_line",
]


class TaskStatus(Enum):
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def icon(self) -> str:
        return {"success": "✔", "failed": "✖", "skipped": "→"}.get(self.value, "?")


class Level(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    VERBOSE = "verbose"


# Counters printed on a finished task line, in this order
TASK_STATS = ("files", "bytes", "issues")


@dataclass(slots=True)
class TaskProgress:
    name: str
    total: Optional[int] = None
    completed: int = 0
    status: TaskStatus = TaskStatus.RUNNING
    started: float = field(default_factory=time.perf_counter)
    finished: Optional[float] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def elapsed(self) -> float:
        if self.finished is None:
            return 0.0
        return self.finished - self.started


def format_task_line(progress: TaskProgress) -> str:
    """``✔ Verify assets 2/2 (0.01s) [files=2 issues=0]``"""
    parts = [progress.status.icon, progress.name]
    if progress.total is not None:
        parts.append(f"{progress.completed}/{progress.total}")
    parts.append(f"({progress.elapsed:.2f}s)")
    stats = " ".join(
        f"{key}={progress.stats[key]}" for key in TASK_STATS if key in progress.stats
    )
    if stats:
        parts.append(f"[{stats}]")
    return " ".join(parts)


_verbosity = 0


def set_verbosity(level: int) -> None:
    global _verbosity
    _verbosity = max(0, level)


def get_verbosity() -> int:
    return _verbosity


class Reporter:
    supports_progress: bool = False

    def __init__(self) -> None:
        self._tasks: Dict[str, TaskProgress] = {}

    # task lifecycle

    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:
        progress = TaskProgress(name, total, stats=dict(meta))
        self._tasks[task_id] = progress
        self._render_start(task_id, progress)

    def advance(self, task_id: str, step: int = 1, **meta: Any) -> None:
        progress = self._tasks.get(task_id)
        if progress is None:
            return
        progress.completed += step
        progress.stats.update(meta)
        self._render_advance(task_id, progress, meta.get("current_item"))

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **final_meta: Any,
    ) -> None:
        progress = self._tasks.pop(task_id, None)
        if progress is None:
            return
        progress.status = status
        progress.finished = time.perf_counter()
        progress.stats.update(final_meta)
        self._render_end(task_id, progress)

    # messages

    def status(self, message: str, **fields: Any) -> None:
        self._render_message(Level.INFO, message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._render_message(Level.WARNING, message, fields)

    def error(self, message: str, **fields: Any) -> None:
        self._render_message(Level.ERROR, message, fields)

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() >= level:
            self._render_message(Level.VERBOSE, message, {"vlevel": level, **fields})

    def section(self, title: str) -> None:
        pass

    def flush(self) -> None:
        pass

    # backend hooks

    def _render_start(self, task_id: str, progress: TaskProgress) -> None:
        pass

    def _render_advance(
        self, task_id: str, progress: TaskProgress, item: Any
    ) -> None:
        pass

    def _render_end(self, task_id: str, progress: TaskProgress) -> None:
        pass

    def _render_message(
        self, level: Level, message: str, fields: Dict[str, Any]
    ) -> None:
        raise NotImplementedError


_active: Reporter | None = None


def set_reporter(rep: Reporter) -> None:
    global _active
    _active = rep


def get_reporter() -> Reporter:
    global _active
    if _active is None:
        from .plain import PlainReporter  # circular

        _active = PlainReporter(stream=sys.stderr)
    return _active


@contextmanager
def section(title: str) -> Iterator[Reporter]:
    rep = get_reporter()
    rep.section(title)
    yield rep


@contextmanager
def task(
    task_id: str, name: str, total: int | None = None, **meta: Any
) -> Iterator[Reporter]:
    """Run a block as a reported task; an escaping exception marks it FAILED."""
    rep = get_reporter()
    rep.start_task(task_id, name, total, **meta)
    status = TaskStatus.FAILED
    try:
        yield rep
        status = TaskStatus.SUCCESS
    finally:
        rep.end_task(task_id, status)
