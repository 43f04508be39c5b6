from __future__ import annotations

import os
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .base import Level, Reporter, TaskProgress, format_task_line

TRANSIENT_ENV_VAR = "ASSETLIB_PROGRESS_TRANSIENT"

_STYLES = {
    Level.INFO: "[green]INFO[/]",
    Level.WARNING: "[yellow]WARN[/]",
    Level.ERROR: "[bold red]ERROR[/]",
    Level.VERBOSE: "[cyan]VERB{vlevel}[/]",
}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


class RichReporter(Reporter):
    """Live progress bars on stderr.

    With ``ASSETLIB_PROGRESS_TRANSIENT`` set, bars vanish when done and the
    finished-task lines are printed together on :meth:`flush`.
    """

    supports_progress = True

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console(stderr=True, highlight=False)
        self.transient = _env_flag(TRANSIENT_ENV_VAR)
        self._progress: Progress | None = None
        self._bars: Dict[str, TaskID] = {}
        self._finished: List[str] = []

    def _live(self) -> Progress:
        if self._progress is None:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("{task.description}"),
                BarColumn(bar_width=None),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=self.console,
                transient=self.transient,
                expand=True,
            )
            self._progress.start()
        return self._progress

    def _render_start(self, task_id: str, progress: TaskProgress) -> None:
        # open-ended tasks get a heading instead of a bar
        if progress.total is None:
            self.console.rule(escape(progress.name))
            return
        self._bars[task_id] = self._live().add_task(
            escape(progress.name), total=progress.total
        )

    def _render_advance(
        self, task_id: str, progress: TaskProgress, item: Any
    ) -> None:
        bar = self._bars.get(task_id)
        if bar is not None and self._progress is not None:
            self._progress.update(bar, completed=progress.completed)

    def _render_end(self, task_id: str, progress: TaskProgress) -> None:
        bar = self._bars.pop(task_id, None)
        if bar is not None and self._progress is not None:
            self._progress.update(bar, completed=progress.total)
        line = escape(format_task_line(progress))
        if self.transient:
            self._finished.append(line)
        else:
            self.console.print(line)
        if not self._bars:
            self.flush()

    def _render_message(
        self, level: Level, message: str, fields: Dict[str, Any]
    ) -> None:
        label = _STYLES[level].format(vlevel=fields.get("vlevel", 1))
        self.console.print(f"{label}: {escape(message)}")

    def section(self, title: str) -> None:
        self.console.rule(escape(title))

    def flush(self) -> None:
        if self._progress is not None:
            try:
                self._progress.stop()
            finally:
                self._progress = None
        for line in self._finished:
            self.console.print(line)
        self._finished.clear()
