"""Progress and message reporting for the CLI and library.

One reporter is active per process (:func:`get_reporter`); the ``assetlib``
logger forwards its records to it once :func:`assetlib.logging.configure_logging`
has run.
"""

from .base import (
    Level,
    Reporter,
    TaskStatus,
    get_reporter,
    get_verbosity,
    section,
    set_reporter,
    set_verbosity,
    task,
)
from .jsonl import JsonLinesReporter
from .plain import PlainReporter
from .rich_reporter import RichReporter
from .silent import SilentReporter

__all__ = [
    "Level",
    "Reporter",
    "TaskStatus",
    "get_reporter",
    "get_verbosity",
    "section",
    "set_reporter",
    "set_verbosity",
    "task",
    "JsonLinesReporter",
    "PlainReporter",
    "RichReporter",
    "SilentReporter",
]
