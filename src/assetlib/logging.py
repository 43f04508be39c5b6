"""Logging for assetlib.

Library modules log through the ``assetlib`` stdlib logger and stay silent
unless the application configures it. :func:`configure_logging` (called by the
CLI) sends every record to the active reporter, so log output and task
progress share one stream and one format.
"""

from __future__ import annotations

import logging

from .reporting import get_reporter

LOGGER_NAME = "assetlib"

__all__ = ["LOGGER_NAME", "get_logger", "configure_logging", "step"]


class ReporterHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record)
        except Exception:
            self.handleError(record)
            return
        rep = get_reporter()
        if record.levelno >= logging.ERROR:
            rep.error(text)
        elif record.levelno >= logging.WARNING:
            rep.warning(text)
        elif record.levelno >= logging.INFO:
            rep.status(text)
        else:
            # DEBUG only shows with -v
            rep.verbose(text)


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configure_logging(verbosity: int = 0) -> logging.Logger:
    logger = get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, ReporterHandler):
            logger.removeHandler(handler)
    handler = ReporterHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbosity > 0 else logging.INFO)
    logger.propagate = False
    return logger


def step(message: str) -> None:
    get_reporter().status(f"  -> {message}")

