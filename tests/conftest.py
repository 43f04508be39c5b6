import logging

import pytest

from assetlib.logging import get_logger
from assetlib.reporting import SilentReporter, set_reporter, set_verbosity


@pytest.fixture(autouse=True)
def _quiet_reporter(monkeypatch):
    """Each test starts with a silent reporter and no ratio override."""
    monkeypatch.delenv("ASSETLIB_COMPRESSION_RATIO", raising=False)
    set_reporter(SilentReporter())
    set_verbosity(0)
    yield
    set_reporter(SilentReporter())
    logger = get_logger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
