"""Fixtures for CLI tests."""
import logging

import pytest


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop handlers the CLI installs on the blockplay logger."""
    yield
    logger = logging.getLogger("blockplay")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
