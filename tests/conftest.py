import logging
import os

import pytest

TEST_PREFIXES = ("APP_", "FB_", "OVR_", "X_", "M_", "ANN_", "SVC_", "TYPEDENV_")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith(TEST_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def package_logger():
    logger = logging.getLogger("typedenv")
    prev_level = logger.level
    prev_handlers = list(logger.handlers)
    try:
        yield logger
    finally:
        logger.handlers = prev_handlers
        logger.setLevel(prev_level)
