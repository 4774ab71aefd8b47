import logging

import pytest


@pytest.fixture(autouse=True)
def _isolate_package_logger():
    """Keep handlers installed by configure_logging from leaking between tests."""

    logger = logging.getLogger("capture_search")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
