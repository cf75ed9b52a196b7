import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() calls made by a test (CLI runs configure it)."""
    yield
    logger = logging.getLogger("media_vectors")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
