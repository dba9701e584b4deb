import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_instancemap_logger():
    # init_logging binds handlers to the CliRunner streams; drop them after each test
    yield
    logger = logging.getLogger("instancemap")
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()
    logger.propagate = True
