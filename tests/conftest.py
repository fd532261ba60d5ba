import logging

import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so later tests don't log to closed streams."""
    yield
    logger = logging.getLogger("gql_hookgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
