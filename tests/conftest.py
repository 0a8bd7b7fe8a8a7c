import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_logging():
    # The CLI attaches a sink to the runner's stderr; drop it between tests.
    yield
    logger.remove()
    logger.disable("damerau_distance")
