import logging
from collections.abc import Iterator

import pytest

from av1_convert.logging_utils import DEFAULT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
