"""
Shared pytest fixtures for convergent tests.
"""

import logging

import pytest

from convergent.logging_config import LOGGER_NAME


def _reset_logger(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_convergent_logging():
    """Reset logging state around each test.

    Removes every handler except a fresh NullHandler and resets the
    level of the convergent logger and its children to NOTSET, so one
    test's logging configuration never leaks into another.
    """
    logger = logging.getLogger(LOGGER_NAME)
    _reset_logger(logger)

    yield

    _reset_logger(logger)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(f"{LOGGER_NAME}."):
            logging.getLogger(name).setLevel(logging.NOTSET)
