import logging
import os
import sys

from solid_ioc.core.constants import (
    DEBUG_LOGS_ENV_VAR,
    DEFAULT_LOGGER_NAME,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
)


def get_logger(name=DEFAULT_LOGGER_NAME):
    """
    Configures and returns a standardized logger instance.

    The level is DEBUG when IOC_DEBUG_LOGS_ENABLED is set to "true", INFO otherwise.
    """
    logger = logging.getLogger(name)

    if os.environ.get(DEBUG_LOGS_ENV_VAR, "false").lower() == "true":
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    # Configure handler only if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


Logger = get_logger
