"""Logging setup for PassForge"""

import logging
import sys

LOGGER_NAME = "passforge"


def setup_logger(verbose=False, stream=None):
    """
    Set up the logging system

    Args:
        verbose: Log debug messages instead of warnings and above
        stream: Stream for the handler (defaults to stderr)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Calling twice (e.g. from tests) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
    logger.addHandler(handler)

    return logger
