# shared logger for the service
# NOTE: import `logger` from here instead of calling logging.getLogger() per module.
import logging
import os
import sys

LOGGER_NAME = "task_agent"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

logger = logging.getLogger(LOGGER_NAME)

# attach a single stderr handler, stdout is reserved for the task loop's progress lines
if not logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    logger.propagate = False


def set_log_level(level: str) -> None:
    """Apply the configured log level once settings are loaded."""
    logger.setLevel(level.upper())
