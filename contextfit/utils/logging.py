"""Logging configuration for contextfit."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

# tiktoken fetches vocabularies over HTTP through requests
_NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(verbose: bool = False) -> None:
    """Send ``contextfit`` logs to stderr.

    Safe to call more than once: the handler is attached only the first
    time, later calls just update the level.
    """
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger("contextfit")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
