"""Logging setup shared by all simulator components."""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str, level: Union[str, int] = "INFO") -> logging.Logger:
    """Create or fetch a configured logger.

    Args:
        name: Logger name (usually the component class name)
        level: Logging level name or number

    Returns:
        Logger with a single stdout handler
    """
    logger = logging.getLogger(name)

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    # Avoid stacking handlers when components are re-created
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)

    logger.propagate = False
    return logger
