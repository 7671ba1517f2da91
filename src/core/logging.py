"""
Pothole Reporter - Logging Configuration
Centralized logging setup for the application.
"""

import logging
import sys
from typing import Optional

# Parent of every module logger (logging.getLogger(__name__) under src.*)
APP_LOGGER = "src"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "multipart")


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure stdout logging and return the application logger.

    Args:
        level: Log level name (DEBUG, INFO, ...); defaults to LOG_LEVEL from settings

    Returns:
        The application logger
    """
    if level is None:
        from src.core.config import get_settings
        level = get_settings().log_level

    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
