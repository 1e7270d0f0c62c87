"""
Logging bootstrap shared by the API and the CLI scripts.
"""

import logging
import sys
from typing import Optional

from config.settings import get_settings

LOG_FORMAT = "[%(levelname)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the root logger with a single stdout handler."""
    level_name = (level or get_settings().log.level).upper()

    logger = logging.getLogger()
    logger.setLevel(level_name)

    # Avoid duplicate handlers on repeated calls
    if logger.handlers:
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler.setLevel(level_name)
    logger.addHandler(console_handler)

    return logger
