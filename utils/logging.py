"""
Logging Helpers
===============

Every module logs through a logger named after itself, under the common
"quiz_parser" root. Nothing is printed until setup_logging attaches a
console handler.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = logging.WARNING

logger = logging.getLogger("quiz_parser")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Module logger, or the "quiz_parser" logger when no name is given."""
    return logging.getLogger(name if name else "quiz_parser")


def setup_logging(level: Optional[int] = None) -> logging.Handler:
    """Sends log records at ``level`` or above (WARNING by default) to the console."""
    resolved_level = DEFAULT_LOG_LEVEL if level is None else level

    console_handler = logging.StreamHandler()
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=resolved_level, handlers=[console_handler], force=True)
    logging.captureWarnings(True)

    logger.debug("Logging configured at level %s", logging.getLevelName(resolved_level))
    return console_handler
