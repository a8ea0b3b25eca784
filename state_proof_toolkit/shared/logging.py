"""
Lightweight logging utilities for the state proof toolkit.

Provides a consistent logger with a simple console handler and optional
log-level override via the SPT_LOG_LEVEL environment variable.
"""

import logging
from typing import Optional

from state_proof_toolkit.shared.constants import GlobalConstants

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a configured logger with a stream handler.

    The first time a logger is created, a StreamHandler is attached with a
    plain-text formatter. Subsequent calls reuse the existing configuration.

    Log level can be overridden with the SPT_LOG_LEVEL environment variable.
    """
    logger = logging.getLogger(name if name else __name__)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)

        level_str = GlobalConstants.log_level()
        level = getattr(logging, level_str, logging.INFO)
        logger.setLevel(level)

    return logger
