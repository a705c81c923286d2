"""
Logging configuration for the API process.
"""
import logging
import sys

from webseries.config import settings

_configured = False


def setup_logging(level: str = None):
    """Attach a console handler to the package logger once."""
    global _configured
    if _configured:
        return

    logger = logging.getLogger("webseries")
    logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    logger.addHandler(handler)

    _configured = True
