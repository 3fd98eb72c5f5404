"""
Logging configuration for the application.

Every module logs through ``logging.getLogger(__name__)``; this module
only decides format, level and destination, once, at startup.
Request bodies are never logged.
"""

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO.
QUIET_LOGGERS = ("uvicorn.access", "slowapi")


def configure_logging(level: str = "INFO", stream: TextIO = sys.stdout) -> None:
    """Configure root logging for the application.

    Args:
        level: Log level name. Unknown names fall back to INFO.
        stream: Destination of the log records.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=stream,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
