"""
Logging configuration for the workshop API.

One stdout handler for the whole process. Application modules log
under the ``app`` namespace at the configured level; chatty client and
parser libraries are held at WARNING so request traffic does not bury
the error normalizer's reports. Request bodies and client personal
data are never logged.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
APP_LOGGER = "app"

QUIET_LOGGERS = (
    "uvicorn.access",
    "slowapi",
    "httpx",
    "httpcore",
    "multipart",
    "python_multipart",
)


def configure_logging(level: str = "INFO") -> None:
    """Configure process-wide logging for the API.

    Args:
        level: The log level of the application loggers (DEBUG, INFO,
            WARNING, ERROR). Unknown names fall back to INFO.
    """
    app_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=app_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger(APP_LOGGER).setLevel(app_level)

    # Each test client request would otherwise log one httpx line
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
