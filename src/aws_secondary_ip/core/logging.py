"""Logging for AWS Secondary IP.

Progress of a reconciliation run goes to the ``aws_secondary_ip`` logger and
its per-component children (``engine``, ``metadata``, ``credentials`` ...).
Only warnings reach stderr unless ``--debug`` is given; a log file always
receives the full debug trace.
"""

import logging
import sys
from typing import Optional

logger = logging.getLogger("aws_secondary_ip")

# SDK loggers that flood debug output with wire-level detail
NOISY_LOGGERS = (
    "botocore.credentials",
    "botocore.hooks",
    "botocore.loaders",
    "botocore.parsers",
    "botocore.endpoint",
    "urllib3.connectionpool",
)

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def quiet_sdk_loggers(level: int = logging.WARNING):
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def setup_logging(
    debug: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the package logger.

    Args:
        debug: Log debug messages to stderr, tagged with the component name
        log_file: Also write the debug trace to this file

    Returns:
        The package logger
    """
    logger.setLevel(logging.DEBUG if debug or log_file else logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setLevel(logging.DEBUG if debug else logging.WARNING)
    stderr.setFormatter(logging.Formatter(DEBUG_FORMAT if debug else CONSOLE_FORMAT))
    logger.addHandler(stderr)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    quiet_sdk_loggers()
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger for a component, e.g. ``get_logger("engine")``."""
    return logger.getChild(name)
