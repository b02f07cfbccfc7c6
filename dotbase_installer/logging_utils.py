"""Logging setup for the installer."""

import logging
import sys

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str = "WARNING"):
    """Configure logging for the installer.

    Operator-facing messages go through the runner; the log carries step
    tracing and is quiet unless a lower level is requested.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    # Log to stderr so it never mixes with prompts on stdout
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        force=True,
        handlers=[handler],
    )

    logger.debug("Logging configured at level: %s", log_level)
