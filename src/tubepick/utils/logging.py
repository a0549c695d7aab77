"""
Logging setup for the tubepick CLI and timing helpers for the resolver.

Library code only ever logs through ``logging.getLogger(__name__)``;
handlers are attached here, and only when the CLI asks for them.
"""

import logging
import sys
import time

logger = logging.getLogger("tubepick")

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send tubepick log records to stderr.

    Args:
        verbose: DEBUG level when True, WARNING otherwise
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def log_timed(msg: str, start_time: float | None = None) -> None:
    """Log ``msg`` at INFO, prefixed with the seconds since ``start_time``.

    Args:
        msg: Message to log
        start_time: Value of time.time() when the step began; None marks a start
    """
    if start_time is None:
        logger.info(f"[start] {msg}")
    else:
        logger.info(f"[{time.time() - start_time:.2f}s] {msg}")
