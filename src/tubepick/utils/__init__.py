"""
Utility functions for tubepick.
"""

from tubepick.utils.formatting import format_duration, format_size
from tubepick.utils.logging import configure_logging, log_timed
from tubepick.utils.system import find_tool

__all__ = [
    "configure_logging",
    "format_duration",
    "format_size",
    "log_timed",
    "find_tool",
]
