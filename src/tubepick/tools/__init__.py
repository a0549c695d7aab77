"""
External tool wrappers for tubepick.

Provides the yt-dlp catalogue provider and HTTP probes.
"""

from tubepick.tools.base import CommandResult, ExternalTool
from tubepick.tools.http import probe_exists
from tubepick.tools.yt_dlp import YtDlpCatalogueProvider

__all__ = [
    "CommandResult",
    "ExternalTool",
    "YtDlpCatalogueProvider",
    "probe_exists",
]
