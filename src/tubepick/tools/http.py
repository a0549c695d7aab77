"""
HTTP helpers: best-effort existence probes.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request

from tubepick.config.defaults import PROBE_TIMEOUT

logger = logging.getLogger(__name__)


def probe_exists(url: str, timeout: float = PROBE_TIMEOUT) -> bool:
    """HEAD ``url`` and report whether it answered 200.

    Any failure (network error, non-200, timeout) counts as "does not exist".
    """
    req = urllib.request.Request(url, method="HEAD")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status == 200
    except (urllib.error.URLError, OSError, ValueError) as e:
        logger.debug(f"Probe of {url} failed: {e}")
        return False
