"""
Shared session handle with a time-boxed validity window.

Catalogue providers may need a session/player object (e.g. a player script
used for deciphering) that goes stale after a while. SessionHandle owns one
such object, refreshes it lazily when it expires, and is safe to share
between threads: concurrent callers that find it stale trigger exactly one
refresh.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class SessionHandle:
    """Thread-safe, lazily refreshed session/player handle.

    Args:
        factory: Creates a fresh session object
        refresh_period: Seconds a session stays valid
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        factory: Callable[[], Any],
        refresh_period: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._factory = factory
        self._refresh_period = refresh_period
        self._clock = clock
        self._lock = threading.Lock()
        self._session: Any = None
        self._expires_at: float | None = None
        self.refresh_count = 0

    def _is_stale(self) -> bool:
        return self._expires_at is None or self._clock() >= self._expires_at

    def get(self) -> Any:
        """Return a valid session, refreshing it first if it has expired."""
        if not self._is_stale():
            return self._session

        with self._lock:
            # Another thread may have refreshed while we waited
            if self._is_stale():
                self._session = self._factory()
                self._expires_at = self._clock() + self._refresh_period
                self.refresh_count += 1
                logger.debug(f"Session refreshed (#{self.refresh_count})")
            return self._session

    def invalidate(self, observed: Any = None) -> None:
        """Mark the session stale so the next get() refreshes it.

        Args:
            observed: The session the caller found stale. If another thread
                already replaced it, nothing happens.
        """
        with self._lock:
            if observed is not None and observed is not self._session:
                return
            self._expires_at = None

    @property
    def expires_at(self) -> float | None:
        return self._expires_at
