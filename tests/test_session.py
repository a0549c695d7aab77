"""Tests for the shared session handle."""

import threading
import time

from tubepick.session import SessionHandle


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class CountingFactory:
    def __init__(self, delay=0.0):
        self.calls = 0
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self):
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self.calls += 1
            return f"session-{self.calls}"


class TestSessionHandle:
    """Tests for refresh-if-stale behaviour."""

    def test_lazy_creation(self):
        """Nothing is created until the first get()."""
        factory = CountingFactory()
        handle = SessionHandle(factory, refresh_period=60, clock=FakeClock())
        assert factory.calls == 0
        assert handle.expires_at is None

        assert handle.get() == "session-1"
        assert factory.calls == 1

    def test_reused_within_period(self):
        clock = FakeClock()
        factory = CountingFactory()
        handle = SessionHandle(factory, refresh_period=60, clock=clock)

        first = handle.get()
        clock.now = 59.9
        assert handle.get() is first
        assert factory.calls == 1

    def test_refreshed_after_period(self):
        clock = FakeClock()
        factory = CountingFactory()
        handle = SessionHandle(factory, refresh_period=60, clock=clock)

        handle.get()
        clock.now = 60
        assert handle.get() == "session-2"
        assert handle.refresh_count == 2
        assert handle.expires_at == 120

    def test_invalidate_forces_refresh(self):
        factory = CountingFactory()
        handle = SessionHandle(factory, refresh_period=60, clock=FakeClock())

        stale = handle.get()
        handle.invalidate(stale)
        assert handle.get() == "session-2"

    def test_invalidate_ignores_outdated_observation(self):
        """A caller holding an already-replaced session must not discard the new one."""
        factory = CountingFactory()
        handle = SessionHandle(factory, refresh_period=60, clock=FakeClock())

        old = handle.get()
        handle.invalidate(old)
        current = handle.get()

        handle.invalidate(old)
        assert handle.get() is current
        assert factory.calls == 2

    def test_invalidate_without_observation(self):
        factory = CountingFactory()
        handle = SessionHandle(factory, refresh_period=60, clock=FakeClock())
        handle.get()
        handle.invalidate()
        handle.get()
        assert factory.calls == 2

    def test_concurrent_stale_callers_refresh_once(self):
        """Many threads finding the session stale trigger a single refresh."""
        factory = CountingFactory(delay=0.05)
        handle = SessionHandle(factory, refresh_period=60)
        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(handle.get())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert factory.calls == 1
        assert results == ["session-1"] * 8
