"""In-Memory Rate Limiter — sliding-window request cap per key.

Invariants:
    - At most `limit` admitted requests per key within any `window_seconds` span
    - Rejected requests are not recorded (they do not extend the window)
    - Timestamps older than the window are pruned on each check of their key
    - Every `sweep_every` checks, keys with no timestamp inside the window are
      dropped, so the number of tracked keys is bounded by recent traffic

Design Decisions:
    - Best effort only: state is per process, lost on restart, not shared
      across workers. Satisfies the RateLimiter protocol so a shared-store
      implementation can be swapped in without touching routes
    - No lock: the event loop runs one check at a time and allow() never awaits
    - Injectable clock so tests control time
"""

import time
from collections.abc import Callable


class InMemoryRateLimiter:
    """Sliding-window limiter keyed by client address."""

    def __init__(
        self,
        limit: int = 30,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sweep_every: int = 1000,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self.sweep_every = sweep_every
        self._clock = clock
        self._buckets: dict[str, list[float]] = {}
        self._checks = 0

    @property
    def tracked_keys(self) -> int:
        """Number of keys currently held in memory."""
        return len(self._buckets)

    def allow(self, key: str) -> bool:
        now = self._clock()
        self._checks += 1
        if self._checks >= self.sweep_every:
            self._checks = 0
            self.sweep(now)

        fresh = self._fresh(self._buckets.get(key, []), now)
        if len(fresh) >= self.limit:
            if fresh:
                self._buckets[key] = fresh
            else:
                self._buckets.pop(key, None)
            return False
        fresh.append(now)
        self._buckets[key] = fresh
        return True

    def sweep(self, now: float | None = None) -> None:
        """Drop keys whose every timestamp has left the window."""
        now = self._clock() if now is None else now
        stale = [
            key for key, stamps in self._buckets.items()
            if not self._fresh(stamps, now)
        ]
        for key in stale:
            del self._buckets[key]

    def reset(self) -> None:
        self._buckets.clear()
        self._checks = 0

    def _fresh(self, stamps: list[float], now: float) -> list[float]:
        return [t for t in stamps if now - t < self.window_seconds]
