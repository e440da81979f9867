"""Token-bucket limiter for outbound provider calls."""

import threading
import time


class RateLimiter:
    """Token bucket: `capacity` tokens, refilled at one token per `interval` seconds.

    With the default capacity of 1 this allows at most one call per interval.
    Safe to share between threads.
    """

    def __init__(self, interval: float = 1.5, capacity: int = 1, clock=time.monotonic, sleep=time.sleep):
        if interval < 0:
            raise ValueError("interval must be >= 0")
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.interval = interval
        self.capacity = capacity
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._updated = clock()
        self._lock = threading.Lock()

    def _refill(self, now: float):
        if self.interval == 0:
            self._tokens = float(self.capacity)
        else:
            elapsed = max(0.0, now - self._updated)
            self._tokens = min(float(self.capacity), self._tokens + elapsed / self.interval)
        self._updated = now

    def acquire(self) -> float:
        """Block until a token is available; return the seconds spent waiting."""
        waited = 0.0
        while True:
            with self._lock:
                self._refill(self._clock())
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return waited
                delay = (1.0 - self._tokens) * self.interval
            self._sleep(delay)
            waited += delay
