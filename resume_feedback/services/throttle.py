import threading
import time
from typing import Callable


class TokenBucket:
    """
    Blocking token bucket used to pace calls against shared upstreams.

    With capacity 1 and `rate` tokens per second, consecutive `acquire()` calls
    are spaced at least 1/rate seconds apart.
    """

    def __init__(
        self,
        rate: float,
        capacity: int = 1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if rate <= 0:
            raise ValueError("rate must be positive")
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.rate = rate
        self.capacity = capacity
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._updated = clock()
        self._lock = threading.Lock()

    @classmethod
    def from_interval(cls, seconds: float, **kwargs) -> "TokenBucket":
        if seconds <= 0:
            raise ValueError("interval must be positive")
        return cls(rate=1.0 / seconds, **kwargs)

    def _refill(self):
        now = self._clock()
        self._tokens = min(self.capacity, self._tokens + (now - self._updated) * self.rate)
        self._updated = now

    def acquire(self) -> float:
        """Take one token, sleeping until one is available. Returns seconds waited."""
        waited = 0.0
        with self._lock:
            self._refill()
            while self._tokens < 1:
                delay = (1 - self._tokens) / self.rate
                self._sleep(delay)
                waited += delay
                self._refill()
            self._tokens -= 1
        return waited
