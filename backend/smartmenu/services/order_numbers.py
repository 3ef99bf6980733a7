"""Human-readable order numbers such as ``ORD20240115143022047``."""

import random
import threading
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, Optional

from smartmenu.core.config import get_settings

SUFFIX_RANGE = 1000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderNumberGenerator:
    """Prefix + timestamp to the second + 3-digit random suffix.

    Within one generator a suffix is not reused during the same second, so
    up to SUFFIX_RANGE numbers per second are distinct in-process. Across
    processes two orders in the same second still collide with probability
    1/SUFFIX_RANGE; the unique index on ``orders.order_number`` is the guard.
    """

    def __init__(
        self,
        prefix: str = "ORD",
        clock: Callable[[], datetime] = _utcnow,
        rng: Optional[random.Random] = None,
    ):
        self.prefix = prefix
        self._clock = clock
        self._rng = rng or random.SystemRandom()
        self._lock = threading.Lock()
        self._second: Optional[str] = None
        self._used: set[int] = set()

    def generate(self) -> str:
        with self._lock:
            timestamp = self._clock().strftime("%Y%m%d%H%M%S")
            if timestamp != self._second:
                self._second = timestamp
                self._used = set()
            suffix = self._rng.randrange(SUFFIX_RANGE)
            # once every suffix of this second is taken, repeats are left
            # to the unique index
            while suffix in self._used and len(self._used) < SUFFIX_RANGE:
                suffix = self._rng.randrange(SUFFIX_RANGE)
            self._used.add(suffix)
        return f"{self.prefix}{timestamp}{suffix:03d}"


@lru_cache
def get_order_number_generator() -> OrderNumberGenerator:
    return OrderNumberGenerator(prefix=get_settings().order_number_prefix)
