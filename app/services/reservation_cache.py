import logging
import threading
import time
from typing import Callable

from app.schemas.reservation import ReservationOut

logger = logging.getLogger(__name__)


class ReservationCache:
    """
    Last fetched reservation list, shared across requests.

    One instance lives on ``app.state`` and is handed to routes through a
    dependency. A delete must call invalidate() so the next read refetches.
    """

    def __init__(self, ttl_seconds: float = 60, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._items: list[ReservationOut] | None = None
        self._fetched_at: float | None = None
        self._generation = 0

    @property
    def is_fresh(self) -> bool:
        if self._items is None or self._fetched_at is None:
            return False
        if self.ttl_seconds <= 0:
            return False
        return self._clock() - self._fetched_at < self.ttl_seconds

    def get(self, store) -> list[ReservationOut]:
        with self._lock:
            if self.is_fresh:
                return list(self._items)
            generation = self._generation

        # fetched outside the lock; store errors propagate, nothing stale is served
        items = store.list()

        with self._lock:
            # an invalidate() during the fetch means these rows may predate a delete
            if generation == self._generation:
                self._items = items
                self._fetched_at = self._clock()
        logger.info(f"Reservation cache refreshed ({len(items)} rows)")
        return list(items)

    def invalidate(self) -> None:
        with self._lock:
            self._generation += 1
            self._items = None
            self._fetched_at = None
