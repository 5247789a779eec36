import itertools
import logging
import threading
from abc import ABC, abstractmethod

import redis
import redis.exceptions

from app.core.exceptions import AllocationError

logger = logging.getLogger(__name__)


class IdentifierAllocator(ABC):
    """Issues strictly increasing, globally unique integer identifiers."""

    @abstractmethod
    def allocate(self) -> int:
        ...


class InMemoryAllocator(IdentifierAllocator):
    """Process-local counter for single-instance deployments and tests."""

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("start must be non-negative")
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def allocate(self) -> int:
        with self._lock:
            return next(self._counter)


class RedisAllocator(IdentifierAllocator):
    """Shared counter backed by Redis INCR, so every instance sees one sequence."""

    def __init__(self, client: redis.Redis, key: str = "url_id"):
        self.client = client
        self.key = key

    def allocate(self) -> int:
        try:
            value = self.client.incr(self.key, 1)
        except redis.exceptions.RedisError as e:
            logger.error("Redis INCR failed for %s: %s", self.key, e)
            raise AllocationError(f"identifier source unavailable: {e}") from e
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise AllocationError(f"identifier source returned {value!r}") from e
