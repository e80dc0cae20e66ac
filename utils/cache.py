"""Time-boxed memoization for fetched collections."""

import time
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class TimedCache(Generic[T]):
    """
    Holds one value together with the time it was populated.

    A value is valid for ``duration`` seconds after ``set``. After that
    ``get`` reports it as absent and the owner repopulates it. There is no
    eviction and no explicit invalidation.
    """

    def __init__(
        self,
        duration: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize an empty cache.

        Args:
            duration: Validity window in seconds
            clock: Monotonic time source (injectable for tests)
        """
        self.duration = duration
        self._clock = clock
        self.value: Optional[T] = None
        self.populated_at: Optional[float] = None

    def is_valid(self) -> bool:
        if self.populated_at is None:
            return False
        return self._clock() - self.populated_at < self.duration

    def get(self) -> Optional[T]:
        """Return the cached value, or None if never set or expired."""
        if not self.is_valid():
            return None
        return self.value

    def set(self, value: T) -> T:
        self.value = value
        self.populated_at = self._clock()
        return value
