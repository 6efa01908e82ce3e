from collections import deque
from typing import Deque, Generic, Iterator, List, Optional, TypeVar

import numpy as np

T = TypeVar("T")


class TimedBuffer(Generic[T]):
    """
    A buffer that stores timestamped elements in insertion order, oldest first.
    Elements are evicted from the front once they are older than `max_life`
    relative to the timestamp passed to `evict()`. All timestamps are in
    nanoseconds and supplied by the caller.
    """

    def __init__(self, max_life: float) -> None:
        self.max_life = max_life
        self.buffer: Deque[T] = deque()
        self.buffer_timestamps: Deque[float] = deque()

    def add(self, value: T, timestamp: float) -> None:
        """
        Add a value to the buffer.
        """
        self.buffer.append(value)
        self.buffer_timestamps.append(timestamp)

    def evict(self, now: float) -> bool:
        """
        Drop elements with `now - timestamp > max_life`.
        Returns True if this call emptied a non-empty buffer.
        """
        evicted = False
        while len(self.buffer) > 0 and now - self.buffer_timestamps[0] > self.max_life:
            self.buffer.popleft()
            self.buffer_timestamps.popleft()
            evicted = True

        return evicted and len(self.buffer) == 0

    def clear(self) -> None:
        """
        Clear the buffer.
        """
        self.buffer.clear()
        self.buffer_timestamps.clear()

    def timestamps(self) -> List[float]:
        return list(self.buffer_timestamps)

    def first(self) -> Optional[T]:
        if len(self.buffer) == 0:
            return None
        return self.buffer[0]

    def __len__(self) -> int:
        return len(self.buffer)

    def __iter__(self) -> Iterator[T]:
        return iter(self.buffer)

    def __str__(self) -> str:
        return str(list(zip(self.buffer_timestamps, self.buffer)))

    def __repr__(self) -> str:
        return str(self)


class ArithmeticBuffer(TimedBuffer[float]):
    """
    A timed buffer of floats that supports range queries over its elements.
    """

    def values(self) -> np.ndarray:
        return np.fromiter(self.buffer, dtype=float, count=len(self.buffer))

    def max(self, default: float = 0.0) -> float:
        """
        Return the largest element, or `default` if the buffer is empty.
        """
        if len(self.buffer) == 0:
            return default
        return float(np.max(self.values()))

    def spread(self) -> float:
        """
        Return max - min of the elements (0 for fewer than two elements).
        """
        if len(self.buffer) == 0:
            return 0.0
        return float(np.ptp(self.values()))
