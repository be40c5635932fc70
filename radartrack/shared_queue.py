"""Thread-safe FIFO queue with an optional maximum depth."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class SharedQueue(Generic[T]):
    """FIFO queue whose oldest item is dropped once the depth is exceeded.

    Reading from an empty queue blocks until an item is pushed.
    """

    def __init__(self, depth: int | None = None) -> None:
        self._items: deque[T] = deque()
        self._cond = threading.Condition()
        self._depth = depth

    def set_depth(self, depth: int | None) -> None:
        """Set the maximum number of items kept; None means unbounded."""
        with self._cond:
            self._depth = depth

    def front(self) -> T:
        """Return the oldest item, waiting for one if the queue is empty."""
        with self._cond:
            self._cond.wait_for(lambda: bool(self._items))
            return self._items[0]

    def pop(self) -> T:
        """Remove and return the oldest item, waiting if the queue is empty."""
        with self._cond:
            self._cond.wait_for(lambda: bool(self._items))
            return self._items.popleft()

    def push(self, item: T) -> None:
        """Append an item, dropping the oldest one past the depth."""
        with self._cond:
            self._items.append(item)
            if self._depth is not None and len(self._items) > self._depth:
                self._items.popleft()
            self._cond.notify()

    def empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)