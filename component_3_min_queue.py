"""
Component 3: Priority Frontier

Binary min-heap of (priority, element) pairs used as the planner's frontier.
Smaller priorities are removed first. Ties between equal priorities are
broken arbitrarily; callers must not rely on any order among them.
"""

import heapq
import itertools
from typing import Generic, List, Optional, Tuple, TypeVar

from goap_exceptions import EmptyQueueError

T = TypeVar("T")


class MinQueue(Generic[T]):
    """
    Priority queue implemented as a binary heap (heapq).

    Despite the term "priority", smaller numbers are more important and
    are removed first.
    """

    def __init__(self):
        # Entries are (priority, sequence, element); the sequence number keeps
        # heapq from comparing elements when priorities are equal.
        self._heap: List[Tuple[float, int, T]] = []
        self._sequence = itertools.count()

    @property
    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def add(self, element: T, priority: float) -> None:
        """Add element with the given priority. O(log n)."""
        heapq.heappush(self._heap, (float(priority), next(self._sequence), element))

    def remove_min(self) -> Tuple[float, T]:
        """
        Remove and return the (priority, element) pair with the smallest priority.

        Raises:
            EmptyQueueError: If the queue is empty
        """
        if not self._heap:
            raise EmptyQueueError("Attempt to call remove_min() on an empty queue")
        priority, _, element = heapq.heappop(self._heap)
        return priority, element

    def peek_priority(self) -> Optional[float]:
        """Smallest priority in the queue, or None if empty."""
        if not self._heap:
            return None
        return self._heap[0][0]

    def clear(self) -> None:
        self._heap.clear()
