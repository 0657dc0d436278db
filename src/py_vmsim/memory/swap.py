"""Swap queue — the order in which suspended processes come back.

When a fault finds no free frame, the faulting process is swapped out
whole: every frame it held goes back to the pool and the process waits
in the swap queue.  When frames become available again, processes are
resumed strictly first-suspended, first-resumed — nobody can be
overtaken while waiting.

RingQueue:
    A bounded FIFO over a fixed array with explicit ``front`` and
    ``rear`` indices that wrap around.  Enqueue and dequeue are O(1)
    and never shift elements.  The ring is generic over the item type.

SwapQueue:
    A ``RingQueue[int]`` of process ids that also refuses to hold the
    same pid twice — a process can only be suspended once before it is
    resumed.
"""

from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class QueueFullError(OverflowError):
    """Raised when enqueueing into a ring with no free slot."""


class RingQueue(Generic[T]):
    """A fixed-capacity circular FIFO queue."""

    def __init__(self, *, capacity: int) -> None:
        """Create an empty ring with room for *capacity* items.

        Args:
            capacity: Maximum number of items held at once.

        """
        if capacity <= 0:
            msg = f"Ring capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._items: list[T | None] = [None] * capacity
        self._front = 0
        self._rear = -1
        self._size = 0

    @property
    def capacity(self) -> int:
        """Return the maximum number of items the ring can hold."""
        return len(self._items)

    @property
    def front(self) -> int:
        """Return the slot index of the oldest item."""
        return self._front

    @property
    def rear(self) -> int:
        """Return the slot index of the newest item (-1 before first use)."""
        return self._rear

    def is_empty(self) -> bool:
        """Return True if the ring holds no items."""
        return self._size == 0

    def is_full(self) -> bool:
        """Return True if every slot is taken."""
        return self._size == self.capacity

    def enqueue(self, item: T) -> None:
        """Append *item* at the rear.

        Raises:
            QueueFullError: If the ring is full.

        """
        if self.is_full():
            msg = f"Ring queue full ({self.capacity} slots)"
            raise QueueFullError(msg)
        self._rear = (self._rear + 1) % self.capacity
        self._items[self._rear] = item
        self._size += 1

    def dequeue(self) -> T | None:
        """Remove and return the front item, or None if the ring is empty."""
        if self._size == 0:
            return None
        item = self._items[self._front]
        self._items[self._front] = None
        self._front = (self._front + 1) % self.capacity
        self._size -= 1
        return item

    def peek(self) -> T | None:
        """Return the front item without removing it, or None."""
        if self._size == 0:
            return None
        return self._items[self._front]

    def __len__(self) -> int:
        """Return the number of queued items."""
        return self._size

    def __iter__(self) -> Iterator[T]:
        """Iterate from front to rear without consuming."""
        for i in range(self._size):
            item = self._items[(self._front + i) % self.capacity]
            if item is not None:
                yield item


class SwapQueue(RingQueue[int]):
    """FIFO of suspended process ids; each pid appears at most once."""

    def __init__(self, *, capacity: int) -> None:
        """Create an empty swap queue sized for *capacity* processes."""
        super().__init__(capacity=capacity)
        self._members: set[int] = set()

    def enqueue(self, item: int) -> None:
        """Queue a suspended process.

        Raises:
            ValueError: If the pid is already waiting.

        """
        if item in self._members:
            msg = f"Process {item} is already in the swap queue"
            raise ValueError(msg)
        super().enqueue(item)
        self._members.add(item)

    def dequeue(self) -> int | None:
        """Remove and return the longest-waiting pid, or None."""
        pid = super().dequeue()
        if pid is not None:
            self._members.discard(pid)
        return pid

    def __contains__(self, pid: object) -> bool:
        """Return True if *pid* is waiting in the queue."""
        return pid in self._members
