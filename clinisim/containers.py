"""Queue and stack containers used by the simulation."""

from __future__ import annotations

from bisect import bisect_right
from collections import deque
from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")

DEFAULT_STACK_CAPACITY = 200


class LinkedQueue(Generic[T]):
    """First-in, first-out queue."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: deque[T] = deque(items)

    def enqueue(self, item: T) -> None:
        """Add an item at the back."""
        self._items.append(item)

    def dequeue(self) -> T:
        """Remove and return the front item; IndexError when empty."""
        if not self._items:
            raise IndexError("dequeue from an empty queue")
        return self._items.popleft()

    def peek(self) -> T:
        """Return the front item without removing it; IndexError when empty."""
        if not self._items:
            raise IndexError("peek into an empty queue")
        return self._items[0]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def format(self, limit: int = 0) -> str:
        """Join the first ``limit`` items with commas; 0 or too large means all."""
        if limit <= 0 or limit > len(self._items):
            limit = len(self._items)
        return ", ".join(str(item) for _, item in zip(range(limit), self._items))


class PriQueue(Generic[T]):
    """Priority queue: higher priority first, equal priorities in arrival order."""

    def __init__(self) -> None:
        self._entries: list[tuple[int, T]] = []

    def enqueue(self, item: T, priority: int) -> None:
        """Insert an item after every entry of the same or higher priority."""
        position = bisect_right(self._entries, -priority, key=lambda entry: -entry[0])
        self._entries.insert(position, (priority, item))

    def dequeue(self) -> tuple[T, int]:
        """Remove and return ``(item, priority)`` of the head; IndexError when empty."""
        if not self._entries:
            raise IndexError("dequeue from an empty priority queue")
        priority, item = self._entries.pop(0)
        return item, priority

    def peek(self) -> tuple[T, int]:
        """Return ``(item, priority)`` of the head; IndexError when empty."""
        if not self._entries:
            raise IndexError("peek into an empty priority queue")
        priority, item = self._entries[0]
        return item, priority

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return (item for _, item in self._entries)

    def format(self) -> str:
        """Join all items, head first, with commas."""
        return ", ".join(str(item) for item in self)


class ArrayStack(Generic[T]):
    """Bounded last-in, first-out stack."""

    def __init__(self, capacity: int = DEFAULT_STACK_CAPACITY) -> None:
        self.capacity = capacity
        self._items: list[T] = []

    def push(self, item: T) -> None:
        """Push an item; IndexError when the stack is full."""
        if len(self._items) >= self.capacity:
            raise IndexError("push onto a full stack")
        self._items.append(item)

    def pop(self) -> T:
        """Remove and return the top item; IndexError when empty."""
        if not self._items:
            raise IndexError("pop from an empty stack")
        return self._items.pop()

    def peek(self) -> T:
        """Return the top item; IndexError when empty."""
        if not self._items:
            raise IndexError("peek into an empty stack")
        return self._items[-1]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        """Iterate from the top of the stack down."""
        return reversed(self._items)

    def format(self) -> str:
        """Join all items, top first, with commas."""
        return ", ".join(str(item) for item in self)