"""Fixed-capacity sample buffers."""

from __future__ import annotations

from collections import deque
from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class BoundedHistory(Generic[T]):
    """Keeps the most recent ``capacity`` items in arrival order.

    Pushing beyond capacity evicts the oldest item.
    """

    def __init__(self, capacity: int, items: Iterable[T] = ()) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._items: deque[T] = deque(items, maxlen=capacity)

    def push(self, item: T) -> None:
        self._items.append(item)

    def replace(self, items: Iterable[T]) -> None:
        """Drop everything and load ``items`` (still bounded)."""
        self._items = deque(items, maxlen=self.capacity)

    def clear(self) -> None:
        self._items.clear()

    def mean(self) -> float | None:
        """Arithmetic mean of the stored values, or None when empty."""
        if not self._items:
            return None
        return sum(self._items) / len(self._items)

    def to_list(self) -> list[T]:
        return list(self._items)

    @property
    def latest(self) -> T | None:
        return self._items[-1] if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"BoundedHistory({len(self._items)}/{self.capacity})"
