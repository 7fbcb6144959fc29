from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """
    Fixed-capacity FIFO over a preallocated slot list.

    Appending to a full buffer overwrites the oldest entry, so append and
    evict are both O(1). Iteration and indexing follow arrival order.
    """

    __slots__ = ("_capacity", "_slots", "_head", "_size")

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._slots: list[T | None] = [None] * capacity
        self._head = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def full(self) -> bool:
        return self._size == self._capacity

    def append(self, item: T) -> None:
        tail = (self._head + self._size) % self._capacity
        self._slots[tail] = item
        if self._size < self._capacity:
            self._size += 1
        else:
            self._head = (self._head + 1) % self._capacity

    def extend(self, items: Iterable[T]) -> None:
        for item in items:
            self.append(item)

    def resize(self, capacity: int) -> None:
        """
        Change the capacity in place, keeping the newest entries.

        Shrinking drops the oldest items immediately so ``len(buf) <= capacity``
        holds as soon as this returns.
        """
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if capacity == self._capacity:
            return
        kept = list(self)[-capacity:]
        self._slots = [None] * capacity
        self._slots[: len(kept)] = kept
        self._capacity = capacity
        self._head = 0
        self._size = len(kept)

    def clear(self) -> None:
        self._slots = [None] * self._capacity
        self._head = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> T:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError("RingBuffer index out of range")
        return self._slots[(self._head + index) % self._capacity]  # type: ignore[return-value]

    def __iter__(self) -> Iterator[T]:
        head, capacity, slots = self._head, self._capacity, self._slots
        for offset in range(self._size):
            yield slots[(head + offset) % capacity]  # type: ignore[misc]
