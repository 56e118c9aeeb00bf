"""Array-backed binary heap with a switchable max/min ordering.

The tree lives in a flat list in level order: the root is at index 0 and
the node at index ``i`` has its children at ``2i + 1`` and ``2i + 2``.
"""

import logging
from typing import Generic, Iterable, List, Optional, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
RESIZE_FACTOR = 0.90
RESIZE_INCREMENT = 100


class InvalidOperationError(RuntimeError):
    """Raised when an operation's precondition on the heap state does not hold."""


def left_child(index: int) -> int:
    return 2 * index + 1


def right_child(index: int) -> int:
    return 2 * index + 2


def parent(index: int) -> int:
    return (index - 1) // 2


class HeapTree(Generic[T]):
    def __init__(self, initial_capacity: int = DEFAULT_CAPACITY, max_mode: bool = True) -> None:
        if (not isinstance(initial_capacity, int) or isinstance(initial_capacity, bool)
                or initial_capacity <= 0):
            raise ValueError("initial_capacity must be a positive integer")
        self._capacity = initial_capacity
        self._data: List[Optional[T]] = [None] * initial_capacity
        self._size = 0
        self._max_mode = bool(max_mode)

    @classmethod
    def from_iterable(cls, items: Iterable[T], initial_capacity: int = DEFAULT_CAPACITY,
                      max_mode: bool = True) -> 'HeapTree[T]':
        heap: HeapTree[T] = cls(initial_capacity, max_mode)
        for item in items:
            heap.put(item)
        return heap

    def put(self, element: T) -> None:
        """Insert ``element`` and restore heap order.

        Storage grows by ``RESIZE_INCREMENT`` slots once occupancy reaches
        ``RESIZE_FACTOR`` of the current capacity.
        """
        if element is None:
            raise ValueError("HeapTree does not accept None elements")
        index = self._size
        self._data[index] = element
        self._size += 1
        if index > 0:
            try:
                self._sift_up(index)
            except Exception:
                # _sift_up compares before it moves anything, so only the new slot needs undoing.
                self._size -= 1
                self._data[index] = None
                raise
        if self._resize_needed():
            self._grow()

    def extract(self, default: Optional[T] = None) -> Optional[T]:
        """Remove and return the root, or ``default`` if the heap is empty."""
        if self._size == 0:
            return default
        root = self._data[0]
        self._size -= 1
        last = self._size
        self._data[0] = self._data[last]
        self._data[last] = None
        if self._size > 1:
            self._sift_down(0)
        return root

    def top(self, default: Optional[T] = None) -> Optional[T]:
        if self._size == 0:
            return default
        return self._data[0]

    def size(self) -> int:
        return self._size

    def capacity(self) -> int:
        return self._capacity

    def is_empty(self) -> bool:
        return self._size == 0

    def is_max_heap(self) -> bool:
        return self._max_mode

    def set_mode(self, to_max: bool) -> None:
        """Switch between max-heap and min-heap ordering.

        Only an empty heap may change mode; existing elements are never
        re-heapified.
        """
        if self._size > 0:
            raise InvalidOperationError(
                "set_mode: the heap must be empty to change its mode (size=%d)" % self._size
            )
        self._max_mode = bool(to_max)
        logger.debug("heap mode set to %s", "max" if self._max_mode else "min")

    def set_max_heap_mode(self, enabled: bool) -> None:
        self.set_mode(enabled)

    def set_min_heap_mode(self, enabled: bool) -> None:
        self.set_mode(not enabled)

    def debug_dump(self) -> str:
        """Render elements in storage order, one per line, each followed by a newline."""
        return "".join("%s\n" % self._data[i] for i in range(self._size))

    def _dominates(self, a: T, b: T) -> bool:
        # Strict: equal elements never dominate each other.
        if self._max_mode:
            return a > b
        return a < b

    def _swap(self, i: int, j: int) -> None:
        self._data[i], self._data[j] = self._data[j], self._data[i]

    def _sift_up(self, index: int) -> None:
        element = self._data[index]
        target = index
        while target > 0 and self._dominates(element, self._data[parent(target)]):
            target = parent(target)
        while index != target:
            up = parent(index)
            self._swap(index, up)
            index = up

    def _sift_down(self, index: int) -> None:
        size = self._size
        while True:
            left = left_child(index)
            if left >= size:
                break
            child = left
            right = right_child(index)
            if right < size and self._dominates(self._data[right], self._data[left]):
                child = right
            if not self._dominates(self._data[child], self._data[index]):
                break
            self._swap(index, child)
            index = child

    def _resize_needed(self) -> bool:
        return self._size / self._capacity >= RESIZE_FACTOR

    def _grow(self) -> None:
        new_cap = self._capacity + RESIZE_INCREMENT
        new_data: List[Optional[T]] = [None] * new_cap
        for i in range(self._size):
            new_data[i] = self._data[i]
        logger.debug("growing heap storage from %d to %d slots (size=%d)",
                     self._capacity, new_cap, self._size)
        self._data = new_data
        self._capacity = new_cap

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __repr__(self) -> str:
        mode = "max" if self._max_mode else "min"
        return f"HeapTree(mode={mode}, size={self._size}, capacity={self._capacity})"

    def __str__(self) -> str:
        return self.debug_dump()
