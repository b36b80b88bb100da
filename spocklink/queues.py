"""FIFO queues built on the package's linked list, plain and lock-guarded."""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from spocklink.linkedlist import LinkedList

T = TypeVar("T")


class Queue(Generic[T]):
    """First-in, first-out queue.

    Popping or peeking an empty queue yields ``None``.
    """

    def __init__(self) -> None:
        self._elements: LinkedList[T] = LinkedList()

    def push(self, element: T) -> None:
        """Append ``element`` at the back of the queue."""
        self._elements.add(element)

    def pop(self) -> Optional[T]:
        """Remove and return the front element, or ``None`` if empty."""
        return self._elements.remove(0)

    def peek(self) -> Optional[T]:
        """Return the front element without removing it, or ``None`` if empty."""
        return self._elements.get(0)

    def clean(self) -> None:
        """Drop every element."""
        self._elements.clean()

    def clean_and_destroy_elements(self, destroyer: Callable[[Any], Any]) -> None:
        """Hand every element to ``destroyer`` in queue order, then drop them."""
        self._elements.clean_and_destroy_elements(destroyer)

    def is_empty(self) -> bool:
        return self._elements.is_empty()

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._elements)!r})"


class SyncQueue(Generic[T]):
    """A queue whose push and pop are guarded by a lock for use across threads."""

    def __init__(self) -> None:
        self._queue: Queue[T] = Queue()
        self._lock = threading.Lock()

    def push(self, element: T) -> None:
        """Append ``element`` under the lock."""
        with self._lock:
            self._queue.push(element)

    def pop(self) -> Optional[T]:
        """Remove and return the front element under the lock, or ``None`` if empty."""
        with self._lock:
            return self._queue.pop()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)