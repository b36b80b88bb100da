"""A singly linked list with index, search and destroy-callback helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")

Condition = Callable[[Any], bool]
Destroyer = Callable[[Any], Any]


@dataclass
class _Node:
    data: Any
    next: Optional["_Node"] = None


class LinkedList(Generic[T]):
    """Singly linked list of arbitrary elements.

    Out-of-range reads and replacements yield ``None``; inserting outside the
    current bounds is ignored; removing from an empty list yields ``None``.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._head: Optional[_Node] = None
        self._tail: Optional[_Node] = None
        self._count = 0
        for item in items:
            self.add(item)

    def _nodes(self) -> Iterator[_Node]:
        node = self._head
        while node is not None:
            yield node
            node = node.next

    def _node_at(self, index: int) -> Optional[_Node]:
        if not 0 <= index < self._count:
            return None
        for position, node in enumerate(self._nodes()):
            if position == index:
                return node
        return None

    def _index_of(self, condition: Condition) -> Optional[int]:
        for position, data in enumerate(self):
            if condition(data):
                return position
        return None

    def add(self, data: T) -> int:
        """Append ``data`` and return the index it was stored at."""
        node = _Node(data)
        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self._count += 1
        return self._count - 1

    def add_in_index(self, index: int, data: T) -> None:
        """Insert ``data`` before the element at ``index``; ignored if out of range."""
        if not 0 <= index < self._count:
            return
        node = _Node(data)
        if index == 0:
            node.next = self._head
            self._head = node
        else:
            previous = self._node_at(index - 1)
            assert previous is not None
            node.next = previous.next
            previous.next = node
        self._count += 1

    def get(self, index: int) -> Optional[T]:
        """Return the element at ``index``, or ``None`` if out of range."""
        node = self._node_at(index)
        return node.data if node is not None else None

    def replace(self, index: int, data: T) -> Optional[T]:
        """Store ``data`` at ``index`` and return the previous element."""
        node = self._node_at(index)
        if node is None:
            return None
        old, node.data = node.data, data
        return old

    def replace_and_destroy(self, index: int, data: T, destroyer: Destroyer) -> None:
        """Replace the element at ``index`` and hand the old one to ``destroyer``."""
        node = self._node_at(index)
        if node is None:
            return
        old, node.data = node.data, data
        destroyer(old)

    def find(self, condition: Condition) -> Optional[T]:
        """Return the first element for which ``condition`` is true."""
        return next((data for data in self if condition(data)), None)

    def iterate(self, closure: Callable[[T], Any]) -> None:
        """Call ``closure`` on every element in order."""
        for data in self:
            closure(data)

    def remove(self, index: int) -> Optional[T]:
        """Remove and return the element at ``index``.

        Returns ``None`` when the list is empty; raises ``IndexError`` when a
        non-empty list has no element at ``index``.
        """
        if self._head is None:
            return None
        if not 0 <= index < self._count:
            raise IndexError(f"list index {index} out of range")
        if index == 0:
            node = self._head
            self._head = node.next
            previous = None
        else:
            previous = self._node_at(index - 1)
            assert previous is not None and previous.next is not None
            node = previous.next
            previous.next = node.next
        if node is self._tail:
            self._tail = previous
        self._count -= 1
        return node.data

    def remove_by_condition(self, condition: Condition) -> Optional[T]:
        """Remove and return the first element matching ``condition``."""
        index = self._index_of(condition)
        return None if index is None else self.remove(index)

    def remove_and_destroy(self, index: int, destroyer: Destroyer) -> None:
        """Remove the element at ``index`` and hand it to ``destroyer``."""
        destroyer(self.remove(index))

    def remove_and_destroy_by_condition(self, condition: Condition, destroyer: Destroyer) -> None:
        """Remove the first element matching ``condition`` and hand it to ``destroyer``."""
        index = self._index_of(condition)
        if index is not None:
            destroyer(self.remove(index))

    def clean(self) -> None:
        """Drop every element."""
        self._head = None
        self._tail = None
        self._count = 0

    def clean_and_destroy_elements(self, destroyer: Destroyer) -> None:
        """Hand every element to ``destroyer``, then drop them all."""
        self.iterate(destroyer)
        self.clean()

    def is_empty(self) -> bool:
        return self._count == 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[T]:
        return (node.data for node in self._nodes())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"