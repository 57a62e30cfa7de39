"""
linked_list.py — Singly Linked List
====================================
No sentinel: an empty list is simply `head is None`.
Values may repeat.  Positional operations are 0-based.
"""

from typing import Any, Iterable, Iterator, List, Optional

from structures.errors import InvalidPositionError


class ListNode:
    __slots__ = ("value", "next")

    def __init__(self, value: Any, next: Optional["ListNode"] = None):
        self.value = value
        self.next  = next

    def __repr__(self) -> str:
        return f"ListNode({self.value!r})"


class LinkedList:
    """
    Attributes:
        head : first ListNode, or None when empty.
        size : number of nodes.
    """

    def __init__(self, values: Iterable[Any] = ()):
        self.head: Optional[ListNode] = None
        self.size: int = 0
        for v in values:
            self.append(v)

    # ------------------------------------------------------------------
    # Insert
    # ------------------------------------------------------------------
    def append(self, value: Any) -> None:
        """Insert at the tail — O(n)."""
        node = ListNode(value)
        if self.head is None:
            self.head = node
        else:
            cur = self.head
            while cur.next:
                cur = cur.next
            cur.next = node
        self.size += 1

    def insert_at_head(self, value: Any) -> None:
        self.head = ListNode(value, self.head)
        self.size += 1

    def insert_at(self, position: int, value: Any) -> None:
        """Insert so that `value` ends up at index `position` (0..size)."""
        self._check_position(position, self.size)
        if position == 0:
            self.insert_at_head(value)
            return
        prev = self._node_at(position - 1)
        prev.next = ListNode(value, prev.next)
        self.size += 1

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------
    def delete(self, value: Any) -> bool:
        """Remove the first node holding `value`.  False if absent."""
        if self.head is None:
            return False
        if self.head.value == value:
            self.head = self.head.next
            self.size -= 1
            return True
        cur = self.head
        while cur.next and cur.next.value != value:
            cur = cur.next
        if cur.next:
            cur.next = cur.next.next
            self.size -= 1
            return True
        return False

    def delete_at(self, position: int) -> Any:
        """Remove the node at `position` and return its value."""
        self._check_position(position, self.size - 1)
        if position == 0:
            removed = self.head
            self.head = removed.next
        else:
            prev = self._node_at(position - 1)
            removed = prev.next
            prev.next = removed.next
        self.size -= 1
        return removed.value

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------
    def search(self, value: Any) -> int:
        """Index of the first node holding `value`, or -1."""
        for idx, v in enumerate(self):
            if v == value:
                return idx
        return -1

    def get(self, position: int) -> Any:
        self._check_position(position, self.size - 1)
        return self._node_at(position).value

    def reverse(self) -> None:
        prev, cur = None, self.head
        while cur:
            cur.next, prev, cur = prev, cur, cur.next
        self.head = prev

    def to_list(self) -> List[Any]:
        return list(self)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _node_at(self, position: int) -> ListNode:
        cur = self.head
        for _ in range(position):
            cur = cur.next
        return cur

    def _check_position(self, position: int, upper: int) -> None:
        if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position <= upper:
            raise InvalidPositionError(position, self.size)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[Any]:
        cur = self.head
        while cur:
            yield cur.value
            cur = cur.next

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return "LinkedList(" + " → ".join(repr(v) for v in self) + ")"
