"""
linked_list_ops.py — Traced Linked-List Operations
===================================================
Step logs for the linked-list demo.  The walk is traced node by node,
then the mutation itself is delegated to the LinkedList model so the
trace and the structure can never disagree.

    engine = LinkedListEngine(lst, "insert_at", value=15, position=2)
    result = engine.apply()      # OperationResult(steps, result)

Every step carries the list contents after the event (`array`) and
the values walked so far (`visited`).
"""

from typing import Any, Callable, Dict, Iterator, List, Optional

from algorithms.base import Engine, OperationResult
from algorithms.step import Step, StepType
from structures.errors import InvalidInputError, InvalidPositionError, UnknownOperationError
from structures.linked_list import LinkedList


# ---------------------------------------------------------------------------
# Pseudocode for positional insert (walk, then relink)
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def insert_at(head, position, value):",   # 0
    "    node ← Node(value)",                  # 1
    "    if position = 0:",                    # 2
    "        node.next ← head; head ← node",   # 3
    "    else:",                               # 4
    "        prev ← head",                     # 5
    "        repeat position - 1 times:",      # 6
    "            prev ← prev.next",            # 7
    "        node.next ← prev.next",           # 8
    "        prev.next ← node",                # 9
]

NEEDS_VALUE    = {"append", "insert_head", "insert_at", "delete", "search"}
NEEDS_POSITION = {"insert_at", "delete_at", "get"}


class LinkedListEngine(Engine):

    OPERATIONS = ("append", "insert_head", "insert_at", "delete", "delete_at", "search", "get", "reverse", "traverse")

    def __init__(self, linked_list: LinkedList, operation: str, value: Any = None, position: Optional[int] = None):
        super().__init__()
        if operation not in self.OPERATIONS:
            raise UnknownOperationError(operation, self.OPERATIONS)
        if operation in NEEDS_VALUE and value is None:
            raise InvalidInputError(f"'{operation}' needs a value")
        if operation in NEEDS_POSITION:
            upper = len(linked_list) if operation == "insert_at" else len(linked_list) - 1
            if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position <= upper:
                raise InvalidPositionError(position, len(linked_list))

        self.linked_list = linked_list
        self.operation   = operation
        self.value       = value
        self.position    = position
        self.result: Any = None
        self._walked: List[Any] = []

    def apply(self) -> OperationResult:
        steps = self._record()
        return OperationResult(steps=steps, result=self.result)

    # ------------------------------------------------------------------
    def _trace(self) -> Iterator[Step]:
        handlers: Dict[str, Callable[[], Iterator[Step]]] = {
            "append":      self._append,
            "insert_head": self._insert_head,
            "insert_at":   self._insert_at,
            "delete":      self._delete,
            "delete_at":   self._delete_at,
            "search":      self._search,
            "get":         self._get,
            "reverse":     self._reverse,
            "traverse":    self._traverse,
        }
        yield self._step(StepType.START, f"Linked list {self.operation}: {self._describe()}")
        yield from handlers[self.operation]()
        yield self._step(StepType.COMPLETE, f"{self.operation} finished. List: {self._render()}")

    def _step(self, step_type: StepType, message: str, **fields: Any) -> Step:
        fields.setdefault("array", self.linked_list.to_list())
        fields.setdefault("visited", self._walked)
        return self._sb.build(step_type, message, **fields)

    def _walk(self, count: Optional[int] = None, step_type: StepType = StepType.VISIT) -> Iterator[Step]:
        """Visit the first `count` nodes (all when None)."""
        for idx, value in enumerate(self.linked_list):
            if count is not None and idx >= count:
                return
            self._walked.append(value)
            yield self._step(step_type, f"Visit node {idx} (value {value})", indices=(idx,), current=value)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def _append(self) -> Iterator[Step]:
        yield from self._walk()
        self.linked_list.append(self.value)
        idx = len(self.linked_list) - 1
        self.result = idx
        yield self._step(StepType.INSERT, f"Inserted {self.value} at the tail (position {idx})",
                         indices=(idx,), current=self.value)

    def _insert_head(self) -> Iterator[Step]:
        self.linked_list.insert_at_head(self.value)
        self.result = 0
        yield self._step(StepType.INSERT, f"Inserted {self.value} at the head", indices=(0,), current=self.value)

    def _insert_at(self) -> Iterator[Step]:
        yield from self._walk(self.position)
        self.linked_list.insert_at(self.position, self.value)
        self.result = self.position
        yield self._step(StepType.INSERT, f"Inserted {self.value} at position {self.position}",
                         indices=(self.position,), current=self.value)

    def _delete(self) -> Iterator[Step]:
        for idx, value in enumerate(self.linked_list.to_list()):
            self._walked.append(value)
            yield self._step(StepType.COMPARE, f"Comparing node {idx} ({value}) with {self.value}",
                             indices=(idx,), current=value)
            if value == self.value:
                self.linked_list.delete(self.value)
                self.result = True
                yield self._step(StepType.DELETE, f"Deleted {self.value} from position {idx}",
                                 indices=(idx,), current=value)
                return
        self.result = False
        yield self._step(StepType.NOT_FOUND, f"{self.value} is not in the list")

    def _delete_at(self) -> Iterator[Step]:
        yield from self._walk(self.position + 1)
        removed = self.linked_list.delete_at(self.position)
        self.result = removed
        yield self._step(StepType.DELETE, f"Deleted {removed} from position {self.position}",
                         indices=(self.position,), current=removed)

    def _search(self) -> Iterator[Step]:
        for idx, value in enumerate(self.linked_list.to_list()):
            self._walked.append(value)
            yield self._step(StepType.COMPARE, f"Comparing node {idx} ({value}) with {self.value}",
                             indices=(idx,), current=value)
            if value == self.value:
                self.result = idx
                yield self._step(StepType.FOUND, f"Found {self.value} at position {idx}",
                                 indices=(idx,), current=value)
                return
        self.result = -1
        yield self._step(StepType.NOT_FOUND, f"{self.value} is not in the list")

    def _get(self) -> Iterator[Step]:
        yield from self._walk(self.position + 1)
        self.result = self.linked_list.get(self.position)
        yield self._step(StepType.FOUND, f"Value at position {self.position} is {self.result}",
                         indices=(self.position,), current=self.result)

    def _reverse(self) -> Iterator[Step]:
        remaining = self.linked_list.to_list()
        done: List[Any] = []
        for idx, value in enumerate(remaining):
            done.insert(0, value)
            self._walked.append(value)
            yield self._step(
                StepType.RELINK, f"Point node {value}.next back at {done[1] if len(done) > 1 else 'None'}",
                array=done + remaining[idx + 1:], indices=(idx,), current=value,
                overlay={"reversed": list(done), "remaining": remaining[idx + 1:]},
            )
        self.linked_list.reverse()
        self.result = self.linked_list.to_list()

    def _traverse(self) -> Iterator[Step]:
        yield from self._walk()
        self.result = list(self._walked)

    # ------------------------------------------------------------------
    def _describe(self) -> str:
        parts = []
        if self.value is not None:
            parts.append(f"value={self.value}")
        if self.position is not None:
            parts.append(f"position={self.position}")
        return ", ".join(parts) or self._render()

    def _render(self) -> str:
        return " → ".join(str(v) for v in self.linked_list) or "(empty)"
