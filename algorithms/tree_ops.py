"""
tree_ops.py — Traced Binary-Search-Tree Operations
===================================================
Step logs for the BST demo: insert, search, delete and the three
depth-first traversals.

    engine = TreeEngine(tree, "delete", value=50)
    result = engine.apply()      # OperationResult(steps, result)

Every step carries a nested {value, left, right} snapshot of the tree
(`tree`) and the values compared / visited so far (`visited`).
Traversal steps also carry the accumulated output sequence (`array`).

Inserting a value that is already present raises DuplicateValueError
from the constructor; no step is produced and the tree is untouched.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional

from algorithms.base import Engine, OperationResult
from algorithms.step import Step, StepType
from structures.bst import BinarySearchTree, TreeNode, find_min
from structures.errors import DuplicateValueError, InvalidInputError, UnknownOperationError


# ---------------------------------------------------------------------------
# Pseudocode for the delete operation (the one with three cases)
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def delete(node, value):",                           # 0
    "    if value < node.value: node.left ← delete(node.left, value)",    # 1
    "    elif value > node.value: node.right ← delete(node.right, value)", # 2
    "    elif node has no left: return node.right",       # 3
    "    elif node has no right: return node.left",       # 4
    "    else:",                                          # 5
    "        s ← min(node.right)",                        # 6
    "        node.value ← s.value",                       # 7
    "        node.right ← delete(node.right, s.value)",   # 8
    "    return node",                                    # 9
]


class TreeEngine(Engine):

    OPERATIONS = ("insert", "search", "delete", "inorder", "preorder", "postorder")

    def __init__(self, tree: BinarySearchTree, operation: str, value: Any = None):
        super().__init__()
        if operation not in self.OPERATIONS:
            raise UnknownOperationError(operation, self.OPERATIONS)
        if operation in ("insert", "search", "delete") and value is None:
            raise InvalidInputError(f"'{operation}' needs a value")
        if operation == "insert" and tree.contains(value):
            raise DuplicateValueError(value)

        self.tree      = tree
        self.operation = operation
        self.value     = value
        self.result: Any = None
        self._walked: List[Any] = []

    def apply(self) -> OperationResult:
        steps = self._record()
        return OperationResult(steps=steps, result=self.result)

    # ------------------------------------------------------------------
    def _trace(self) -> Iterator[Step]:
        handlers: Dict[str, Callable[[], Iterator[Step]]] = {
            "insert":    self._insert,
            "search":    self._search,
            "delete":    self._delete,
            "inorder":   lambda: self._traversal("inorder"),
            "preorder":  lambda: self._traversal("preorder"),
            "postorder": lambda: self._traversal("postorder"),
        }
        target = f" {self.value}" if self.value is not None else ""
        yield self._step(StepType.START, f"BST {self.operation}{target}")
        yield from handlers[self.operation]()
        yield self._step(StepType.COMPLETE, f"{self.operation} finished ({self.tree.size} node(s))")

    def _step(self, step_type: StepType, message: str, **fields: Any) -> Step:
        fields.setdefault("tree", self.tree.to_dict())
        fields.setdefault("visited", self._walked)
        return self._sb.build(step_type, message, **fields)

    def _descend(self, value: Any) -> Iterator[Step]:
        """Compare `value` down the tree until it matches or falls off."""
        cur = self.tree.root
        while cur is not None:
            self._walked.append(cur.value)
            if value == cur.value:
                direction = "match"
            else:
                direction = "left" if value < cur.value else "right"
            yield self._step(
                StepType.COMPARE, f"Compare {value} with {cur.value}: {direction}",
                current=cur.value, overlay={"direction": direction},
            )
            if direction == "match":
                return
            cur = cur.left if direction == "left" else cur.right

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def _insert(self) -> Iterator[Step]:
        yield from self._descend(self.value)
        parent = self._walked[-1] if self._walked else None
        self.tree.insert(self.value)
        self.result = True
        where = f"as child of {parent}" if parent is not None else "as root"
        yield self._step(StepType.INSERT, f"Inserted {self.value} {where}",
                         current=self.value, overlay={"parent": parent})

    def _search(self) -> Iterator[Step]:
        yield from self._descend(self.value)
        self.result = bool(self._walked) and self._walked[-1] == self.value
        path = " → ".join(str(v) for v in self._walked)
        if self.result:
            yield self._step(StepType.FOUND, f"Search path: {path}", current=self.value)
        else:
            yield self._step(StepType.NOT_FOUND, f"Search path: {path or '(empty)'} (not found)")

    def _delete(self) -> Iterator[Step]:
        yield from self._descend(self.value)
        node = self._find(self.value)
        if node is None:
            self.result = False
            yield self._step(StepType.NOT_FOUND, f"{self.value} is not in the tree")
            return

        if node.is_leaf:
            case = "leaf"
        elif node.left is None or node.right is None:
            case = "one_child"
        else:
            case = "two_children"
            successor_path = []
            cur: Optional[TreeNode] = node.right
            while cur is not None:
                successor_path.append(cur.value)
                cur = cur.left
            successor = find_min(node.right).value
            yield self._step(
                StepType.SUCCESSOR,
                f"{self.value} has two children; inorder successor is {successor}",
                current=successor,
                overlay={"successor": successor, "successor_path": successor_path},
                pseudocode_line=6,
            )
            yield self._step(
                StepType.COPY, f"Copy {successor} up into the node holding {self.value}",
                current=successor,
                tree=_with_value_replaced(self.tree.to_dict(), self.value, successor),
                overlay={"successor": successor},
                pseudocode_line=7,
            )

        self.tree.delete(self.value)
        self.result = True
        yield self._step(StepType.DELETE, f"Deleted {self.value} ({case.replace('_', ' ')} case)",
                         current=self.value, overlay={"case": case},
                         pseudocode_line=8 if case == "two_children" else 3)

    def _traversal(self, order: str) -> Iterator[Step]:
        frozen = self.tree.to_dict()

        def walk(node: Optional[TreeNode]) -> Iterator[Step]:
            if node is None:
                return
            if order == "preorder":
                yield visit(node)
            yield from walk(node.left)
            if order == "inorder":
                yield visit(node)
            yield from walk(node.right)
            if order == "postorder":
                yield visit(node)

        def visit(node: TreeNode) -> Step:
            self._walked.append(node.value)
            return self._step(
                StepType.VISIT, f"{order.capitalize()}: visit {node.value}",
                current=node.value, array=self._walked, tree=frozen,
            )

        yield from walk(self.tree.root)
        self.result = list(self._walked)

    # ------------------------------------------------------------------
    def _find(self, value: Any) -> Optional[TreeNode]:
        cur = self.tree.root
        while cur is not None and cur.value != value:
            cur = cur.left if value < cur.value else cur.right
        return cur


def _with_value_replaced(tree: Dict[str, Any], old: Any, new: Any) -> Dict[str, Any]:
    node = tree
    while node["value"] != old:
        node = node["left"] if old < node["value"] else node["right"]
    node["value"] = new
    return tree
