"""
bst.py — Binary Search Tree
============================
Ordering invariant: left subtree < node < right subtree.
Duplicates are rejected with DuplicateValueError and the tree is left
untouched.

Deletion covers all three structural cases:
  • leaf            → unlink
  • one child       → splice the child up
  • two children    → copy the inorder successor (min of right subtree)
                      up, then delete that successor from the right subtree
"""

from typing import Any, Dict, Iterable, List, Optional

from structures.errors import DuplicateValueError


class TreeNode:
    __slots__ = ("value", "left", "right")

    def __init__(self, value: Any):
        self.value = value
        self.left:  Optional["TreeNode"] = None
        self.right: Optional["TreeNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"TreeNode({self.value!r})"


class BinarySearchTree:

    def __init__(self, values: Iterable[Any] = ()):
        self.root: Optional[TreeNode] = None
        self.size: int = 0
        for v in values:
            self.insert(v)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, value: Any) -> None:
        if self.root is None:
            self.root = TreeNode(value)
            self.size += 1
            return
        cur = self.root
        while True:
            if value == cur.value:
                raise DuplicateValueError(value)
            side = "left" if value < cur.value else "right"
            child = getattr(cur, side)
            if child is None:
                setattr(cur, side, TreeNode(value))
                self.size += 1
                return
            cur = child

    def delete(self, value: Any) -> bool:
        """Remove `value`.  Returns False (tree unchanged) if absent."""
        if not self.contains(value):
            return False
        self.root = self._delete(self.root, value)
        self.size -= 1
        return True

    def _delete(self, node: Optional[TreeNode], value: Any) -> Optional[TreeNode]:
        if node is None:
            return None
        if value < node.value:
            node.left = self._delete(node.left, value)
        elif value > node.value:
            node.right = self._delete(node.right, value)
        else:
            if node.left is None:
                return node.right
            if node.right is None:
                return node.left
            successor = find_min(node.right)
            node.value = successor.value
            node.right = self._delete(node.right, successor.value)
        return node

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def contains(self, value: Any) -> bool:
        path = self.search_path(value)
        return bool(path) and path[-1] == value

    def search_path(self, value: Any) -> List[Any]:
        """Values compared on the way down, ending at `value` if present."""
        path = []
        cur = self.root
        while cur:
            path.append(cur.value)
            if value == cur.value:
                break
            cur = cur.left if value < cur.value else cur.right
        return path

    def minimum(self) -> Optional[Any]:
        return find_min(self.root).value if self.root else None

    def height(self) -> int:
        """Number of levels; empty tree = 0."""
        def _h(node: Optional[TreeNode]) -> int:
            return 0 if node is None else 1 + max(_h(node.left), _h(node.right))
        return _h(self.root)

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------
    def inorder(self) -> List[Any]:
        out: List[Any] = []

        def walk(node):
            if node:
                walk(node.left)
                out.append(node.value)
                walk(node.right)
        walk(self.root)
        return out

    def preorder(self) -> List[Any]:
        out: List[Any] = []

        def walk(node):
            if node:
                out.append(node.value)
                walk(node.left)
                walk(node.right)
        walk(self.root)
        return out

    def postorder(self) -> List[Any]:
        out: List[Any] = []

        def walk(node):
            if node:
                walk(node.left)
                walk(node.right)
                out.append(node.value)
        walk(self.root)
        return out

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Optional[Dict[str, Any]]:
        return snapshot(self.root)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def __repr__(self) -> str:
        return f"BinarySearchTree(size={self.size}, inorder={self.inorder()})"


# ---------------------------------------------------------------------------
# Helpers (shared with the traced tree operations)
# ---------------------------------------------------------------------------
def find_min(node: TreeNode) -> TreeNode:
    while node.left:
        node = node.left
    return node


def snapshot(node: Optional[TreeNode]) -> Optional[Dict[str, Any]]:
    """Nested {value, left, right} copy of the subtree."""
    if node is None:
        return None
    return {"value": node.value, "left": snapshot(node.left), "right": snapshot(node.right)}
