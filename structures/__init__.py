"""
structures/
-----------
Core data layer.  Public API:

    from structures import Graph, LinkedList, BinarySearchTree
    from structures.errors import InvalidInputError, …
"""

from structures.graph       import Graph, Adjacency, normalize_vertex_id
from structures.linked_list import LinkedList, ListNode
from structures.bst         import BinarySearchTree, TreeNode

__all__ = [
    "Graph",            "Adjacency",  "normalize_vertex_id",
    "LinkedList",       "ListNode",
    "BinarySearchTree", "TreeNode",
]
