"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every engine the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "merge_sort": AlgoInfo(key, label, category, engine, pseudocode, …),
        …
    }

`category` says which capability the engine has (Sortable, Traversable,
ShortestPathRunnable, StructureOperable), so the recorder can call the
right operation without looking a method up by name.  Adding a new
algorithm is: write the engine, add one entry here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

# ---------------------------------------------------------------------------
# Import all engine modules
# ---------------------------------------------------------------------------
from algorithms.insertion_sort  import InsertionSort,      insertion_sort, PSEUDOCODE as _ins_pc
from algorithms.merge_sort      import MergeSort,          merge_sort,     PSEUDOCODE as _mrg_pc
from algorithms.quick_sort      import QuickSort,          quick_sort,     PSEUDOCODE as _qck_pc
from algorithms.dfs             import DepthFirstSearch,   traverse_dfs,   PSEUDOCODE as _dfs_pc
from algorithms.bfs             import BreadthFirstSearch, traverse_bfs,   PSEUDOCODE as _bfs_pc
from algorithms.dijkstra        import Dijkstra,           run_dijkstra,   PSEUDOCODE as _dij_pc
from algorithms.linked_list_ops import LinkedListEngine,                   PSEUDOCODE as _ll_pc
from algorithms.tree_ops        import TreeEngine,                         PSEUDOCODE as _bst_pc
from algorithms.base import (
    DijkstraResult, OperationResult, SortResult, TraversalResult,
    Sortable, Traversable, ShortestPathRunnable, StructureOperable,
)
from algorithms.step import Step, StepType


class Category(Enum):
    SORTING       = "sorting"        # Sortable.sort()
    TRAVERSAL     = "traversal"      # Traversable.traverse()
    SHORTEST_PATH = "shortest_path"  # ShortestPathRunnable.run()
    STRUCTURE     = "structure"      # StructureOperable.apply()


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each engine
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "merge_sort"
    label:            str                    # human label, e.g. "Merge Sort"
    category:         Category
    engine:           Callable               # engine class
    pseudocode:       List[str]
    inputs:           Tuple[str, ...]        # constructor kwargs the engine accepts
    tags:             List[str] = field(default_factory=list)
    stable:           Optional[bool] = None  # sorts only
    complexity_time:  str      = ""
    complexity_space: str      = ""
    description:      str      = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "category":         self.category.value,
            "inputs":           list(self.inputs),
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
            "stable":           self.stable,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", category=Category.SORTING,
        engine=InsertionSort, pseudocode=_ins_pc, inputs=("values",),
        tags=["in-place", "adaptive"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix by shifting larger elements right.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", category=Category.SORTING,
        engine=MergeSort, pseudocode=_mrg_pc, inputs=("values",),
        tags=["divide-and-conquer"], stable=True,
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits in halves, sorts each, merges two sorted runs.",
    ),

    "quick_sort": AlgoInfo(
        key="quick_sort", label="Quick Sort", category=Category.SORTING,
        engine=QuickSort, pseudocode=_qck_pc, inputs=("values",),
        tags=["divide-and-conquer", "in-place"], stable=False,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last element, then recurse left and right.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", category=Category.TRAVERSAL,
        engine=DepthFirstSearch, pseudocode=_dfs_pc, inputs=("graph", "start"),
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking.",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", category=Category.TRAVERSAL,
        engine=BreadthFirstSearch, pseudocode=_bfs_pc, inputs=("graph", "start"),
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer from the start vertex.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", category=Category.SHORTEST_PATH,
        engine=Dijkstra, pseudocode=_dij_pc, inputs=("graph", "source", "target"),
        tags=["weighted", "shortest-path"],
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Settles the closest unvisited vertex each round. Positive weights only.",
    ),

    "linked_list": AlgoInfo(
        key="linked_list", label="Linked List", category=Category.STRUCTURE,
        engine=LinkedListEngine, pseudocode=_ll_pc,
        inputs=("linked_list", "operation", "value", "position"),
        tags=["linear"],
        complexity_time="O(n) search / insert at position, O(1) insert at head", complexity_space="O(1) auxiliary",
        description="Singly linked nodes; no random access.",
    ),

    "bst": AlgoInfo(
        key="bst", label="Binary Search Tree", category=Category.STRUCTURE,
        engine=TreeEngine, pseudocode=_bst_pc, inputs=("tree", "operation", "value"),
        tags=["ordered", "tree"],
        complexity_time="O(log n) avg, O(n) worst", complexity_space="O(h)",
        description="left < node < right; delete via inorder successor.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: Category) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category is category]


__all__ = [
    "AlgoInfo", "Category", "REGISTRY",
    "get_algorithm", "list_algorithms", "algorithms_by_category",
    "Step", "StepType",
    "SortResult", "TraversalResult", "DijkstraResult", "OperationResult",
    "Sortable", "Traversable", "ShortestPathRunnable", "StructureOperable",
    "InsertionSort", "MergeSort", "QuickSort",
    "DepthFirstSearch", "BreadthFirstSearch", "Dijkstra",
    "LinkedListEngine", "TreeEngine",
    "insertion_sort", "merge_sort", "quick_sort",
    "traverse_dfs", "traverse_bfs", "run_dijkstra",
]
