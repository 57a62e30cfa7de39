"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack of (vertex, neighbour
iterator) frames, which gives exactly the recursive visiting order
without Python recursion-limit issues.

Yields a Step at:
  1. Start from the source
  2. Every vertex visit            →  cumulative visited list
  3. Every edge explored from the current vertex toward an unvisited
     neighbour                     →  that edge ACTIVE
  4. Complete                      →  no edge active

Neighbours are taken in stored adjacency order.  Vertices outside the
start vertex's component are never visited; they are listed in the
final step's overlay under "unreached".
"""

from typing import Iterator, List, Optional

from algorithms.base import TraversalEngine, TraversalResult
from algorithms.step import Step, StepType
from structures.graph import Graph


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, node):",                    # 0
    "    visited.add(node)",                    # 1
    "    for neighbour in adj(node):",          # 2
    "        if neighbour not visited:",        # 3
    "            DFS(graph, neighbour)",        # 4
]


class DepthFirstSearch(TraversalEngine):
    LABEL = "DFS"

    def _walk(self) -> Iterator[Step]:
        sb = self._sb
        visited = set()

        def visit(vertex: str, via: Optional[tuple]) -> Step:
            visited.add(vertex)
            self.visit_order.append(vertex)
            return sb.build(
                StepType.VISIT, f"Visit '{vertex}'",
                current=vertex, visited=self.visit_order,
                frontier=[v for v, _ in stack] + [vertex],
                active_edges=[via] if via else [],
                pseudocode_line=1,
            )

        stack: List[tuple] = []
        yield visit(self.start, None)
        stack.append((self.start, iter(self.graph.neighbours(self.start))))

        while stack:
            vertex, nbrs = stack[-1]
            nxt = next((adj for adj in nbrs if adj.neighbor not in visited), None)
            if nxt is None:
                stack.pop()
                continue

            edge = (vertex, nxt.neighbor)
            yield sb.build(
                StepType.EXPLORE_EDGE, f"Edge {vertex}→{nxt.neighbor}: '{nxt.neighbor}' unvisited, go deeper",
                current=vertex, visited=self.visit_order,
                frontier=[v for v, _ in stack],
                active_edges=[edge],
                pseudocode_line=4,
            )
            self.tree_edges.append(edge)
            yield visit(nxt.neighbor, edge)
            stack.append((nxt.neighbor, iter(self.graph.neighbours(nxt.neighbor))))


def traverse_dfs(graph: Graph, start: Optional[str] = None) -> TraversalResult:
    return DepthFirstSearch(graph, start).traverse()
