"""
bfs.py — Breadth-First Search
==============================
Generator-based BFS with a FIFO frontier.

Yields a Step at:
  1. Start            →  source placed in the queue
  2. Dequeue          →  vertex VISITED, cumulative visited list
  3. Enqueue          →  edge toward the newly discovered neighbour ACTIVE
  4. Complete         →  no edge active

A vertex is discovered (and enqueued) once, so it is visited exactly
once.  Vertices outside the start vertex's component are listed in the
final step's overlay under "unreached".
"""

from collections import deque
from typing import Iterator, List, Optional

from algorithms.base import TraversalEngine, TraversalResult
from algorithms.step import Step, StepType
from structures.graph import Graph


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source):",                  # 0
    "    queue ← [source]",                     # 1
    "    discovered ← {source}",                # 2
    "    while queue is not empty:",             # 3
    "        node ← queue.dequeue()",           # 4
    "        visit(node)",                      # 5
    "        for neighbour in adj(node):",      # 6
    "            if neighbour not discovered:",  # 7
    "                discovered.add(neighbour)", # 8
    "                queue.enqueue(neighbour)", # 9
]


class BreadthFirstSearch(TraversalEngine):
    LABEL = "BFS"

    def _walk(self) -> Iterator[Step]:
        sb = self._sb
        queue = deque([self.start])
        discovered = {self.start}

        while queue:
            vertex = queue.popleft()
            self.visit_order.append(vertex)
            yield sb.build(
                StepType.VISIT,
                f"Dequeue '{vertex}' and visit it. BFS always expands the earliest discovered vertex (FIFO).",
                current=vertex, visited=self.visit_order, frontier=queue,
                pseudocode_line=5,
            )

            for adj in self.graph.neighbours(vertex):
                if adj.neighbor in discovered:
                    continue
                discovered.add(adj.neighbor)
                queue.append(adj.neighbor)
                edge = (vertex, adj.neighbor)
                self.tree_edges.append(edge)
                yield sb.build(
                    StepType.EXPLORE_EDGE,
                    f"Edge {vertex}→{adj.neighbor}: '{adj.neighbor}' is new, enqueue it",
                    current=vertex, visited=self.visit_order, frontier=queue,
                    active_edges=[edge],
                    pseudocode_line=9,
                )


def traverse_bfs(graph: Graph, start: Optional[str] = None) -> TraversalResult:
    return BreadthFirstSearch(graph, start).traverse()
