"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Array-scan Dijkstra (no heap): every round scans all unvisited
vertices for the smallest finite tentative distance.  Ties go to the
vertex inserted first, so runs are reproducible.

Yields a Step at:
  1. Initialise            →  dist[source] = 0, everything else ∞
  2. Settle a vertex       →  VISIT, distance now final
  3. Each improving relaxation  →  RELAX, edge active, new distance table
  4. Path found / no path  →  reconstructed path + path edges
  5. Complete

The main loop ends when the unvisited set is empty or holds only
unreachable (∞) vertices.  The target does not stop the search early,
so the final distance table covers the whole component.

Input validation happens in the constructor: unknown source / target
raise VertexNotFoundError; asymmetric adjacency or a non-positive
weight raise InvariantViolationError.  Nothing is emitted for bad input.
"""

import math
from typing import Dict, Iterator, List, Optional, Tuple

from algorithms.base import DijkstraResult, Engine
from algorithms.step import Step, StepType
from structures.errors import VertexNotFoundError
from structures.graph import Graph


INF = math.inf


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target):",            # 0
    "    dist ← {v: ∞ for v in V}; dist[source] ← 0",  # 1
    "    unvisited ← V",                               # 2
    "    while unvisited is not empty:",               # 3
    "        u ← argmin dist over unvisited",          # 4
    "        if dist[u] = ∞: break",                   # 5
    "        unvisited.remove(u)",                     # 6
    "        for (v, w) in adj(u), v unvisited:",      # 7
    "            if dist[u] + w < dist[v]:",           # 8
    "                dist[v] ← dist[u] + w; prev[v] ← u",  # 9
    "    walk prev[] back from target",                # 10
]


class Dijkstra(Engine):

    def __init__(self, graph: Graph, source: str, target: str):
        super().__init__()
        for vertex in (source, target):
            if vertex not in graph:
                raise VertexNotFoundError(vertex)
        graph.check_invariants()

        self.graph  = graph
        self.source = source
        self.target = target

        self.distances: Dict[str, float]         = {v: INF for v in graph.vertices()}
        self.previous:  Dict[str, Optional[str]] = {v: None for v in graph.vertices()}
        self.distances[source] = 0
        self.visited:   List[str] = []
        self.relaxations: int = 0
        self.path: List[str] = []
        self.path_edges: List[Tuple[str, str]] = []

    def run(self) -> DijkstraResult:
        steps = self._record()
        return DijkstraResult(
            steps=steps,
            distances=dict(self.distances),
            previous=dict(self.previous),
            shortest_path_edges=list(self.path_edges),
            path_sequence=list(self.path),
            total_distance=self.distances[self.target] if self.path else INF,
            relaxations=self.relaxations,
        )

    # ------------------------------------------------------------------
    def _trace(self) -> Iterator[Step]:
        sb   = self._sb
        dist = self.distances

        yield sb.build(
            StepType.START,
            f"Initialise: all distances = ∞ except source '{self.source}' = 0.",
            current=self.source, distances=dist,
            overlay={"source": self.source, "target": self.target},
            pseudocode_line=1,
        )

        unvisited = list(self.graph.vertices())
        while unvisited:
            current = self._closest(unvisited)
            if current is None:
                break
            unvisited.remove(current)
            self.visited.append(current)

            yield sb.build(
                StepType.VISIT,
                f"Visit '{current}' with distance {dist[current]}. This distance is now final.",
                current=current, visited=self.visited, distances=dist,
                pseudocode_line=6,
            )

            for adj in self.graph.neighbours(current):
                nbr = adj.neighbor
                if nbr not in unvisited:
                    continue
                candidate = dist[current] + adj.weight
                if candidate < dist[nbr]:
                    old = dist[nbr]
                    dist[nbr] = candidate
                    self.previous[nbr] = current
                    self.relaxations += 1
                    yield sb.build(
                        StepType.RELAX,
                        f"Relax {current}→{nbr}: {dist[current]} + {adj.weight} = {candidate} < {_fmt(old)}",
                        current=current, visited=self.visited, distances=dist,
                        active_edges=[(current, nbr)],
                        overlay={"vertex": nbr, "old": old, "new": candidate, "weight": adj.weight},
                        pseudocode_line=9,
                    )

        yield self._path_step()
        yield sb.build(
            StepType.COMPLETE,
            f"Dijkstra complete: {len(self.visited)} vertex(es) settled, {self.relaxations} relaxation(s).",
            visited=self.visited, distances=dist, path=self.path,
            pseudocode_line=10,
        )

    def _closest(self, unvisited: List[str]) -> Optional[str]:
        best, best_dist = None, INF
        for vertex in unvisited:
            if self.distances[vertex] < best_dist:
                best, best_dist = vertex, self.distances[vertex]
        return best

    def _path_step(self) -> Step:
        self.path, self.path_edges = reconstruct_path(self.previous, self.source, self.target)

        if not self.path:
            return self._sb.build(
                StepType.NO_PATH,
                f"No path exists from {self.source} to {self.target}",
                visited=self.visited, distances=self.distances,
                pseudocode_line=10,
            )
        return self._sb.build(
            StepType.PATH_FOUND,
            f"Shortest path {' → '.join(self.path)} with total distance {self.distances[self.target]}",
            visited=self.visited, distances=self.distances, path=self.path,
            active_edges=self.path_edges,
            overlay={"total_distance": self.distances[self.target]},
            pseudocode_line=10,
        )


# ---------------------------------------------------------------------------
def reconstruct_path(previous: Dict[str, Optional[str]], source: str, target: str):
    """
    Walk `previous` back from target.  Returns (path, edges); both empty
    when the chain never reaches `source`.
    """
    path, cur = [target], target
    while cur != source:
        cur = previous.get(cur)
        if cur is None or cur in path:
            return [], []
        path.append(cur)
    path.reverse()
    return path, list(zip(path, path[1:]))


def _fmt(value: float) -> str:
    return "∞" if value == INF else str(value)


def run_dijkstra(graph: Graph, source: str, target: str) -> DijkstraResult:
    return Dijkstra(graph, source, target).run()
