"""
graph.py — Undirected Weighted Graph
=====================================
Single source of truth for the graph.  Traversal and shortest-path
engines only ever READ this object.

Responsibilities:
  1. Construction                           (add_vertex / add_edge)
  2. Adjacency queries                      (neighbours, weight, edges)
  3. Factory methods                        (sample graphs, seeded random)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)
  6. Invariant check                        (symmetry, positive weights)

Design decisions:
  - Vertices live in a plain dict `_adj[vertex] → [Adjacency, …]`.
    Dict insertion order is the vertex order every engine iterates in,
    so tie-breaking is deterministic.
  - Every edge is stored twice (u→v and v→u) with the same weight.
  - Vertex ids are plain strings.  Upper-casing happens at the boundary
    (`normalize_vertex_id`), never inside an algorithm.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from structures.errors import (
    DuplicateEdgeError,
    DuplicateVertexError,
    InvalidInputError,
    InvalidWeightError,
    InvariantViolationError,
    SelfLoopError,
    VertexNotFoundError,
)


logger = logging.getLogger(__name__)

VERTEX_LETTERS = "ABCDEFGHIJ"


@dataclass(frozen=True)
class Adjacency:
    neighbor: str
    weight:   int = 1


def normalize_vertex_id(vertex) -> str:
    """Strip + upper-case a caller-supplied vertex id."""
    vid = str(vertex).strip().upper() if vertex is not None else ""
    if not vid:
        raise InvalidInputError("Please enter a valid vertex id")
    return vid


def _check_weight(weight) -> int:
    if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
        raise InvalidWeightError(weight)
    return weight


class Graph:
    """
    Attributes:
        _adj : {vertex_id: [Adjacency(neighbor, weight), …]} in insertion order
    """

    def __init__(self):
        self._adj: Dict[str, List[Adjacency]] = {}

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def add_vertex(self, vertex: str) -> str:
        if vertex in self._adj:
            raise DuplicateVertexError(vertex)
        self._adj[vertex] = []
        return vertex

    def add_edge(self, a: str, b: str, weight: int = 1) -> None:
        """
        Insert a↔b with `weight`.  Missing endpoints are created on the fly.
        Everything is validated before the graph is touched.
        """
        _check_weight(weight)
        if a == b:
            raise SelfLoopError(a)
        if self.has_edge(a, b):
            raise DuplicateEdgeError(a, b)

        for v in (a, b):
            if v not in self._adj:
                self._adj[v] = []
        self._adj[a].append(Adjacency(b, weight))
        self._adj[b].append(Adjacency(a, weight))

    # ==================================================================
    # QUERIES
    # ==================================================================
    def has_vertex(self, vertex: str) -> bool:
        return vertex in self._adj

    def __contains__(self, vertex) -> bool:
        return vertex in self._adj

    def vertices(self) -> List[str]:
        return list(self._adj.keys())

    def neighbours(self, vertex: str) -> List[Adjacency]:
        """Adjacency entries of `vertex` in stored order."""
        if vertex not in self._adj:
            raise VertexNotFoundError(vertex)
        return list(self._adj[vertex])

    def has_edge(self, a: str, b: str) -> bool:
        return any(adj.neighbor == b for adj in self._adj.get(a, []))

    def weight(self, a: str, b: str) -> Optional[int]:
        for adj in self._adj.get(a, []):
            if adj.neighbor == b:
                return adj.weight
        return None

    def edges(self) -> List[Tuple[str, str, int]]:
        """Each undirected edge once, as (u, v, w), in insertion order."""
        seen = set()
        result = []
        for u, adjs in self._adj.items():
            for adj in adjs:
                key = frozenset((u, adj.neighbor))
                if key in seen:
                    continue
                seen.add(key)
                result.append((u, adj.neighbor, adj.weight))
        return result

    def adjacency_list(self) -> Dict[str, List[Dict[str, object]]]:
        return {v: [{"neighbor": a.neighbor, "weight": a.weight} for a in adjs] for v, adjs in self._adj.items()}

    def vertex_count(self) -> int:
        return len(self._adj)

    def edge_count(self) -> int:
        return sum(len(adjs) for adjs in self._adj.values()) // 2

    # ==================================================================
    # INVARIANTS
    # ==================================================================
    def check_invariants(self) -> None:
        """Raise InvariantViolationError if adjacency is asymmetric or a weight is not positive."""
        for u, adjs in self._adj.items():
            seen = set()
            for adj in adjs:
                if adj.neighbor == u:
                    raise InvariantViolationError(f"Self-loop on '{u}'")
                if adj.neighbor in seen:
                    raise InvariantViolationError(f"Duplicate edge {u}-{adj.neighbor}")
                seen.add(adj.neighbor)
                if adj.neighbor not in self._adj:
                    raise InvariantViolationError(f"Edge {u}-{adj.neighbor} points at an unknown vertex")
                if isinstance(adj.weight, bool) or not isinstance(adj.weight, int) or adj.weight <= 0:
                    raise InvariantViolationError(f"Edge {u}-{adj.neighbor} has non-positive weight {adj.weight!r}")
                if self.weight(adj.neighbor, u) != adj.weight:
                    raise InvariantViolationError(f"Adjacency asymmetry on edge {u}-{adj.neighbor}")

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "vertices": self.vertices(),
            "edges":    [{"from": u, "to": v, "weight": w} for u, v, w in self.edges()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for v in data.get("vertices", []):
            g.add_vertex(v)
        for ed in data.get("edges", []):
            g.add_edge(ed["from"], ed["to"], ed.get("weight", 1))
        return g

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple], vertices: Iterable[str] = ()) -> "Graph":
        """Build from (a, b) or (a, b, w) tuples.  `vertices` fixes order / adds isolated ones."""
        g = cls()
        for v in vertices:
            g.add_vertex(v)
        for edge in edges:
            g.add_edge(*edge)
        return g

    def copy(self) -> "Graph":
        g = Graph()
        g._adj = {v: list(adjs) for v, adjs in self._adj.items()}
        return g

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def sample_traversal_graph(cls) -> "Graph":
        """The unweighted five-vertex graph the traversal demo opens with."""
        return cls.from_edges(
            [("A", "B"), ("A", "D"), ("B", "C"), ("B", "E"), ("C", "E"), ("D", "E")],
            vertices="ABCDE",
        )

    @classmethod
    def sample_weighted_graph(cls) -> "Graph":
        """The weighted five-vertex graph the Dijkstra demo opens with."""
        return cls.from_edges(
            [
                ("A", "B", 4), ("A", "D", 2), ("B", "C", 3), ("B", "D", 1),
                ("B", "E", 7), ("C", "E", 2), ("D", "E", 5),
            ],
            vertices="ABCDE",
        )

    @classmethod
    def generate_random(
        cls,
        num_vertices: Optional[int] = None,
        weighted: bool = True,
        weight_range: Tuple[int, int] = (1, 9),
        seed: Optional[int] = None,
    ) -> "Graph":
        """
        Random connected graph on lettered vertices.
        A random spanning tree guarantees connectivity, then 2-5 extra
        edges are attempted (duplicates / self-loops are skipped).
        Same seed → same graph.
        """
        rng = random.Random(seed)
        n = num_vertices if num_vertices is not None else 5 + rng.randrange(4)
        if not 1 <= n <= len(VERTEX_LETTERS):
            raise InvalidInputError(f"num_vertices must be between 1 and {len(VERTEX_LETTERS)}")

        def pick_weight() -> int:
            return rng.randint(*weight_range) if weighted else 1

        g = cls()
        ids = list(VERTEX_LETTERS[:n])
        for vid in ids:
            g.add_vertex(vid)

        # spanning-tree backbone
        for i in range(1, n):
            g.add_edge(ids[rng.randrange(i)], ids[i], pick_weight())

        extra = rng.randrange(4) + 2
        for _ in range(extra):
            a, b = rng.choice(ids), rng.choice(ids)
            if a != b and not g.has_edge(a, b):
                g.add_edge(a, b, pick_weight())

        logger.debug("Generated random graph seed=%s: %d vertices, %d edges", seed, g.vertex_count(), g.edge_count())
        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(cls, text: str, weighted: bool = True) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one vertex per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A-B weight 3, A-C weight 7
            a -> b, c           → arrow syntax, ids are upper-cased

        An edge listed from both ends is added once; if both ends give
        different weights the line read first wins.
        """
        g = cls()
        for lineno, raw in enumerate(text.strip().splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                src_raw, rest = line.split(":", 1)
            elif "→" in line:
                src_raw, rest = line.split("→", 1)
            elif "->" in line:
                src_raw, rest = line.split("->", 1)
            else:
                raise InvalidInputError(f"Line {lineno}: expected 'A: B C' got {line!r}")

            src = normalize_vertex_id(src_raw)
            if src not in g:
                g.add_vertex(src)

            for token in rest.replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt_raw, w_str = token[:-1].split("(", 1)
                    try:
                        w = int(w_str)
                    except ValueError:
                        raise InvalidWeightError(w_str) from None
                else:
                    tgt_raw, w = token, 1
                tgt = normalize_vertex_id(tgt_raw)
                if not weighted:
                    w = 1
                if g.has_edge(src, tgt):
                    continue
                g.add_edge(src, tgt, w)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def __repr__(self) -> str:
        return f"Graph(vertices={self.vertex_count()}, edges={self.edge_count()})"
