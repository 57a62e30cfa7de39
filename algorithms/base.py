"""
base.py — Engine Base & Capability Protocols
=============================================
Every engine is single-use:

    engine = MergeSort([5, 2, 9])
    result = engine.sort()        # runs the generator to completion
    engine.sort()                 # → EngineReuseError

Subclasses implement `_trace()`, a generator yielding Steps built with
`self._sb`.  `_record()` drains it eagerly and checks the protocol:
contiguous numbering, exactly one terminal `complete` step at the end.

Category protocols let a dispatcher call the right operation without
looking methods up by name at runtime.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple, runtime_checkable

from structures.errors import EngineReuseError, InvariantViolationError, VertexNotFoundError
from structures.graph import Graph
from algorithms.step import Step, StepBuilder, StepType


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SortResult:
    steps:        Tuple[Step, ...]
    comparisons:  int
    swaps:        int
    sorted_array: List[Any]


@dataclass(frozen=True)
class TraversalResult:
    steps:       Tuple[Step, ...]
    visit_order: List[str]
    tree_edges:  List[Tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class DijkstraResult:
    steps:               Tuple[Step, ...]
    distances:           Dict[str, float]
    previous:            Dict[str, Optional[str]]
    shortest_path_edges: List[Tuple[str, str]]
    path_sequence:       List[str]
    total_distance:      float
    relaxations:         int = 0

    @property
    def path_found(self) -> bool:
        return self.total_distance != math.inf


@dataclass(frozen=True)
class OperationResult:
    steps:  Tuple[Step, ...]
    result: Any = None


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------
@runtime_checkable
class Sortable(Protocol):
    def sort(self) -> SortResult: ...


@runtime_checkable
class Traversable(Protocol):
    def traverse(self) -> TraversalResult: ...


@runtime_checkable
class ShortestPathRunnable(Protocol):
    def run(self) -> DijkstraResult: ...


@runtime_checkable
class StructureOperable(Protocol):
    def apply(self) -> OperationResult: ...


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class Engine:
    """Single-use step-log producer."""

    def __init__(self):
        self._sb = StepBuilder()
        self._used = False

    def _trace(self) -> Iterator[Step]:
        raise NotImplementedError

    def _record(self) -> Tuple[Step, ...]:
        if self._used:
            raise EngineReuseError(type(self).__name__)
        self._used = True

        steps = tuple(self._trace())

        if not steps or steps[-1].type is not StepType.COMPLETE:
            raise InvariantViolationError(f"{type(self).__name__} did not terminate its step log")
        for idx, step in enumerate(steps):
            if step.step_number != idx:
                raise InvariantViolationError(f"{type(self).__name__}: step {idx} is numbered {step.step_number}")

        logger.debug("%s produced %d steps", type(self).__name__, len(steps))
        return steps


class SortEngine(Engine):
    """
    Shared skeleton for the array sorts:  start → algorithm steps → complete.
    Works on a private copy of the input; the caller's sequence is never touched.
    """

    LABEL = "Sort"
    START_LINE = 0
    END_LINE = 0

    def __init__(self, values):
        super().__init__()
        self.array: List[Any] = list(values)
        self.comparisons: int = 0
        self.swaps:       int = 0

    def sort(self) -> SortResult:
        steps = self._record()
        return SortResult(
            steps=steps,
            comparisons=self.comparisons,
            swaps=self.swaps,
            sorted_array=list(self.array),
        )

    def _trace(self) -> Iterator[Step]:
        yield self._sb.build(
            StepType.START, self._start_message(),
            array=self.array, pseudocode_line=self.START_LINE,
        )
        if len(self.array) > 1:
            yield from self._sort_steps()
        yield self._sb.build(
            StepType.COMPLETE,
            f"{self.LABEL} completed! {self.comparisons} comparisons, {self.swaps} swaps.",
            array=self.array,
            overlay={"comparisons": self.comparisons, "swaps": self.swaps},
            pseudocode_line=self.END_LINE,
        )

    def _start_message(self) -> str:
        return f"Starting {self.LABEL} on {len(self.array)} element(s)"

    def _sort_steps(self) -> Iterator[Step]:
        raise NotImplementedError


class TraversalEngine(Engine):
    """
    Shared setup for DFS / BFS.  Only the component reachable from `start`
    is explored; with no start given, the first inserted vertex is used.
    """

    LABEL = "Traversal"

    def __init__(self, graph: Graph, start: Optional[str] = None):
        super().__init__()
        if start is not None and start not in graph:
            raise VertexNotFoundError(start)
        vertices = graph.vertices()
        self.graph = graph
        self.start: Optional[str] = start if start is not None else (vertices[0] if vertices else None)
        self.visit_order: List[str] = []
        self.tree_edges:  List[Tuple[str, str]] = []

    def traverse(self) -> TraversalResult:
        steps = self._record()
        return TraversalResult(
            steps=steps,
            visit_order=list(self.visit_order),
            tree_edges=list(self.tree_edges),
        )

    def _trace(self) -> Iterator[Step]:
        if self.start is None:
            yield self._sb.build(StepType.START, f"{self.LABEL}: graph is empty, nothing to traverse")
        else:
            yield self._sb.build(
                StepType.START, f"Starting {self.LABEL} from '{self.start}'",
                current=self.start, frontier=(self.start,),
            )
            yield from self._walk()

        unreached = [v for v in self.graph.vertices() if v not in self.visit_order]
        yield self._sb.build(
            StepType.COMPLETE,
            f"{self.LABEL}: {' → '.join(self.visit_order)}" if self.visit_order else f"{self.LABEL}: nothing visited",
            visited=self.visit_order,
            overlay={"unreached": unreached},
        )

    def _walk(self) -> Iterator[Step]:
        raise NotImplementedError
