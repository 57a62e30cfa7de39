"""
recorder.py — Run Recorder & Analytics
========================================
Runs any registered engine by key, keeps its step log, and computes the
metrics shown in the analysis panel and in Comparison Mode.

Usage:
    rec = Recorder()
    rec.start("dijkstra", graph=g, source="A", target="E")
    metrics = rec.run_to_completion()   # RunMetrics
    rec.stepper.next_step()             # replay the log
    rec.export()                        # JSON-safe snapshot

Comparison Mode:
    Two Recorders are run on the SAME input, then compare(rec1, rec2)
    → ComparisonResult.
"""

import logging
import math
import time
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from algorithms import REGISTRY, AlgoInfo, Category, get_algorithm
from algorithms.step import Step, json_distance
from engine.stepper import Stepper
from structures.errors import UnknownOperationError


logger = logging.getLogger(__name__)


# Category → the capability call that produces a result
_RUNNERS: Dict[Category, Callable[[Any], Any]] = {
    Category.SORTING:       lambda engine: engine.sort(),
    Category.TRAVERSAL:     lambda engine: engine.traverse(),
    Category.SHORTEST_PATH: lambda engine: engine.run(),
    Category.STRUCTURE:     lambda engine: engine.apply(),
}


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analysis panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    category:      str   = ""
    total_steps:   int   = 0            # number of Steps in the log
    comparisons:   int   = 0            # sorts only
    swaps:         int   = 0            # sorts only
    nodes_visited: int   = 0            # traversals / Dijkstra
    relaxations:   int   = 0            # Dijkstra only
    path_length:   int   = 0            # number of edges on the final path
    path_cost:     float = math.inf     # total weight of the final path
    path_found:    bool  = False
    wall_time_ms:  float = 0.0          # wall-clock time to run to completion
    step_counts:   Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["path_cost"] = json_distance(self.path_cost)
        return data


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived: label of the run with the lower value, or "tie"
    winner_steps:       str = ""
    winner_comparisons: str = ""
    winner_swaps:       str = ""
    winner_nodes:       str = ""
    winner_path:        str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left":               self.left.to_dict(),
            "right":              self.right.to_dict(),
            "winner_steps":       self.winner_steps,
            "winner_comparisons": self.winner_comparisons,
            "winner_swaps":       self.winner_swaps,
            "winner_nodes":       self.winner_nodes,
            "winner_path":        self.winner_path,
        }


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full step log of the run.
        result  : The engine's result object (SortResult, TraversalResult, …).
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : A Stepper loaded with the log, for replay.
    """

    def __init__(self):
        self.steps:   Tuple[Step, ...]     = ()
        self.result:  Any                  = None
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._algo_info: Optional[AlgoInfo] = None
        self._engine:    Any                = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, **inputs: Any) -> None:
        """
        Build the engine for this run.  Only the inputs the engine accepts
        are passed on; input validation errors surface here, before any
        step is produced.
        """
        info = get_algorithm(algo_key)
        if info is None:
            raise UnknownOperationError(algo_key, list(REGISTRY))

        kwargs = {name: inputs[name] for name in info.inputs if name in inputs}
        self._engine    = info.engine(**kwargs)
        self._algo_info = info
        self.steps      = ()
        self.result     = None
        self.metrics    = None
        self.stepper    = None

    def run_to_completion(self) -> RunMetrics:
        """Run the engine, keep every step, compute metrics."""
        if self._engine is None or self._algo_info is None:
            raise RuntimeError("Call start() first.")

        started = time.perf_counter()
        self.result = _RUNNERS[self._algo_info.category](self._engine)
        wall_ms = (time.perf_counter() - started) * 1000

        self.steps = tuple(self.result.steps)
        self.metrics = self._compute_metrics(wall_ms)
        self.stepper = Stepper()
        self.stepper.load(self.steps)

        logger.info(
            "Recorded %s: %d steps in %.2f ms",
            self._algo_info.key, len(self.steps), wall_ms,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def algo_info(self) -> Optional[AlgoInfo]:
        return self._algo_info

    # ------------------------------------------------------------------
    # Export (JSON-safe snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "metrics":  self.metrics.to_dict() if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info   = self._algo_info
        result = self.result
        metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            category=info.category.value,
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 3),
            step_counts=dict(Counter(s.type.value for s in self.steps)),
        )

        if info.category is Category.SORTING:
            metrics.comparisons = result.comparisons
            metrics.swaps       = result.swaps
        elif info.category is Category.TRAVERSAL:
            metrics.nodes_visited = len(result.visit_order)
        elif info.category is Category.SHORTEST_PATH:
            metrics.nodes_visited = len(self.steps[-1].visited)
            metrics.relaxations   = result.relaxations
            metrics.path_found    = result.path_found
            metrics.path_length   = len(result.shortest_path_edges)
            metrics.path_cost     = result.total_distance
        return metrics


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps=winner(l.total_steps, r.total_steps),
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps=winner(l.swaps, r.swaps),
        winner_nodes=winner(l.nodes_visited, r.nodes_visited),
        winner_path=winner(l.path_cost, r.path_cost),
    )
