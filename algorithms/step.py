"""
step.py — Algorithm Step Snapshot
==================================
Every engine is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything a player needs
to render one frame:

    • What kind of event happened                (type)
    • The full array / list contents right now   (array)
    • Which positions are involved               (indices)
    • Vertex or node being processed             (current)
    • Visited set, frontier, active edges        (graph engines)
    • The full distance table                    (Dijkstra)
    • A nested tree snapshot                     (BST operations)
    • Which line of pseudocode is executing
    • A plain-English message

Design decisions:
  - Step is a frozen dataclass and a SNAPSHOT, never a diff.  The
    player only ever needs the current step to draw a frame.
  - Sequences are stored as tuples and mappings are copied when the
    step is built, so later mutation of the engine's working copies
    can't leak into already-emitted steps.
  - `overlay` is a free-form dict for type-specific extras
    (key, pivot, left/mid/right boundaries, sub-arrays, …).
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from structures.errors import InvariantViolationError


class StepType(Enum):
    # protocol
    START              = "start"
    COMPLETE           = "complete"
    # insertion sort
    SELECT_KEY         = "select_key"
    COMPARE            = "compare"
    SHIFT              = "shift"
    INSERT             = "insert"
    ITERATION_COMPLETE = "iteration_complete"
    # merge sort
    DIVIDE             = "divide"
    MERGE_START        = "merge_start"
    COPY               = "copy"
    MERGE_COMPLETE     = "merge_complete"
    # quick sort
    SUBARRAY           = "subarray"
    PIVOT_SELECT       = "pivot_select"
    SWAP               = "swap"
    PIVOT_PLACE        = "pivot_place"
    # graphs
    VISIT              = "visit"
    EXPLORE_EDGE       = "explore_edge"
    RELAX              = "relax"
    PATH_FOUND         = "path_found"
    NO_PATH            = "no_path"
    # linked list / tree
    FOUND              = "found"
    NOT_FOUND          = "not_found"
    DELETE             = "delete"
    SUCCESSOR          = "successor"
    RELINK             = "relink"


Edge = Tuple[str, str]


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        type            : StepType tag.
        message         : Human-readable description of the event.
        array           : Snapshot of the array / list contents, or the
                          sequence accumulated so far (traversal result,
                          search path).
        indices         : Positions involved (compared / swapped / shifted).
        current         : Vertex id or node value being processed.
        visited         : Vertices visited / settled so far, in order.
        frontier        : Queue (BFS), recursion path (DFS) contents.
        active_edges    : Edges highlighted in this frame as (u, v).
        distances       : {vertex: distance}, math.inf for unreached.
        path            : Reconstructed path (Dijkstra terminal steps).
        tree            : Nested {value, left, right} snapshot of a BST.
        overlay         : Type-specific extras.
        pseudocode_line : 0-based index into the engine's PSEUDOCODE.
        is_final        : True on the very last step only.
    """

    step_number:      int                       = 0
    type:             StepType                  = StepType.START
    message:          str                       = ""
    array:            Tuple[Any, ...]           = ()
    indices:          Tuple[int, ...]           = ()
    current:          Optional[Any]             = None
    visited:          Tuple[Any, ...]           = ()
    frontier:         Tuple[str, ...]           = ()
    active_edges:     Tuple[Edge, ...]          = ()
    distances:        Dict[str, float]          = field(default_factory=dict)
    path:             Tuple[str, ...]           = ()
    tree:             Optional[Dict[str, Any]]  = None
    overlay:          Dict[str, Any]            = field(default_factory=dict)
    pseudocode_line:  int                       = 0
    is_final:         bool                      = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form: enum → tag string, infinite distance → None."""
        return {
            "step_number":     self.step_number,
            "type":            self.type.value,
            "message":         self.message,
            "array":           list(self.array),
            "indices":         list(self.indices),
            "current":         self.current,
            "visited":         list(self.visited),
            "frontier":        list(self.frontier),
            "active_edges":    [list(e) for e in self.active_edges],
            "distances":       {k: json_distance(v) for k, v in self.distances.items()},
            "path":            list(self.path),
            "tree":            self.tree,
            "overlay":         _json_safe(self.overlay),
            "pseudocode_line": self.pseudocode_line,
            "is_final":        self.is_final,
        }


# ---------------------------------------------------------------------------
# Convenience builder so engines don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Numbers steps and freezes the engine's working copies into them.

    Usage inside an engine generator:
        sb = StepBuilder()
        yield sb.build(StepType.COMPARE, "Comparing 3 with key 1",
                       array=arr, indices=(j, i), pseudocode_line=4)
    """

    def __init__(self):
        self.step_number: int  = 0
        self.finished:    bool = False

    def build(self, step_type: StepType, message: str, **fields: Any) -> Step:
        if self.finished:
            raise InvariantViolationError("Step log already terminated; no step may follow 'complete'")
        fields = _freeze(fields)
        is_final = step_type is StepType.COMPLETE
        step = Step(step_number=self.step_number, type=step_type, message=message, is_final=is_final, **fields)
        self.step_number += 1
        self.finished = is_final
        return step


def _freeze(fields: Dict[str, Any]) -> Dict[str, Any]:
    for key in ("array", "indices", "visited", "frontier", "path"):
        if key in fields:
            fields[key] = tuple(fields[key])
    if "active_edges" in fields:
        fields["active_edges"] = tuple(tuple(e) for e in fields["active_edges"])
    for key in ("distances", "overlay"):
        if key in fields:
            fields[key] = dict(fields[key])
    return fields


def json_distance(value: float) -> Optional[float]:
    return None if value == math.inf else value


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and math.isinf(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value
