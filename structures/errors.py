"""
errors.py — Failure Taxonomy
=============================
Every failure the core can report, in one place.

    InvalidInputError        – caller handed us something we refuse to run on.
                               Raised BEFORE any state is touched.
    InvariantViolationError  – a structure reached an impossible shape
                               (asymmetric adjacency, non-positive weight).
    EngineReuseError         – a single-use engine was run twice.

Degenerate input (empty array, unreachable target, …) is NOT an error;
engines handle it with a short step log.
"""


class VisualizerError(Exception):
    """Base class for every error raised by the structures / algorithms."""


# ---------------------------------------------------------------------------
# Invalid input
# ---------------------------------------------------------------------------
class InvalidInputError(VisualizerError, ValueError):
    pass


class VertexNotFoundError(InvalidInputError):
    def __init__(self, vertex: str):
        super().__init__(f"Vertex '{vertex}' does not exist")
        self.vertex = vertex


class DuplicateVertexError(InvalidInputError):
    def __init__(self, vertex: str):
        super().__init__(f"Vertex '{vertex}' already exists")
        self.vertex = vertex


class SelfLoopError(InvalidInputError):
    def __init__(self, vertex: str):
        super().__init__(f"Cannot create self-loop edge on '{vertex}'")
        self.vertex = vertex


class DuplicateEdgeError(InvalidInputError):
    def __init__(self, a: str, b: str):
        super().__init__(f"Edge {a}-{b} already exists")
        self.edge = (a, b)


class InvalidWeightError(InvalidInputError):
    def __init__(self, weight):
        super().__init__(f"Weight must be a positive integer, got {weight!r}")
        self.weight = weight


class DuplicateValueError(InvalidInputError):
    def __init__(self, value):
        super().__init__(f"Value {value!r} already exists in the tree")
        self.value = value


class InvalidPositionError(InvalidInputError):
    def __init__(self, position, size: int):
        super().__init__(f"Position {position!r} is out of range for size {size}")
        self.position = position
        self.size = size


class UnknownOperationError(InvalidInputError):
    def __init__(self, operation: str, known):
        super().__init__(f"Unknown operation '{operation}'. Expected one of: {', '.join(known)}")
        self.operation = operation


# ---------------------------------------------------------------------------
# Programming errors
# ---------------------------------------------------------------------------
class InvariantViolationError(VisualizerError, RuntimeError):
    pass


class EngineReuseError(VisualizerError, RuntimeError):
    def __init__(self, engine_name: str):
        super().__init__(f"{engine_name} is single-use; construct a new engine for every run")
