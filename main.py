"""
main.py — Algorithm Visualizer Flask App
==========================================
JSON API over the step-log engines.  A browser front end renders the
steps; everything here is data.

Routes:
  GET  /api/algorithms           – registry listing (metadata + pseudocode)
  POST /api/sort/<key>           – run a sort on {"values": [...]}
  POST /api/graph/traverse       – DFS / BFS
  POST /api/dijkstra             – shortest path between two vertices
  POST /api/graph/generate       – seeded random graph
  POST /api/graph/import         – graph from adjacency-list text
  POST /api/list/<operation>     – traced linked-list operation
  POST /api/tree/<operation>     – traced BST operation
  POST /api/run                  – record a run for step navigation
  POST /api/step/next            – advance one step
  POST /api/step/prev            – rewind one step
  POST /api/step/goto            – jump to step N
  GET  /api/state                – current step of the recorded run
  POST /api/compare              – two algorithms on the same input

State management:
  The Flask session holds INPUTS only (algorithm key, input payload,
  cursor index, last generated graph).  Engines are deterministic, so
  navigation re-runs the recorded algorithm and moves the cursor over
  the fresh log instead of storing steps in the cookie.

  Vertex ids are upper-cased here, at the boundary.
"""

import logging
import math
import sys
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request, session

from algorithms import Category, get_algorithm, list_algorithms, REGISTRY
from algorithms.step import json_distance
from config import VisualizerConfig
from engine import Recorder, Stepper, compare
from structures import BinarySearchTree, Graph, LinkedList, normalize_vertex_id
from structures.errors import InvalidInputError, UnknownOperationError, VisualizerError


logger = logging.getLogger(__name__)

config = VisualizerConfig.from_env()


def _configure_logging(level: str) -> None:
    """Configure application logging and capture uncaught exceptions."""

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    def _log_excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).exception(
            "Uncaught exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _log_excepthook


app = Flask(__name__)
app.secret_key = config.secret_key


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidInputError)
def handle_invalid_input(exc: InvalidInputError):
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(VisualizerError)
def handle_visualizer_error(exc: VisualizerError):
    logger.error("Request to %s failed: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 500


# ---------------------------------------------------------------------------
# Request parsing helpers
# ---------------------------------------------------------------------------
def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return data


def _number_list(data: Dict[str, Any], key: str, limit: int, default: List[Any]) -> List[Any]:
    values = data.get(key, default)
    if not isinstance(values, list):
        raise InvalidInputError(f"'{key}' must be a list of numbers")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise InvalidInputError(f"'{key}' must contain numbers only, got {v!r}")
        if isinstance(v, float) and not math.isfinite(v):
            raise InvalidInputError(f"'{key}' must contain finite numbers, got {v!r}")
    if len(values) > limit:
        raise InvalidInputError(f"'{key}' may hold at most {limit} values, got {len(values)}")
    return list(values)


def _optional_number(data: Dict[str, Any], key: str) -> Optional[Any]:
    value = data.get(key)
    if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
        raise InvalidInputError(f"'{key}' must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidInputError(f"'{key}' must be a finite number, got {value!r}")
    return value


def _optional_vertex(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return normalize_vertex_id(value) if value is not None else None


def _required_vertex(data: Dict[str, Any], key: str) -> str:
    if data.get(key) is None:
        raise InvalidInputError(f"'{key}' is required")
    return normalize_vertex_id(data[key])


def _graph_from_payload(raw: Any) -> Graph:
    """Validate a {"vertices": [...], "edges": [{"from", "to", "weight"}]} payload."""
    if not isinstance(raw, dict):
        raise InvalidInputError("'graph' must be an object with 'vertices' and 'edges'")
    vertices = raw.get("vertices", [])
    edges    = raw.get("edges", [])
    if not isinstance(vertices, list) or not isinstance(edges, list):
        raise InvalidInputError("'vertices' and 'edges' must be lists")

    normalized = {"vertices": [normalize_vertex_id(v) for v in vertices], "edges": []}
    for edge in edges:
        if not isinstance(edge, dict) or "from" not in edge or "to" not in edge:
            raise InvalidInputError(f"Edge must look like {{'from': 'A', 'to': 'B'}}, got {edge!r}")
        normalized["edges"].append({
            "from":   normalize_vertex_id(edge["from"]),
            "to":     normalize_vertex_id(edge["to"]),
            "weight": edge.get("weight", 1),
        })

    graph = Graph.from_dict(normalized)
    _check_graph_size(graph)
    return graph


def _check_graph_size(graph: Graph) -> None:
    if graph.vertex_count() > config.max_vertices:
        raise InvalidInputError(f"Graph may hold at most {config.max_vertices} vertices, got {graph.vertex_count()}")


def _graph_for(data: Dict[str, Any], weighted: bool) -> Graph:
    """Request graph → last generated/imported graph → the matching sample graph."""
    if "graph" in data:
        return _graph_from_payload(data["graph"])
    if "graph" in session:
        return Graph.from_dict(session["graph"])
    return Graph.sample_weighted_graph() if weighted else Graph.sample_traversal_graph()


def _save_graph(graph: Graph) -> None:
    session["graph"] = graph.to_dict()


# ---------------------------------------------------------------------------
# Run inputs: JSON form kept in the session ↔ engine kwargs
# ---------------------------------------------------------------------------
def _run_inputs(key: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a request payload into the JSON-safe inputs of one run."""
    info = get_algorithm(key) if isinstance(key, str) else None
    if info is None:
        raise UnknownOperationError(key, list(REGISTRY))

    if info.category is Category.SORTING:
        return {"values": _number_list(data, "values", config.max_array_length, config.default_array)}

    if info.category is Category.TRAVERSAL:
        return {"graph": _graph_for(data, weighted=False).to_dict(), "start": _optional_vertex(data, "start")}

    if info.category is Category.SHORTEST_PATH:
        return {
            "graph":  _graph_for(data, weighted=True).to_dict(),
            "source": _required_vertex(data, "source"),
            "target": _required_vertex(data, "target"),
        }

    # structures
    if key == "linked_list":
        return {
            "values":    _number_list(data, "values", config.max_list_length, config.default_list),
            "operation": data.get("operation", "traverse"),
            "value":     _optional_number(data, "value"),
            "position":  data.get("position"),
        }
    return {
        "values":    _number_list(data, "values", config.max_tree_size, config.default_tree),
        "operation": data.get("operation", "inorder"),
        "value":     _optional_number(data, "value"),
    }


def _engine_kwargs(key: str, inputs: Dict[str, Any]) -> Dict[str, Any]:
    """Materialise fresh model objects from stored run inputs."""
    kwargs = dict(inputs)
    if "graph" in kwargs:
        kwargs["graph"] = Graph.from_dict(kwargs["graph"])
    if key == "linked_list":
        kwargs["linked_list"] = LinkedList(kwargs.pop("values"))
    elif key == "bst":
        kwargs["tree"] = BinarySearchTree(kwargs.pop("values"))
    return kwargs


def _record(key: str, inputs: Dict[str, Any]) -> Recorder:
    rec = Recorder()
    rec.start(key, **_engine_kwargs(key, inputs))
    rec.run_to_completion()
    return rec


def _replay() -> Stepper:
    """Re-run the recorded algorithm and park the cursor where the session left it."""
    run = session.get("run")
    if run is None:
        raise InvalidInputError("No recorded run; POST /api/run first")
    rec = _record(run["algo"], run["inputs"])
    stepper = Stepper(speed=session.get("speed", config.default_speed))
    stepper.load(rec.steps, position=min(run["current_step"], len(rec.steps) - 1))
    return stepper


def _save_cursor(stepper: Stepper) -> Dict[str, Any]:
    run = session["run"]
    run["current_step"] = stepper.current_idx
    session["run"] = run
    return dict(stepper.to_dict(), algo=run["algo"])


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify({"algorithms": [info.to_dict() for info in list_algorithms()]})


# ---------------------------------------------------------------------------
# API: Sorting
# ---------------------------------------------------------------------------
@app.route("/api/sort/<key>", methods=["POST"])
def api_sort(key: str):
    info = get_algorithm(key)
    if info is None or info.category is not Category.SORTING:
        sorts = [a.key for a in list_algorithms() if a.category is Category.SORTING]
        raise UnknownOperationError(key, sorts)

    rec = _record(key, _run_inputs(key, _payload()))
    result = rec.result
    return jsonify({
        "algorithm":    key,
        "steps":        [s.to_dict() for s in result.steps],
        "comparisons":  result.comparisons,
        "swaps":        result.swaps,
        "sorted_array": result.sorted_array,
    })


# ---------------------------------------------------------------------------
# API: Graphs
# ---------------------------------------------------------------------------
@app.route("/api/graph/traverse", methods=["POST"])
def api_graph_traverse():
    data = _payload()
    key = data.get("algorithm", "bfs")
    if key not in ("dfs", "bfs"):
        raise UnknownOperationError(key, ["dfs", "bfs"])

    rec = _record(key, _run_inputs(key, data))
    result = rec.result
    return jsonify({
        "algorithm":   key,
        "steps":       [s.to_dict() for s in result.steps],
        "visit_order": result.visit_order,
        "tree_edges":  [list(e) for e in result.tree_edges],
    })


@app.route("/api/dijkstra", methods=["POST"])
def api_dijkstra():
    rec = _record("dijkstra", _run_inputs("dijkstra", _payload()))
    result = rec.result
    return jsonify({
        "steps":               [s.to_dict() for s in result.steps],
        "distances":           {v: json_distance(d) for v, d in result.distances.items()},
        "previous":            result.previous,
        "path_sequence":       result.path_sequence,
        "shortest_path_edges": [list(e) for e in result.shortest_path_edges],
        "total_distance":      json_distance(result.total_distance),
        "path_found":          result.path_found,
    })


@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = _payload()
    mode = data.get("mode", "random")

    if mode == "random":
        num_vertices = data.get("vertices")
        if num_vertices is not None and (isinstance(num_vertices, bool) or not isinstance(num_vertices, int)):
            raise InvalidInputError("'vertices' must be an integer")
        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise InvalidInputError("'seed' must be an integer")
        g = Graph.generate_random(
            num_vertices=num_vertices,
            weighted=bool(data.get("weighted", True)),
            seed=seed,
        )
    elif mode == "sample":
        g = Graph.sample_weighted_graph() if data.get("weighted", True) else Graph.sample_traversal_graph()
    else:
        raise UnknownOperationError(mode, ["random", "sample"])

    _check_graph_size(g)
    _save_graph(g)
    return jsonify({"graph": g.to_dict(), "adjacency": g.adjacency_list()})


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    data = _payload()
    text = data.get("text", "")
    if not isinstance(text, str) or not text.strip():
        raise InvalidInputError("'text' must be a non-empty adjacency list")

    g = Graph.from_adjacency_list(text, weighted=bool(data.get("weighted", True)))
    _check_graph_size(g)
    _save_graph(g)
    return jsonify({"graph": g.to_dict(), "adjacency": g.adjacency_list()})


# ---------------------------------------------------------------------------
# API: Linked list / BST
# ---------------------------------------------------------------------------
@app.route("/api/list/<operation>", methods=["POST"])
def api_list(operation: str):
    data = dict(_payload(), operation=operation)
    rec = _record("linked_list", _run_inputs("linked_list", data))
    return jsonify({
        "operation": operation,
        "steps":     [s.to_dict() for s in rec.steps],
        "result":    rec.result.result,
        "list":      list(rec.steps[-1].array),
    })


@app.route("/api/tree/<operation>", methods=["POST"])
def api_tree(operation: str):
    data = dict(_payload(), operation=operation)
    rec = _record("bst", _run_inputs("bst", data))
    return jsonify({
        "operation": operation,
        "steps":     [s.to_dict() for s in rec.steps],
        "result":    rec.result.result,
        "tree":      rec.steps[-1].tree,
    })


# ---------------------------------------------------------------------------
# API: Recorded run + step navigation
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _payload()
    key = data.get("algorithm")
    if not key:
        raise InvalidInputError("'algorithm' is required")
    speed = data.get("speed", session.get("speed", config.default_speed))

    inputs = _run_inputs(key, data)
    rec = _record(key, inputs)
    stepper = Stepper(speed=speed)
    stepper.load(rec.steps)

    session["run"] = {"algo": key, "inputs": inputs, "current_step": 0}
    session["speed"] = speed
    return jsonify(dict(stepper.to_dict(), algo=key, metrics=rec.metrics.to_dict()))


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    stepper = _replay()
    if not stepper.next_step():
        return jsonify({"error": "Already at last step"}), 400
    return jsonify(_save_cursor(stepper))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    stepper = _replay()
    if not stepper.prev_step():
        return jsonify({"error": "Already at first step"}), 400
    return jsonify(_save_cursor(stepper))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    idx = _payload().get("index", 0)
    if isinstance(idx, bool) or not isinstance(idx, int):
        raise InvalidInputError("'index' must be an integer")
    stepper = _replay()
    if not stepper.goto_step(idx):
        return jsonify({"error": "Invalid step index"}), 400
    return jsonify(_save_cursor(stepper))


@app.route("/api/state", methods=["GET"])
def api_state():
    if "run" not in session:
        return jsonify({"state": "idle", "current_idx": -1, "total_steps": 0, "step": None})
    stepper = _replay()
    return jsonify(dict(stepper.to_dict(), algo=session["run"]["algo"]))


# ---------------------------------------------------------------------------
# API: Comparison mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = _payload()
    keys = data.get("algorithms")
    if not isinstance(keys, list) or len(keys) != 2:
        raise InvalidInputError("'algorithms' must name exactly two algorithms")

    infos = []
    for key in keys:
        info = get_algorithm(key) if isinstance(key, str) else None
        if info is None:
            raise UnknownOperationError(key, list(REGISTRY))
        infos.append(info)
    if infos[0].category is not infos[1].category:
        raise InvalidInputError(
            f"Cannot compare {infos[0].label} ({infos[0].category.value}) "
            f"with {infos[1].label} ({infos[1].category.value})"
        )

    left  = _record(keys[0], _run_inputs(keys[0], data))
    right = _record(keys[1], _run_inputs(keys[1], data))
    return jsonify(compare(left, right).to_dict())


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    _configure_logging(config.log_level)
    logger.info("Algorithm Visualizer listening on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
