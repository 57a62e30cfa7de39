"""Tests for DFS and BFS."""

import pytest

from algorithms import BreadthFirstSearch, DepthFirstSearch, traverse_bfs, traverse_dfs
from algorithms.step import StepType
from structures import Graph
from structures.errors import EngineReuseError, VertexNotFoundError


TRAVERSALS = [traverse_dfs, traverse_bfs]


class TestDepthFirstSearch:

    def test_visit_order_follows_adjacency_order(self, traversal_graph: Graph):
        result = traverse_dfs(traversal_graph, "A")
        assert result.visit_order == ["A", "B", "C", "E", "D"]
        assert result.tree_edges == [("A", "B"), ("B", "C"), ("C", "E"), ("E", "D")]

    def test_edge_step_precedes_each_descent(self, traversal_graph: Graph):
        steps = traverse_dfs(traversal_graph, "A").steps
        explore = [s for s in steps if s.type is StepType.EXPLORE_EDGE]
        assert [s.active_edges[0] for s in explore] == [("A", "B"), ("B", "C"), ("C", "E"), ("E", "D")]

    def test_frontier_is_the_current_path(self, traversal_graph: Graph):
        visits = [s for s in traverse_dfs(traversal_graph, "A").steps if s.type is StepType.VISIT]
        assert visits[2].frontier == ("A", "B", "C")


class TestBreadthFirstSearch:

    def test_visit_order_is_layered(self, traversal_graph: Graph):
        result = traverse_bfs(traversal_graph, "A")
        assert result.visit_order == ["A", "B", "D", "C", "E"]
        assert result.tree_edges == [("A", "B"), ("A", "D"), ("B", "C"), ("B", "E")]

    def test_frontier_is_the_queue(self, traversal_graph: Graph):
        visits = [s for s in traverse_bfs(traversal_graph, "A").steps if s.type is StepType.VISIT]
        assert visits[1].current == "B"
        assert visits[1].frontier == ("D",)


class TestSharedBehaviour:

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_one_visit_step_per_vertex(self, traverse, traversal_graph: Graph):
        result = traverse(traversal_graph, "C")
        visits = [s.current for s in result.steps if s.type is StepType.VISIT]
        assert visits == result.visit_order
        assert len(set(visits)) == len(visits) == 5

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_visited_is_cumulative(self, traverse, traversal_graph: Graph):
        visits = [s for s in traverse(traversal_graph, "A").steps if s.type is StepType.VISIT]
        for n, step in enumerate(visits, start=1):
            assert len(step.visited) == n

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_no_edge_active_at_the_end(self, traverse, traversal_graph: Graph):
        last = traverse(traversal_graph, "A").steps[-1]
        assert last.type is StepType.COMPLETE
        assert last.active_edges == ()

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_repeat_runs_are_identical(self, traverse, traversal_graph: Graph):
        first = traverse(traversal_graph, "B")
        second = traverse(traversal_graph, "B")
        assert first.steps == second.steps
        assert first.visit_order == second.visit_order

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_default_start_is_first_vertex(self, traverse, traversal_graph: Graph):
        assert traverse(traversal_graph).visit_order[0] == "A"

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_only_the_start_component_is_visited(self, traverse, disconnected_graph: Graph):
        result = traverse(disconnected_graph, "A")
        assert result.visit_order == ["A", "B", "C"]
        assert result.steps[-1].overlay["unreached"] == ["X", "Y"]

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_isolated_start_vertex(self, traverse):
        g = Graph()
        g.add_vertex("Q")
        result = traverse(g, "Q")
        assert result.visit_order == ["Q"]
        assert [s.type for s in result.steps] == [StepType.START, StepType.VISIT, StepType.COMPLETE]

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_empty_graph(self, traverse):
        result = traverse(Graph())
        assert result.visit_order == []
        assert [s.type for s in result.steps] == [StepType.START, StepType.COMPLETE]

    @pytest.mark.parametrize("traverse", TRAVERSALS)
    def test_unknown_start_vertex(self, traverse, traversal_graph: Graph):
        with pytest.raises(VertexNotFoundError):
            traverse(traversal_graph, "Z")

    @pytest.mark.parametrize("engine_cls", [DepthFirstSearch, BreadthFirstSearch])
    def test_engine_is_single_use(self, engine_cls, traversal_graph: Graph):
        engine = engine_cls(traversal_graph, "A")
        engine.traverse()
        with pytest.raises(EngineReuseError):
            engine.traverse()
