"""Pytest configuration and fixtures for the visualizer tests."""

import pytest

from structures import BinarySearchTree, Graph, LinkedList


@pytest.fixture
def traversal_graph() -> Graph:
    """Unweighted five-vertex sample: A-B, A-D, B-C, B-E, C-E, D-E."""
    return Graph.sample_traversal_graph()


@pytest.fixture
def weighted_graph() -> Graph:
    """Weighted five-vertex sample used by the Dijkstra demo."""
    return Graph.sample_weighted_graph()


@pytest.fixture
def disconnected_graph() -> Graph:
    """Two components: A-B-C and the lone pair X-Y."""
    return Graph.from_edges([("A", "B", 2), ("B", "C", 3), ("X", "Y", 1)])


@pytest.fixture
def sample_list() -> LinkedList:
    return LinkedList([10, 20, 30, 40])


@pytest.fixture
def sample_tree() -> BinarySearchTree:
    return BinarySearchTree([50, 30, 70, 20, 40, 60, 80])


@pytest.fixture
def client():
    """Flask test client with a fresh session per test."""
    from main import app

    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
