"""Tests for the Flask JSON API."""

import sys

import pytest


DISCONNECTED = {
    "vertices": ["a", "b", "c", "x", "y"],
    "edges": [
        {"from": "a", "to": "b", "weight": 2},
        {"from": "b", "to": "c", "weight": 3},
        {"from": "x", "to": "y", "weight": 1},
    ],
}


class TestRegistryRoute:

    def test_lists_every_algorithm(self, client):
        resp = client.get("/api/algorithms")
        keys = [a["key"] for a in resp.get_json()["algorithms"]]

        assert resp.status_code == 200
        assert keys[:3] == ["insertion_sort", "merge_sort", "quick_sort"]
        assert "dijkstra" in keys


class TestSortRoute:

    def test_merge_sort(self, client):
        resp = client.post("/api/sort/merge_sort", json={"values": [5, 2, 9, 1]})
        data = resp.get_json()

        assert resp.status_code == 200
        assert data["sorted_array"] == [1, 2, 5, 9]
        assert data["steps"][-1]["type"] == "complete"
        assert data["steps"][-1]["array"] == [1, 2, 5, 9]

    def test_default_array(self, client):
        data = client.post("/api/sort/insertion_sort", json={}).get_json()
        assert data["sorted_array"] == [11, 12, 22, 25, 34, 64, 90]

    def test_unknown_sort(self, client):
        resp = client.post("/api/sort/dijkstra", json={"values": [1]})
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    @pytest.mark.parametrize("body", [
        '{"values": [3, NaN, 1, 2]}',
        '{"values": [Infinity, 1]}',
        '{"values": [1, -Infinity]}',
    ])
    def test_non_finite_values(self, client, body):
        resp = client.post("/api/sort/insertion_sort", data=body, content_type="application/json")
        assert resp.status_code == 400
        assert "finite" in resp.get_json()["error"]

    @pytest.mark.parametrize("values", [["a", 1], "1,2,3", [True, 2], list(range(51))])
    def test_bad_values(self, client, values):
        resp = client.post("/api/sort/quick_sort", json={"values": values})
        assert resp.status_code == 400


class TestGraphRoutes:

    def test_dfs_on_sample_graph(self, client):
        data = client.post("/api/graph/traverse", json={"algorithm": "dfs", "start": "a"}).get_json()
        assert data["visit_order"] == ["A", "B", "C", "E", "D"]

    def test_bfs_on_posted_graph(self, client):
        data = client.post("/api/graph/traverse", json={
            "algorithm": "bfs", "graph": DISCONNECTED, "start": "b",
        }).get_json()
        assert data["visit_order"] == ["B", "A", "C"]
        assert data["steps"][-1]["overlay"]["unreached"] == ["X", "Y"]

    def test_unknown_traversal(self, client):
        resp = client.post("/api/graph/traverse", json={"algorithm": "astar"})
        assert resp.status_code == 400

    def test_dijkstra_on_sample_graph(self, client):
        data = client.post("/api/dijkstra", json={"source": "a", "target": "e"}).get_json()

        assert data["path_sequence"] == ["A", "D", "E"]
        assert data["total_distance"] == 7
        assert data["distances"] == {"A": 0, "B": 3, "C": 6, "D": 2, "E": 7}

    def test_dijkstra_unreachable(self, client):
        data = client.post("/api/dijkstra", json={
            "graph": DISCONNECTED, "source": "A", "target": "Y",
        }).get_json()

        assert data["path_found"] is False
        assert data["total_distance"] is None
        assert data["path_sequence"] == []
        assert data["distances"]["Y"] is None

    @pytest.mark.parametrize("payload", [
        {"source": "A", "target": "Z"},
        {"source": "A"},
        {"source": " ", "target": "A"},
    ])
    def test_dijkstra_bad_vertices(self, client, payload):
        assert client.post("/api/dijkstra", json=payload).status_code == 400

    def test_bad_graph_payload(self, client):
        resp = client.post("/api/dijkstra", json={
            "graph": {"vertices": [], "edges": [{"from": "A", "to": "A"}]},
            "source": "A", "target": "A",
        })
        assert resp.status_code == 400

    def test_generate_is_seeded(self, client):
        first = client.post("/api/graph/generate", json={"seed": 7}).get_json()
        second = client.post("/api/graph/generate", json={"seed": 7}).get_json()

        assert first["graph"] == second["graph"]
        assert 5 <= len(first["graph"]["vertices"]) <= 8

    def test_generated_graph_is_used_by_later_runs(self, client):
        graph = client.post("/api/graph/generate", json={"seed": 3}).get_json()["graph"]
        data = client.post("/api/graph/traverse", json={"algorithm": "bfs"}).get_json()
        assert sorted(data["visit_order"]) == sorted(graph["vertices"])

    def test_unknown_generate_mode(self, client):
        assert client.post("/api/graph/generate", json={"mode": "grid"}).status_code == 400

    def test_import(self, client):
        data = client.post("/api/graph/import", json={"text": "a: b(3) c\nb: c(2)"}).get_json()
        assert data["graph"]["edges"] == [
            {"from": "A", "to": "B", "weight": 3},
            {"from": "A", "to": "C", "weight": 1},
            {"from": "B", "to": "C", "weight": 2},
        ]

    @pytest.mark.parametrize("text", ["", "nonsense", "A: A"])
    def test_bad_import(self, client, text):
        assert client.post("/api/graph/import", json={"text": text}).status_code == 400


class TestStructureRoutes:

    def test_list_insert_at(self, client):
        data = client.post("/api/list/insert_at", json={
            "values": [10, 20, 30], "value": 15, "position": 1,
        }).get_json()
        assert data["list"] == [10, 15, 20, 30]
        assert data["result"] == 1

    def test_list_bad_position(self, client):
        resp = client.post("/api/list/delete_at", json={"values": [1, 2], "position": 9})
        assert resp.status_code == 400

    def test_list_unknown_operation(self, client):
        assert client.post("/api/list/shuffle", json={}).status_code == 400

    def test_tree_delete(self, client):
        data = client.post("/api/tree/delete", json={
            "values": [50, 30, 70, 20, 40, 60, 80], "value": 50,
        }).get_json()
        assert data["result"] is True
        assert data["tree"]["value"] == 60

    def test_tree_inorder_default_values(self, client):
        data = client.post("/api/tree/inorder", json={}).get_json()
        assert data["result"] == [20, 30, 40, 50, 60, 70, 80]

    @pytest.mark.parametrize("value", ["NaN", "Infinity"])
    def test_tree_non_finite_value(self, client, value):
        resp = client.post(
            "/api/tree/insert",
            data='{"values": [5, 3], "value": ' + value + "}",
            content_type="application/json",
        )
        assert resp.status_code == 400

    def test_list_non_finite_value(self, client):
        resp = client.post(
            "/api/list/append", data='{"values": [1], "value": NaN}', content_type="application/json",
        )
        assert resp.status_code == 400

    def test_tree_duplicate_insert(self, client):
        resp = client.post("/api/tree/insert", json={"values": [5, 3], "value": 3})
        assert resp.status_code == 400
        assert "already" in resp.get_json()["error"]


class TestStepNavigation:

    def _run(self, client):
        resp = client.post("/api/run", json={"algorithm": "insertion_sort", "values": [3, 1, 2]})
        assert resp.status_code == 200
        return resp.get_json()

    def test_run_shows_first_step(self, client):
        data = self._run(client)

        assert data["current_idx"] == 0
        assert data["state"] == "paused"
        assert data["step"]["type"] == "start"
        assert data["metrics"]["comparisons"] == 3

    def test_next_prev(self, client):
        self._run(client)

        assert client.post("/api/step/next").get_json()["current_idx"] == 1
        assert client.post("/api/step/next").get_json()["current_idx"] == 2
        assert client.post("/api/step/prev").get_json()["current_idx"] == 1
        assert client.get("/api/state").get_json()["current_idx"] == 1

    def test_prev_at_start(self, client):
        self._run(client)
        assert client.post("/api/step/prev").status_code == 400

    def test_goto_end_and_past_it(self, client):
        total = self._run(client)["total_steps"]

        data = client.post("/api/step/goto", json={"index": total - 1}).get_json()
        assert data["state"] == "finished"
        assert data["step"]["is_final"] is True
        assert client.post("/api/step/next").status_code == 400
        assert client.post("/api/step/goto", json={"index": total}).status_code == 400

    def test_goto_non_integer(self, client):
        self._run(client)
        assert client.post("/api/step/goto", json={"index": "2"}).status_code == 400

    def test_navigation_without_a_run(self, client):
        assert client.post("/api/step/next").status_code == 400
        assert client.get("/api/state").get_json()["state"] == "idle"

    def test_run_requires_algorithm(self, client):
        assert client.post("/api/run", json={}).status_code == 400

    def test_run_dijkstra_then_navigate(self, client):
        data = client.post("/api/run", json={"algorithm": "dijkstra", "source": "A", "target": "E"}).get_json()
        assert data["metrics"]["path_cost"] == 7

        last = client.post("/api/step/goto", json={"index": data["total_steps"] - 1}).get_json()
        assert last["step"]["path"] == ["A", "D", "E"]


class TestCompareRoute:

    def test_two_sorts_on_same_input(self, client):
        data = client.post("/api/compare", json={
            "algorithms": ["insertion_sort", "quick_sort"], "values": [1, 2, 3],
        }).get_json()

        assert data["left"]["algo_key"] == "insertion_sort"
        assert data["right"]["algo_key"] == "quick_sort"
        assert data["winner_comparisons"] == "Insertion Sort"

    def test_two_traversals(self, client):
        data = client.post("/api/compare", json={"algorithms": ["dfs", "bfs"], "start": "A"}).get_json()
        assert data["winner_nodes"] == "tie"

    def test_mixed_categories_rejected(self, client):
        resp = client.post("/api/compare", json={"algorithms": ["dfs", "merge_sort"]})
        assert resp.status_code == 400

    def test_needs_two_algorithms(self, client):
        assert client.post("/api/compare", json={"algorithms": ["dfs"]}).status_code == 400


class TestAppImport:

    def test_import_leaves_process_hooks_alone(self, client):
        assert getattr(sys.excepthook, "__name__", "") != "_log_excepthook"
