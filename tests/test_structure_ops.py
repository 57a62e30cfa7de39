"""Tests for the traced linked-list and BST operations."""

import pytest

from algorithms import LinkedListEngine, TreeEngine
from algorithms.step import StepType
from structures import BinarySearchTree, LinkedList
from structures.errors import (
    DuplicateValueError,
    EngineReuseError,
    InvalidInputError,
    InvalidPositionError,
    UnknownOperationError,
)


def _types(result):
    return [s.type for s in result.steps]


class TestLinkedListEngine:

    def test_insert_at_walks_to_position(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "insert_at", value=15, position=1).apply()

        assert _types(result) == [StepType.START, StepType.VISIT, StepType.INSERT, StepType.COMPLETE]
        assert result.result == 1
        assert sample_list.to_list() == [10, 15, 20, 30, 40]
        assert result.steps[-1].array == (10, 15, 20, 30, 40)

    def test_append(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "append", value=50).apply()
        assert _types(result).count(StepType.VISIT) == 4
        assert result.result == 4
        assert sample_list.to_list()[-1] == 50

    def test_insert_head_needs_no_walk(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "insert_head", value=5).apply()
        assert StepType.VISIT not in _types(result)
        assert sample_list.to_list()[0] == 5

    def test_search_found(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "search", value=30).apply()

        assert result.result == 2
        assert _types(result).count(StepType.COMPARE) == 3
        assert result.steps[-2].type is StepType.FOUND
        assert result.steps[-2].visited == (10, 20, 30)

    def test_search_not_found(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "search", value=99).apply()
        assert result.result == -1
        assert result.steps[-2].type is StepType.NOT_FOUND

    def test_delete_by_value(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "delete", value=20).apply()
        assert result.result is True
        assert result.steps[-2].type is StepType.DELETE
        assert sample_list.to_list() == [10, 30, 40]

    def test_delete_missing_value_leaves_list_untouched(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "delete", value=99).apply()
        assert result.result is False
        assert sample_list.to_list() == [10, 20, 30, 40]

    def test_delete_at(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "delete_at", position=3).apply()
        assert result.result == 40
        assert sample_list.to_list() == [10, 20, 30]

    def test_get(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "get", position=2).apply()
        assert result.result == 30
        assert sample_list.to_list() == [10, 20, 30, 40]

    def test_reverse_relinks_one_node_per_step(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "reverse").apply()
        relinks = [s for s in result.steps if s.type is StepType.RELINK]

        assert len(relinks) == 4
        assert relinks[1].overlay == {"reversed": [20, 10], "remaining": [30, 40]}
        assert result.result == [40, 30, 20, 10]
        assert result.steps[-1].array == (40, 30, 20, 10)

    def test_traverse(self, sample_list: LinkedList):
        result = LinkedListEngine(sample_list, "traverse").apply()
        assert result.result == [10, 20, 30, 40]

    def test_operations_on_empty_list(self):
        result = LinkedListEngine(LinkedList(), "traverse").apply()
        assert _types(result) == [StepType.START, StepType.COMPLETE]

    def test_unknown_operation(self, sample_list: LinkedList):
        with pytest.raises(UnknownOperationError):
            LinkedListEngine(sample_list, "sort")

    def test_missing_value(self, sample_list: LinkedList):
        with pytest.raises(InvalidInputError):
            LinkedListEngine(sample_list, "append")

    @pytest.mark.parametrize("operation,position", [("insert_at", 5), ("delete_at", 4), ("get", -1), ("get", None)])
    def test_bad_position_rejected_before_any_step(self, sample_list: LinkedList, operation, position):
        with pytest.raises(InvalidPositionError):
            LinkedListEngine(sample_list, operation, value=1, position=position)
        assert sample_list.to_list() == [10, 20, 30, 40]

    def test_engine_is_single_use(self, sample_list: LinkedList):
        engine = LinkedListEngine(sample_list, "traverse")
        engine.apply()
        with pytest.raises(EngineReuseError):
            engine.apply()


class TestTreeEngine:

    def test_insert_records_comparisons(self, sample_tree: BinarySearchTree):
        result = TreeEngine(sample_tree, "insert", value=65).apply()
        compares = [s for s in result.steps if s.type is StepType.COMPARE]

        assert [s.current for s in compares] == [50, 70, 60]
        assert [s.overlay["direction"] for s in compares] == ["right", "left", "right"]
        assert result.steps[-2].overlay == {"parent": 60}
        assert 65 in sample_tree

    def test_insert_into_empty_tree(self):
        tree = BinarySearchTree()
        result = TreeEngine(tree, "insert", value=1).apply()
        assert result.steps[-2].overlay == {"parent": None}
        assert tree.to_dict() == {"value": 1, "left": None, "right": None}

    def test_duplicate_insert_rejected_before_any_step(self, sample_tree: BinarySearchTree):
        with pytest.raises(DuplicateValueError):
            TreeEngine(sample_tree, "insert", value=40)
        assert len(sample_tree) == 7

    def test_search(self, sample_tree: BinarySearchTree):
        result = TreeEngine(sample_tree, "search", value=40).apply()
        assert result.result is True
        assert result.steps[-2].type is StepType.FOUND
        assert result.steps[-2].visited == (50, 30, 40)

    def test_search_missing(self, sample_tree: BinarySearchTree):
        result = TreeEngine(sample_tree, "search", value=45).apply()
        assert result.result is False
        assert result.steps[-2].type is StepType.NOT_FOUND

    def test_delete_two_children(self, sample_tree: BinarySearchTree):
        result = TreeEngine(sample_tree, "delete", value=50).apply()

        assert _types(result) == [
            StepType.START,
            StepType.COMPARE,
            StepType.SUCCESSOR,
            StepType.COPY,
            StepType.DELETE,
            StepType.COMPLETE,
        ]
        successor = result.steps[2]
        assert successor.overlay == {"successor": 60, "successor_path": [70, 60]}
        assert result.steps[3].tree["value"] == 60
        assert result.steps[4].overlay == {"case": "two_children"}
        assert sample_tree.inorder() == [20, 30, 40, 60, 70, 80]

    def test_delete_leaf(self, sample_tree: BinarySearchTree):
        result = TreeEngine(sample_tree, "delete", value=80).apply()
        assert result.steps[-2].overlay == {"case": "leaf"}
        assert StepType.SUCCESSOR not in _types(result)

    def test_delete_one_child(self):
        tree = BinarySearchTree([50, 30, 20])
        result = TreeEngine(tree, "delete", value=30).apply()
        assert result.steps[-2].overlay == {"case": "one_child"}
        assert tree.inorder() == [20, 50]

    def test_delete_missing(self, sample_tree: BinarySearchTree):
        result = TreeEngine(sample_tree, "delete", value=45).apply()
        assert result.result is False
        assert len(sample_tree) == 7

    @pytest.mark.parametrize("order,expected", [
        ("inorder",   [20, 30, 40, 50, 60, 70, 80]),
        ("preorder",  [50, 30, 20, 40, 70, 60, 80]),
        ("postorder", [20, 40, 30, 60, 80, 70, 50]),
    ])
    def test_traversals_accumulate_sequence(self, sample_tree: BinarySearchTree, order, expected):
        result = TreeEngine(sample_tree, order).apply()
        visits = [s for s in result.steps if s.type is StepType.VISIT]

        assert result.result == expected
        assert [s.current for s in visits] == expected
        assert visits[2].array == tuple(expected[:3])

    def test_traversal_of_empty_tree(self):
        result = TreeEngine(BinarySearchTree(), "inorder").apply()
        assert result.result == []
        assert _types(result) == [StepType.START, StepType.COMPLETE]

    def test_unknown_operation(self, sample_tree: BinarySearchTree):
        with pytest.raises(UnknownOperationError):
            TreeEngine(sample_tree, "balance")

    def test_missing_value(self, sample_tree: BinarySearchTree):
        with pytest.raises(InvalidInputError):
            TreeEngine(sample_tree, "search")
