"""Tests for the BinarySearchTree model."""

import pytest

from structures import BinarySearchTree
from structures.errors import DuplicateValueError


class TestInsertAndSearch:

    def test_inorder_is_sorted(self, sample_tree: BinarySearchTree):
        assert sample_tree.inorder() == [20, 30, 40, 50, 60, 70, 80]
        assert len(sample_tree) == 7

    def test_duplicate_insert_rejected(self, sample_tree: BinarySearchTree):
        with pytest.raises(DuplicateValueError):
            sample_tree.insert(40)
        assert len(sample_tree) == 7

    def test_search_path(self, sample_tree: BinarySearchTree):
        assert sample_tree.search_path(60) == [50, 70, 60]
        assert sample_tree.search_path(65) == [50, 70, 60]
        assert 60 in sample_tree
        assert 65 not in sample_tree

    def test_minimum_and_height(self, sample_tree: BinarySearchTree):
        assert sample_tree.minimum() == 20
        assert sample_tree.height() == 3
        assert BinarySearchTree().height() == 0
        assert BinarySearchTree().minimum() is None


class TestTraversals:

    def test_preorder(self, sample_tree: BinarySearchTree):
        assert sample_tree.preorder() == [50, 30, 20, 40, 70, 60, 80]

    def test_postorder(self, sample_tree: BinarySearchTree):
        assert sample_tree.postorder() == [20, 40, 30, 60, 80, 70, 50]


class TestDelete:

    def test_delete_leaf(self, sample_tree: BinarySearchTree):
        assert sample_tree.delete(20) is True
        assert sample_tree.inorder() == [30, 40, 50, 60, 70, 80]

    def test_delete_one_child(self):
        tree = BinarySearchTree([50, 30, 20])
        tree.delete(30)
        assert tree.to_dict() == {
            "value": 50,
            "left": {"value": 20, "left": None, "right": None},
            "right": None,
        }

    def test_delete_two_children_uses_inorder_successor(self, sample_tree: BinarySearchTree):
        sample_tree.delete(50)
        assert sample_tree.inorder() == [20, 30, 40, 60, 70, 80]
        assert sample_tree.root.value == 60
        assert sample_tree.root.right.left is None

    def test_delete_missing_value(self, sample_tree: BinarySearchTree):
        assert sample_tree.delete(99) is False
        assert len(sample_tree) == 7

    def test_delete_only_node(self):
        tree = BinarySearchTree([1])
        tree.delete(1)
        assert tree.root is None
        assert tree.to_dict() is None
