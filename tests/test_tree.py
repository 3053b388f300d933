"""Tests for the TreeNode value type and tree helpers."""

import json

import numpy as np

from hiervis.tree import TreeNode, aggregate, find_aggregate_mismatches, prune_zero


def _sample() -> TreeNode:
    return TreeNode(
        "root",
        6,
        [
            TreeNode("a", 4, [TreeNode("x", 1), TreeNode("y", 3)]),
            TreeNode("b", 2),
            TreeNode("c", 0, [TreeNode("z", 0)]),
        ],
    )


def test_to_dict_omits_children_on_leaves_and_missing_values():
    tree = TreeNode("r", children=[TreeNode("leaf", 1)])
    assert tree.to_dict() == {"name": "r", "children": [{"name": "leaf", "value": 1}]}


def test_json_round_trip_is_lossless():
    tree = _sample()
    text = tree.to_json()
    assert TreeNode.from_json(text) == tree
    assert json.loads(text) == tree.to_dict()


def test_numpy_values_serialize_as_plain_numbers():
    tree = TreeNode("r", np.int64(5))
    assert json.loads(tree.to_json()) == {"name": "r", "value": 5}


def test_traversal_helpers():
    tree = _sample()
    assert [n.name for n in tree.iter_nodes()] == ["root", "a", "x", "y", "b", "c", "z"]
    assert [n.name for n in tree.leaves()] == ["x", "y", "b", "z"]
    assert tree.node_count() == 7
    assert tree.depth() == 2
    assert tree.leaf_paths("/") == ["a/x", "a/y", "b", "c/z"]
    assert tree.find_child("b").value == 2
    assert tree.find_child("missing") is None


def test_aggregate_fills_internal_nodes():
    tree = TreeNode("r", children=[TreeNode("a", children=[TreeNode("x", 2), TreeNode("y", 5)]), TreeNode("b", 1)])
    aggregate(tree)
    assert tree.value == 8
    assert tree.find_child("a").value == 7
    assert find_aggregate_mismatches(tree) == []


def test_aggregate_with_node_weight_counts_every_node():
    tree = TreeNode("r", children=[TreeNode("a"), TreeNode("b", children=[TreeNode("c")])])
    aggregate(tree, node_weight=1)
    assert tree.value == 4
    assert find_aggregate_mismatches(tree, node_weight=1) == []


def test_mismatches_are_reported():
    tree = TreeNode("r", 10, [TreeNode("a", 3), TreeNode("b", 4)])
    problems = find_aggregate_mismatches(tree)
    assert len(problems) == 1
    assert problems[0].startswith("r:")


def test_prune_zero_drops_zero_subtrees_and_keeps_original():
    tree = _sample()
    pruned = prune_zero(tree)
    assert [c.name for c in pruned.children] == ["a", "b"]
    assert tree.find_child("c") is not None
