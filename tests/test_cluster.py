"""
Tests for the neighbor-joining clustering algorithm.
"""

import numpy as np
import pytest

from guidetree.container import DistanceMatrix
from guidetree.core import MalformedInputError
from guidetree.util import NeighborJoiningAlgorithm, ClusterNode
from guidetree.util import format_newick, pairs


def build_matrix(names, values):
    """Build a distance matrix from a list of distances in pair order."""
    matrix = DistanceMatrix(len(names))
    for i, name in enumerate(names):
        matrix.set_identifier(i, name)
    for (i, j), value in zip(pairs(len(names)), values):
        matrix.set_value(i, j, value)
    return matrix


def random_matrix(n, seed):
    rng = np.random.default_rng(seed)
    names = ["s{0}".format(i) for i in range(n)]
    values = rng.random(n * (n - 1) // 2)
    return build_matrix(names, values)


def path_length(root, name_one, name_two):
    """Sum of branch lengths on the path between two leaves."""
    depths = {}
    parents = {}
    stack = [(root, 0.0)]
    while stack:
        node, depth = stack.pop()
        depths[id(node)] = depth
        for child in node.children:
            parents[id(child)] = node
            stack.append((child, depth + child.length))

    leaves = {leaf.name: leaf for leaf in root.leaves()}
    one, two = leaves[name_one], leaves[name_two]

    ancestors = set()
    node = one
    while node is not None:
        ancestors.add(id(node))
        node = parents.get(id(node))
    node = two
    while id(node) not in ancestors:
        node = parents[id(node)]

    return depths[id(one)] + depths[id(two)] - 2 * depths[id(node)]


class TestNeighborJoining:
    """Test the neighbor-joining algorithm."""

    def test_two_objects_join_at_root(self):
        """Two objects are joined directly by the root."""
        matrix = build_matrix(["a", "b"], [0.4])
        joins = list(NeighborJoiningAlgorithm(matrix).joins())

        assert len(joins) == 1
        root = joins[0].parent
        assert [child.name for child in root.children] == ["a", "b"]
        assert root.length == 0.0
        assert root.children[0].length == pytest.approx(0.2)
        assert root.children[1].length == pytest.approx(0.2)

    def test_three_objects_join_closest_pair_first(self):
        """The closest pair is joined first, the last object at the root."""
        matrix = build_matrix(["A", "B", "C"], [0.2, 0.5, 0.8])
        joins = list(NeighborJoiningAlgorithm(matrix).joins())

        assert len(joins) == 2
        first, last = joins
        assert (first.node_one.name, first.node_two.name) == ("A", "B")
        assert last.node_one is first.parent
        assert last.node_two.name == "C"

        # Negative branch length for A is clamped to zero
        assert first.node_one.length == 0.0
        assert first.node_two.length == pytest.approx(0.25)
        assert last.node_one.length == pytest.approx(0.275)
        assert last.node_two.length == pytest.approx(0.275)

    def test_additive_matrix_is_reconstructed(self):
        """Path lengths of an additive matrix are reproduced exactly."""
        names = ["A", "B", "C", "D"]
        values = [3, 3, 3, 4, 4, 2]
        matrix = build_matrix(names, values)
        root = NeighborJoiningAlgorithm(matrix).execute()

        assert format_newick(root) == "(((A:1,B:2):1,C:1):0.5,D:0.5);"
        for (i, j), value in zip(pairs(4), values):
            assert path_length(root, names[i], names[j]) == \
                pytest.approx(value)

    def test_ties_go_to_lowest_indices(self):
        """With all distances equal the first two objects are joined."""
        matrix = build_matrix(["w", "x", "y", "z"], [0.5] * 6)
        first = next(NeighborJoiningAlgorithm(matrix).joins())

        assert (first.node_one.name, first.node_two.name) == ("w", "x")

    def test_full_binary_tree(self):
        """A tree over n objects has n leaves and n - 1 internal nodes."""
        n = 12
        root = NeighborJoiningAlgorithm(random_matrix(n, seed=3)).execute()

        internal = 0
        stack = [root]
        while stack:
            node = stack.pop()
            if not node.is_leaf:
                internal += 1
                assert len(node.children) == 2
                stack.extend(node.children)

        assert len(root.leaves()) == n
        assert internal == n - 1
        assert sorted(leaf.name for leaf in root.leaves()) == \
            sorted("s{0}".format(i) for i in range(n))

    def test_branch_lengths_non_negative(self):
        """No branch length is ever negative."""
        for seed in range(5):
            root = NeighborJoiningAlgorithm(random_matrix(9, seed)).execute()
            stack = [root]
            while stack:
                node = stack.pop()
                assert node.length >= 0.0
                stack.extend(node.children)

    def test_deterministic(self):
        """Repeated runs over the same matrix give identical trees."""
        first = format_newick(
            NeighborJoiningAlgorithm(random_matrix(15, seed=7)).execute(),
            precision=17)
        second = format_newick(
            NeighborJoiningAlgorithm(random_matrix(15, seed=7)).execute(),
            precision=17)

        assert first == second

    def test_input_matrix_untouched(self):
        """Clustering does not modify the distance matrix."""
        matrix = build_matrix(["A", "B", "C"], [0.2, 0.5, 0.8])
        before = matrix.values
        NeighborJoiningAlgorithm(matrix).execute()

        np.testing.assert_array_equal(matrix.values, before)

    def test_too_few_objects(self):
        """A single object cannot be clustered."""
        with pytest.raises(MalformedInputError):
            NeighborJoiningAlgorithm(build_matrix(["a"], []))


class TestNewick:
    """Test Newick rendering of cluster trees."""

    def test_format(self):
        """Nested nodes are rendered with their branch lengths."""
        inner = ClusterNode(children=(ClusterNode("B", length=0.2),
                                      ClusterNode("C", length=0.3)),
                            length=0.05)
        root = ClusterNode(children=(ClusterNode("A", length=0.1), inner))

        assert format_newick(root) == "(A:0.1,(B:0.2,C:0.3):0.05);"

    def test_precision(self):
        """Branch lengths are rounded to the requested precision."""
        root = ClusterNode(children=(ClusterNode("A", length=1 / 3.0),
                                     ClusterNode("B", length=2 / 3.0)))

        assert format_newick(root, precision=3) == "(A:0.333,B:0.667);"

    def test_labels_are_quoted(self):
        """Labels containing reserved characters are quoted."""
        root = ClusterNode(children=(ClusterNode("seq one", length=1.0),
                                     ClusterNode("it's", length=1.0)))

        assert format_newick(root) == "('seq one':1,'it''s':1);"
