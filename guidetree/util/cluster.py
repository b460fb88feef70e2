"""Neighbor-joining clustering and the abstract tree it produces.

"""

import collections

import numpy as np

from guidetree.core import *

NEWICK_RESERVED = frozenset("()[]':;, \t\r\n")

Join = collections.namedtuple("Join", ["node_one", "node_two", "parent"])


class ClusterNode(object):
    """A node in the abstract tree produced by the clustering algorithm.
    This holds nothing but topology and branch lengths: leaves carry the
    identifier of the distance matrix index they were created from, internal
    nodes carry exactly two children.

    :param name: the label of this node, empty for internal nodes
    :param children: a tuple of child nodes, empty for leaves
    :param length: the branch length from this node to its parent

    """

    def __init__(self, name="", children=(), length=0.0):
        self.name = name
        self.children = tuple(children)
        self.length = length

    @property
    def is_leaf(self):
        return len(self.children) == 0

    def leaves(self):
        """Return the leaves below this node from left to right.

        """
        leaves = []
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                leaves.append(node)
            else:
                stack.extend(reversed(node.children))

        return leaves

    def __repr__(self):
        if self.is_leaf:
            return "<ClusterNode name='{0}' length={1}>".format(self.name,
                                                                self.length)
        return "<ClusterNode children={0} length={1}>".format(
            len(self.children), self.length)


class NeighborJoiningAlgorithm(object):
    """Implementation of the neighbor-joining clustering algorithm. The tree
    is rooted by joining the last two remaining clusters, splitting the
    distance between them in half.

    Every step the pair of active clusters minimizing the criterion
    Q(i, j) = (M - 2) * d(i, j) - (r_i + r_j) is joined, where M is the
    number of active clusters and r_i the sum of the distances from cluster
    i to all other active clusters. Ties go to the pair with the lowest
    indices. The new cluster takes over the position of the first cluster
    of the pair, the second is removed.

    :param distance_matrix: a DistanceMatrix containing pairwise
        distances and identifiers for all objects

    """

    def __init__(self, distance_matrix):
        if len(distance_matrix) < 2:
            s = "need at least two objects to cluster, got {0}"
            raise MalformedInputError(s.format(len(distance_matrix)))

        self.distance_matrix = distance_matrix

    def joins(self):
        """Yield a Join for every merge performed while clustering. The
        parent of the last join is the root of the tree.

        """
        d = self.distance_matrix.values
        np.fill_diagonal(d, 0.0)
        clusters = [ClusterNode(name=identifier) for identifier
                    in self.distance_matrix.identifiers]

        while len(clusters) > 2:
            m = len(clusters)
            r = d.sum(axis=1)

            q = (m - 2) * d - (r[:, np.newaxis] + r[np.newaxis, :])
            q[np.tril_indices(m)] = np.inf

            i, j = np.unravel_index(q.argmin(), q.shape)
            i, j = int(i), int(j)

            d_ij = d[i, j]
            length_one = d_ij / 2.0 + (r[i] - r[j]) / (2.0 * (m - 2))
            length_two = d_ij - length_one

            node_one = clusters[i]
            node_two = clusters[j]
            node_one.length = max(float(length_one), 0.0)
            node_two.length = max(float(length_two), 0.0)
            parent = ClusterNode(children=(node_one, node_two))

            row = (d[i, :] + d[j, :] - d_ij) / 2.0
            d[i, :] = row
            d[:, i] = row
            d[i, i] = 0.0
            d = np.delete(np.delete(d, j, axis=0), j, axis=1)

            clusters[i] = parent
            del clusters[j]

            yield Join(node_one, node_two, parent)

        node_one, node_two = clusters
        half = max(float(d[0, 1]) / 2.0, 0.0)
        node_one.length = half
        node_two.length = half
        root = ClusterNode(children=(node_one, node_two), length=0.0)

        yield Join(node_one, node_two, root)

    def execute(self):
        """Run the clustering to completion.

        :returns: the root ClusterNode of the resulting tree

        """
        join = None
        for join in self.joins():
            pass

        return join.parent


def _quote_label(name):
    if any(c in NEWICK_RESERVED for c in name):
        return "'{0}'".format(name.replace("'", "''"))
    return name


def format_newick(root, precision=6):
    """Render a tree of ClusterNodes in Newick notation, e.g.
    (A:0.1,(B:0.2,C:0.3):0.05);

    :param root: the root node of the tree to render
    :param precision: number of significant digits for branch lengths
    :returns: a string containing the Newick representation of the tree

    """
    rendered = {}
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if not node.is_leaf and not expanded:
            stack.append((node, True))
            for child in reversed(node.children):
                stack.append((child, False))
            continue

        if node.is_leaf:
            s = _quote_label(node.name)
        else:
            inner = ",".join(rendered.pop(id(child))
                             for child in node.children)
            s = "({0}){1}".format(inner, _quote_label(node.name))

        if node is not root:
            s = "{0}:{1:.{2}g}".format(s, node.length, precision)

        rendered[id(node)] = s

    return rendered[id(root)] + ";"
