"""Guide tree container type, its nodes and the post-order traversal used
to drive progressive multiple sequence alignment.

"""

import weakref

import numpy as np

from guidetree.core import *
from guidetree.util import NeighborJoiningAlgorithm, format_newick
from guidetree.util import pairs, num_pairs, identifier
from .align import Alignment
from .matrix import DistanceMatrix


class Node(object):
    """Base class for the nodes of a guide tree. Leaf nodes correspond to
    single sequences, internal nodes to the alignment of the sequences below
    them and the root node to the full multiple sequence alignment.

    Apart from the *profile* slot, which is free to be replaced by whoever
    is aligning along the tree, nodes are not modified after the tree has
    been built. The link to the parent node is a weak reference, the tree
    owns its nodes through the parent to child links.

    :param index: a number uniquely identifying this node within its tree
    :param name: the label of this node
    :param distance: the branch length to the parent node
    :param parent: the parent node or None for the root

    """
    is_leaf = False

    def __init__(self, index, name, distance, parent):
        self.index = index
        self.name = name
        self.distance = distance
        self.profile = None

        if parent is None:
            self._parent = None
        else:
            self._parent = weakref.ref(parent)

    @property
    def parent(self):
        if self._parent is None:
            return None
        return self._parent()

    @property
    def child1(self):
        return None

    @property
    def child2(self):
        return None

    @property
    def children(self):
        return ()

    def get_child(self, n):
        """Return a child by its number. Leaves have no children and return
        None for both numbers.

        :param n: 1 for the first child, 2 for the second
        :returns: the requested child node

        """
        if n == 1:
            return self.child1
        elif n == 2:
            return self.child2

        s = "invalid child index {0}, must be 1 or 2"
        raise ChildIndexError(s.format(n))

    def child_index(self, node):
        """Return the number of a given child node: 1, 2, or None if
        the node is not a child of this one.

        """
        if node is None:
            return None
        if node is self.child1:
            return 1
        if node is self.child2:
            return 2
        return None

    def __repr__(self):
        fmt = "<{0} index={1} name='{2}' distance={3}>"

        return fmt.format(type(self).__name__, self.index, self.name,
                          self.distance)


class LeafNode(Node):
    """Guide tree node for a single input sequence. The profile of a leaf
    starts out as the trivial alignment of its sequence.

    :param sequence: the sequence this leaf stands for

    """
    is_leaf = True

    def __init__(self, index, name, distance, parent, sequence):
        super(LeafNode, self).__init__(index, name, distance, parent)

        self.sequence = sequence
        self.profile = Alignment.from_sequence(sequence)


class InternalNode(Node):
    """Guide tree node joining exactly two subtrees. The profile of an
    internal node is empty until it is set by the caller, typically after
    the profiles of both children have been aligned.

    """

    def __init__(self, index, name, distance, parent):
        super(InternalNode, self).__init__(index, name, distance, parent)

        self._children = [None, None]

    @property
    def child1(self):
        return self._children[0]

    @property
    def child2(self):
        return self._children[1]

    @property
    def children(self):
        return tuple(self._children)


class GuideTree(Container):
    """The GuideTree container stores the order in which sequences should be
    merged during a progressive multiple sequence alignment. The pairwise
    scores are normalized into a distance matrix, which is clustered by
    neighbor-joining into a rooted binary tree. Iterating over the tree
    yields its nodes leaves-first, every node coming after both of its
    children.

    :param sequences: the sequences to build a tree for, each of which may
        have an *accession* attribute used as its identifier
    :param scorers: one object per sequence pair in the order
        (0, 1), (0, 2), ..., (1, 2), ..., (n-2, n-1), each exposing the
        *score*, *max_score* and *min_score* attributes
    :param environment: an optional Environment with options overriding
        the defaults

    Options:
    * debug - integer indicating the debug level (0 is silent, 2 is noisiest)
    * precision - number of significant digits of the branch lengths in the
                  Newick representation

    """
    tid = "guidetree.container.GuideTree"

    defaults = {'debug': 0, 'precision': 6}

    def __init__(self, sequences, scorers, environment=None):
        self.environment = Environment(component=self, parent=environment)
        self._sequences = tuple(sequences)
        self._scorers = tuple(scorers)
        self.log_url = None

        self._check_input()
        self.distances = self._build_distances()

        debug = self.environment['debug']
        log = None
        try:
            if debug > 0:
                log = LogBundle()
                msg = "Building guide tree for {0} sequences"
                log.message(ROOT_LOG_NAME, msg.format(len(self._sequences)))
            if debug > 1:
                np.savetxt(log.path("distances.csv"),
                           self.get_distance_matrix(), delimiter=",")

            cluster_root = self._cluster(log)

            self.newick = format_newick(cluster_root,
                                        self.environment['precision'])
            self.nodes = tuple(self._build_nodes(cluster_root))
            self.root = self.nodes[0]

            if debug > 1:
                log.write("tree.nwk", self.newick)
            if debug > 0:
                log.message(ROOT_LOG_NAME, "Done!")
                self.log_url = path_to_url(log.archive())
        finally:
            if log is not None:
                log.delete()

    def _check_input(self):
        n = len(self._sequences)
        if n < 2:
            s = "need at least two sequences to build a guide tree, got {0}"
            raise MalformedInputError(s.format(n))

        if len(self._scorers) != num_pairs(n):
            s = "expected {0} pairwise scorers for {1} sequences, got {2}"
            raise MalformedInputError(s.format(num_pairs(n), n,
                                               len(self._scorers)))

    def _build_distances(self):
        n = len(self._sequences)
        distances = DistanceMatrix(n)
        for i, sequence in enumerate(self._sequences):
            distances.set_identifier(i, identifier(sequence, i))

        for (i, j), scorer in zip(pairs(n), self._scorers):
            span = scorer.max_score - scorer.min_score
            if span == 0:
                s = "scorer for pair ('{0}', '{1}') is degenerate: " \
                    "maximum and minimum score are both {2}"
                s = s.format(distances.get_identifier(i),
                             distances.get_identifier(j), scorer.max_score)
                raise DegenerateScorerError(s)

            distance = (scorer.max_score - scorer.score) / span
            if not 0.0 <= distance <= 1.0:
                s = "score {0} for pair ('{1}', '{2}') lies outside of " \
                    "the range [{3}, {4}]"
                s = s.format(scorer.score, distances.get_identifier(i),
                             distances.get_identifier(j), scorer.min_score,
                             scorer.max_score)
                raise MalformedInputError(s)

            distances.set_value(i, j, distance)

        return distances

    def _cluster(self, log):
        algorithm = NeighborJoiningAlgorithm(self.distances)
        total_steps = len(self._sequences) - 1

        join = None
        for step, join in enumerate(algorithm.joins()):
            if log is not None:
                msg = "Step {0} of {1}: joining [{2}] ({3:.6g}) and " \
                      "[{4}] ({5:.6g})"
                msg = msg.format(step + 1, total_steps,
                                 _describe(join.node_one),
                                 join.node_one.length,
                                 _describe(join.node_two),
                                 join.node_two.length)
                log.message(ROOT_LOG_NAME, msg)

        return join.parent

    def _build_nodes(self, cluster_root):
        """Wrap the abstract tree resulting from the clustering into guide
        tree nodes. Nodes are numbered in pre-order, the root being 0.

        """
        nodes = []
        stack = [(cluster_root, None, 0)]
        while stack:
            cluster, parent, slot = stack.pop()
            index = len(nodes)
            if cluster.is_leaf:
                i = self.distances.get_index(cluster.name)
                node = LeafNode(index, cluster.name, cluster.length, parent,
                                self._sequences[i])
            else:
                node = InternalNode(index, cluster.name, cluster.length,
                                    parent)
                stack.append((cluster.children[1], node, 1))
                stack.append((cluster.children[0], node, 0))

            if parent is not None:
                parent._children[slot] = node
            nodes.append(node)

        return nodes

    @property
    def sequences(self):
        """Return the sequences making up the leaves of this tree, in input
        order.

        """
        return self._sequences

    @property
    def scorers(self):
        return self._scorers

    def leaves(self):
        return [node for node in self if node.is_leaf]

    def get_all_pairs_scores(self):
        """Return the raw score of every sequence pair, in the same order as
        the scorers were supplied.

        """
        return [scorer.score for scorer in self._scorers]

    def get_distance_matrix(self):
        """Return the normalized distance matrix used to construct this
        tree as a two-dimensional array.

        """
        return self.distances.values

    def get_score_matrix(self):
        """Return the raw similarity matrix used to construct this tree.
        The off-diagonal elements contain the pairwise scores, the diagonal
        element for a sequence contains the highest maximum score of any
        pair that sequence takes part in.

        """
        n = len(self._sequences)
        self_scores = [None] * n
        for (i, j), scorer in zip(pairs(n), self._scorers):
            for k in (i, j):
                if self_scores[k] is None or scorer.max_score > self_scores[k]:
                    self_scores[k] = scorer.max_score

        scores = self.get_all_pairs_scores()
        dtype = np.asarray(scores + self_scores).dtype

        matrix = np.zeros((n, n), dtype=dtype)
        for k, self_score in enumerate(self_scores):
            matrix[k, k] = self_score
        for (i, j), score in zip(pairs(n), scores):
            matrix[i, j] = score
            matrix[j, i] = score

        return matrix

    def __len__(self):
        return len(self._sequences)

    def __iter__(self):
        return PostOrderIterator(self)

    def __str__(self):
        return self.newick

    def __repr__(self):
        return "<GuideTree sequences={0}>".format(len(self))


class PostOrderIterator(object):
    """Iterator traversing a guide tree from the leaves to the root. Every
    node is produced exactly once, both children of a node are produced
    before the node itself, the first child before the second, and the root
    comes last. Visitation state is kept by the iterator, so any number of
    iterators can walk the same tree independently.

    :param tree: the guide tree to traverse

    """

    def __init__(self, tree):
        self._visited = set()
        self._stack = [tree.root]

    def __iter__(self):
        return self

    def has_next(self):
        return len(self._stack) > 0

    def __next__(self):
        while self._stack:
            node = self._stack[-1]
            for child in node.children:
                if child.index not in self._visited:
                    self._stack.append(child)
                    break
            else:
                self._visited.add(node.index)
                return self._stack.pop()

        raise StopIteration

    next = __next__

    def remove(self):
        s = "nodes cannot be removed from a guide tree"
        raise UnsupportedOperationError(s)


def _describe(cluster):
    return ", ".join(leaf.name for leaf in cluster.leaves())
