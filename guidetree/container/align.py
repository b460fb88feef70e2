"""Container type to store an alignment between sequences. Alignments
serve as the profiles attached to guide tree nodes.

"""

import numpy as np

from guidetree.core import *

class Alignment(Container):
    """Alignment container type. This container is used to store an alignment
    between one or more sequences. Internally the alignment is stored as a
    path through the dynamic programming matrix: row n of the path holds,
    for every sequence, the number of residues consumed after n columns.

    :param items: the sequences which are aligned in this container
    :param path: a two-dimensional array containing a path through the
        alignment matrix
    """
    tid = "guidetree.container.Alignment"

    def __init__(self, items, path):
        if path.shape[1] != len(items):
            s = "path width {0} does not match number of sequences {1}"
            raise DataError(s.format(path.shape[1], len(items)))

        self.items = items
        self.path = path

    @classmethod
    def from_sequence(cls, sequence):
        """Create the trivial alignment of a single sequence with itself.

        :param sequence: the sequence to wrap
        :returns: an alignment containing only the given sequence

        """
        path = np.arange(len(sequence) + 1).reshape(len(sequence) + 1, 1)

        return cls([sequence], path)

    def __len__(self):
        return self.path.shape[0] - 1

    def __repr__(self):
        f = "<Alignment items={0} columns={1}>"

        return f.format(len(self.items), len(self))
