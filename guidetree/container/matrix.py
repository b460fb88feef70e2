"""Distance matrix container type.

"""

import numpy as np

from guidetree.core import *

class DistanceMatrix(Container):
    """Symmetric matrix of pairwise distances between a number of objects,
    each of which is identified by a unique string identifier. Setting the
    distance for (i, j) also sets it for (j, i). The diagonal is not used
    and always reads as zero.

    :param size: the number of objects in the matrix

    """
    tid = "guidetree.container.DistanceMatrix"

    def __init__(self, size):
        self._values = np.zeros((size, size), dtype=np.float64)
        self._identifiers = [None] * size
        self._indices = {}

    def __len__(self):
        return self._values.shape[0]

    def _check_index(self, i):
        if not 0 <= i < len(self):
            s = "index {0} out of range for distance matrix of size {1}"
            raise IndexError(s.format(i, len(self)))

    def get_value(self, i, j):
        """Get the distance between the objects at the given indices.

        :param i: index of the first object
        :param j: index of the second object
        :returns: the distance between the two objects

        """
        self._check_index(i)
        self._check_index(j)

        return float(self._values[i, j])

    def set_value(self, i, j, value):
        """Set the distance between the objects at the given indices.

        :param i: index of the first object
        :param j: index of the second object
        :param value: the distance between the two objects

        """
        self._check_index(i)
        self._check_index(j)
        if i == j:
            s = "cannot set a distance on the diagonal (index {0})"
            raise DataError(s.format(i))

        self._values[i, j] = value
        self._values[j, i] = value

    def get_identifier(self, i):
        self._check_index(i)

        return self._identifiers[i]

    def set_identifier(self, i, identifier):
        """Assign an identifier to the object at the given index. Identifiers
        must be unique within the matrix.

        :param i: index of the object
        :param identifier: a string uniquely identifying the object

        """
        self._check_index(i)
        if self._indices.get(identifier, i) != i:
            s = "identifier '{0}' is already assigned to index {1}"
            raise DataError(s.format(identifier, self._indices[identifier]))

        old = self._identifiers[i]
        if old is not None:
            del self._indices[old]

        self._identifiers[i] = identifier
        self._indices[identifier] = i

    def get_index(self, identifier):
        """Look up the index of the object with the given identifier.

        :param identifier: the identifier to look up
        :returns: the index of the object

        """
        try:
            return self._indices[identifier]
        except KeyError:
            s = "no object with identifier '{0}' in distance matrix"
            raise DataError(s.format(identifier))

    @property
    def identifiers(self):
        """Return a list of the identifiers in index order.

        """
        return list(self._identifiers)

    @property
    def values(self):
        """Return a copy of the full distance matrix as a two-dimensional
        array.

        """
        return self._values.copy()

    def __repr__(self):
        return "<DistanceMatrix size={0}>".format(len(self))
