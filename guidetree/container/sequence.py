"""Sequence container type.

"""

from guidetree.core import *

class Sequence(Container):
    """The Sequence container is the minimal sequence handle used as a leaf
    in a guide tree. Only the accession and the length are ever inspected
    while building a tree, the residues are carried along for whoever
    consumes the tree.

    :param name: a string containing a name or description for this sequence
    :param residues: the residues making up this sequence
    :param accession: an optional accession id uniquely identifying this
        sequence

    """
    tid = "guidetree.container.Sequence"

    def __init__(self, name, residues, accession=None):
        self.name = name
        self.residues = residues
        self.accession = accession

    def __len__(self):
        return len(self.residues)

    def __repr__(self):
        f = "<Sequence name='{0}' length={1}>"

        return f.format(self.name, len(self))
