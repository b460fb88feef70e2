"""
Shared fixtures for the guidetree tests.
"""

import numpy as np
import pytest

from guidetree.container import Sequence, PairwiseScore
from guidetree.util import pairs


def make_sequences(names, length=8):
    """Build sequences of equal length with the given accessions."""
    residues = "ACDEFGHIKLMNPQRSTVWY"
    return [Sequence(name, (residues[i % 20] * length), accession=name)
            for i, name in enumerate(names)]


def random_scorers(n, seed=0):
    """Build scorers in pair order from a random symmetric distance matrix."""
    rng = np.random.default_rng(seed)
    return [PairwiseScore(int(rng.integers(0, 101)), 100, 0)
            for _ in pairs(n)]


@pytest.fixture
def abc_sequences():
    return make_sequences(["A", "B", "C"])


@pytest.fixture
def abc_scorers():
    # d(A,B) = 0.2, d(A,C) = 0.5, d(B,C) = 0.8
    return [PairwiseScore(8, 10, 0),
            PairwiseScore(5, 10, 0),
            PairwiseScore(2, 10, 0)]
