"""Pairwise score container type.

"""

from guidetree.core import *

class PairwiseScore(Container):
    """Container holding the result of scoring one pair of sequences: the
    raw score of the pair as well as the highest and lowest score that the
    scoring scheme could have produced for it. Guide trees accept any object
    exposing these three attributes.

    :param score: the raw similarity score of the pair
    :param max_score: the maximum attainable score for the pair
    :param min_score: the minimum attainable score for the pair

    """
    tid = "guidetree.container.PairwiseScore"

    def __init__(self, score, max_score, min_score):
        self.score = score
        self.max_score = max_score
        self.min_score = min_score

    def __repr__(self):
        f = "<PairwiseScore score={0} max_score={1} min_score={2}>"

        return f.format(self.score, self.max_score, self.min_score)
