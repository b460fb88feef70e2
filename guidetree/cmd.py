import argparse
import sys

from guidetree import load_sequence_fasta, load_pairwise_scores
from guidetree import write_newick, write_distance_matrix
from guidetree.core import *
from guidetree.container import GuideTree
from guidetree.util.cli import write_log, write_traversal


def main(argv=None):
    # Parse arguments.
    args = parse_args(argv)
    verbose = args.verbose and not args.quiet

    # Setup environment.
    keys = {}
    keys['debug'] = args.debug
    keys['precision'] = args.precision
    env = Environment(keys=keys)

    # Load inputs and build the tree.
    try:
        seqs = load_sequence_fasta(args.input)
        scorers = load_pairwise_scores(args.scores, seqs)
        tree = GuideTree(seqs, scorers, env)
    except DataError as e:
        sys.stderr.write("guidetree: {0}\n".format(e))
        return 1

    write_newick(args.output, tree)
    if args.distance_matrix is not None:
        write_distance_matrix(args.distance_matrix, tree)

    if verbose:
        write_traversal(tree, sys.stdout)

    # Collect log bundle.
    if tree.log_url is not None:
        path = write_log(tree.log_url)
        if verbose:
            sys.stdout.write("debug output written to {0}\n".format(path))

    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="guidetree",
        description="build a neighbor-joining guide tree from pairwise "
                    "sequence scores")
    parser.add_argument("input", help="input file in FASTA format")
    parser.add_argument("scores", help="pairwise score table, one "
                        "'id_one id_two score max_score min_score' per line")
    parser.add_argument("output", help="output tree in Newick format")
    parser.add_argument("-m", "--distance-matrix", default=None,
                        dest="distance_matrix",
                        help="also write the distance matrix to this file")
    parser.add_argument("-p", "--precision", default=6, type=int,
                        dest="precision",
                        help="significant digits of branch lengths")
    parser.add_argument("--debug", "-d", action="count", dest="debug",
                        default=0, help="enable debugging output")

    group = parser.add_mutually_exclusive_group()
    group.add_argument("-v", "--verbose", dest="verbose", help="be verbose",
                       action="store_true", default=False)
    group.add_argument("-q", "--quiet", dest="quiet", help="be quiet",
                       action="store_true", default=False)

    return parser.parse_args(argv)


if __name__ == "__main__":
    sys.exit(main())
