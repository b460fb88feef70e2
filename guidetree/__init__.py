"""This is the root package for the guidetree toolkit, which builds the
neighbor-joining guide trees used to order progressive multiple sequence
alignment.

"""

import codecs

from guidetree.container import Sequence, PairwiseScore, GuideTree
from guidetree.core import *
from guidetree.util import pairs, pad, identifier

def _get_lines(f, encoding):
    """ Read all the lines from a file object or filename string.

    :param f: filename string or file object to read lines from
    :param encoding: encoding of the input file
    :returns: an array of strings containing the lines of the file

    """
    if isinstance(f, str):
        with codecs.open(f, 'r', encoding=encoding) as f:
            lines = f.readlines()
    else:
        lines = f.readlines()

    decoded_lines = []
    for line in lines:
        if isinstance(line, bytes):
            decoded_lines.append(line.decode(encoding))
        else:
            decoded_lines.append(line)

    return decoded_lines

def _strip_comments(line, begin_char = '#'):
    """ Strip comments from a line.
    :param line: the line to strip comments from
    :param begin_char: a character that marks the beginning of a comment
    :returns: the line with possible comments stripped

    """
    i = line.find(begin_char)
    if i >= 0:
        line = line[:i]
    return line

def _parse_score(value):
    try:
        return int(value)
    except ValueError:
        return float(value)

def _write(f, data, encoding):
    should_close = False
    if isinstance(f, str):
        f = codecs.open(f, 'w', encoding)
        should_close = True

    f.write(data)

    if should_close:
        f.close()

def load_sequence_fasta(f, encoding='utf-8'):
    """Read a set of sequences in FASTA format. The first word of each
    header is used as the accession of the sequence.

    :param f: filename or file object to read sequences from
    :param encoding: encoding to use while reading
    :returns: a list of the sequences read from f

    """
    lines = _get_lines(f, encoding)
    seqs = []
    header = None
    seq = ""
    for line in lines:
        if line.startswith('>'):
            if header is not None and len(seq):
                seqs.append(_make_sequence(header, seq))
            header = line[1:].strip()
            seq = ""
            continue
        stripped = line.strip()
        if len(stripped):
            seq += stripped

    if header is not None and len(seq):
        seqs.append(_make_sequence(header, seq))

    return seqs

def _make_sequence(header, residues):
    words = header.split()
    if words:
        accession = words[0]
    else:
        accession = None

    return Sequence(header, residues, accession=accession)

def load_pairwise_scores(f, sequences, encoding='utf-8'):
    """Read a table of pairwise scores for a set of sequences. Every line
    holds two sequence identifiers followed by the score, the maximum
    score and the minimum score of that pair, separated by whitespace.
    Sequences are identified by their accession or, lacking one, by their
    one-based position. The lines can be in any order, but every pair of
    sequences must be present exactly once.

    :param f: filename or file object to read the scores from
    :param sequences: the sequences the scores refer to
    :param encoding: encoding to use while reading
    :returns: a list of PairwiseScore objects in the order expected by
              GuideTree

    """
    indices = {identifier(seq, i): i for i, seq in enumerate(sequences)}

    scores = {}
    for n, line in enumerate(_get_lines(f, encoding)):
        fields = _strip_comments(line).split()
        if not fields:
            continue

        if len(fields) != 5:
            s = "line {0}: expected 5 fields, got {1}"
            raise DataError(s.format(n + 1, len(fields)))

        try:
            i, j = indices[fields[0]], indices[fields[1]]
        except KeyError as e:
            s = "line {0}: unknown sequence identifier {1}"
            raise DataError(s.format(n + 1, e))

        if i == j:
            s = "line {0}: cannot score sequence '{1}' against itself"
            raise DataError(s.format(n + 1, fields[0]))

        try:
            values = [_parse_score(value) for value in fields[2:]]
        except ValueError:
            s = "line {0}: invalid score value"
            raise DataError(s.format(n + 1))

        pair = (min(i, j), max(i, j))
        if pair in scores:
            s = "line {0}: duplicate score for pair ('{1}', '{2}')"
            raise DataError(s.format(n + 1, fields[0], fields[1]))

        scores[pair] = PairwiseScore(*values)

    scorers = []
    for pair in pairs(len(sequences)):
        if pair not in scores:
            s = "no score given for pair ('{0}', '{1}')"
            s = s.format(*[identifier(sequences[k], k) for k in pair])
            raise DataError(s)
        scorers.append(scores[pair])

    return scorers

def write_newick(f, tree, encoding='utf-8'):
    """Write a guide tree in Newick format.

    :param f: a filename or file object to write the tree to
    :param tree: the guide tree to write
    :param encoding: encoding to use while writing

    """
    _write(f, "{0}\n".format(tree.newick), encoding)

def write_distance_matrix(f, tree, precision=6, encoding='utf-8'):
    """Write the distance matrix of a guide tree as a square PHYLIP-style
    matrix: a line with the number of sequences followed by one line per
    sequence with its identifier and distances.

    :param f: a filename or file object to write the matrix to
    :param tree: the guide tree to take the distance matrix from
    :param precision: number of decimals to write the distances with
    :param encoding: encoding to use while writing

    """
    names = tree.distances.identifiers
    matrix = tree.get_distance_matrix()

    width = max(10, max(len(name) for name in names) + 1)
    lines = [str(len(names))]
    for name, row in zip(names, matrix):
        values = " ".join("{0:.{1}f}".format(value, precision)
                          for value in row)
        lines.append(pad(name, width) + values)

    _write(f, "\n".join(lines) + "\n", encoding)
