"""Miscellaneous methods.

"""

def pairs(n):
    """Enumerate all unordered index pairs for a collection of a given size
    in the fixed order (0, 1), (0, 2), ..., (0, n-1), (1, 2), ..., (n-2, n-1).
    Pairwise scorers are always supplied and stored in this order.

    :param n: the number of objects
    """
    for i in range(n):
        for j in range(i + 1, n):
            yield i, j

def num_pairs(n):
    """Return the number of unordered pairs for a collection of a given size.

    :param n: the number of objects
    :returns: n(n-1)/2

    """
    return n * (n - 1) // 2

def pad(s, length):
    """Pad a string with spaces at the end until it is of a given length.

    :param s: the string to pad
    :param length: the length to pad the string to
    :returns: the string padded with spaces at the end

    """
    pad_length = length-len(s)

    return s + (" " * pad_length)

def identifier(sequence, index):
    """Return the identifier of a sequence: its accession if it has one,
    otherwise its one-based position in the input.

    :param sequence: the sequence to identify
    :param index: the zero-based position of the sequence in the input
    :returns: a string identifying the sequence

    """
    accession = getattr(sequence, 'accession', None)
    if accession:
        return accession
    return str(index + 1)
