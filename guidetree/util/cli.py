"""Support code for the command-line tool.

"""

import os
import sys
import tarfile
import urllib.parse
import uuid


_LINE_FMT = "{0:>5}  {1:<{width}.{width}}  {2}\n"


def write_log(url, path=None):
    """Unpack the log bundle found at a given URL into a fresh debug
    directory.

    :param url: the URL of the log bundle
    :param path: the directory to unpack into, a new directory in the
                 current working directory is created if not given
    :returns: the path of the directory the bundle was unpacked into

    """
    if path is None:
        path = "Debug#{0}".format(uuid.uuid4().hex)

    os.mkdir(path)
    unpack_log_bundle(url, path)

    return path


def unpack_log_bundle(url, path):
    u = urllib.parse.urlparse(url)
    if u.scheme == 'file':
        filename = urllib.parse.unquote(u.path)
        if not tarfile.is_tarfile(filename):
            return
        with tarfile.open(filename) as tf:
            if hasattr(tarfile, "data_filter"):
                tf.extractall(path, filter="data")
            else:
                tf.extractall(path)

        os.remove(filename)


def format_node(step, node, width=30):
    """Format a single traversal step for display.

    """
    if node.is_leaf:
        action = "leaf"
    else:
        action = "merge #{0} + #{1}".format(node.child1.index,
                                            node.child2.index)
    name = node.name or "#{0}".format(node.index)

    return _LINE_FMT.format(step, name, action, width=width)


def write_traversal(tree, f=None):
    if f is None:
        f = sys.stdout

    for step, node in enumerate(tree, 1):
        f.write(format_node(step, node))
