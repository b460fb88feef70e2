"""Debug logging for guide tree construction. Everything written here is
diagnostic output: the tree is built the same with or without it.

"""

import os.path
import shutil
import tempfile
import urllib.parse
import urllib.request
import uuid

from .exception import *

ROOT_LOG_NAME = "guidetree.log"

class LogBundle(object):
    """A temporary directory collecting the debug output of a single tree
    build. Log lines are appended through message(), whole files such as
    the rendered tree are written with write(), and path() hands out
    filenames for routines that write files themselves, such as
    numpy.savetxt. Once the build is done the bundle is packed into a
    single archive with archive() and removed with delete().

    """
    def __init__(self):
        self._gone = False
        self._basedir = tempfile.mkdtemp(prefix="guidetree-")
        self._streams = {}

    def _check_gone(self):
        if self._gone:
            s = "attempted to perform operations on a LogBundle " \
                "on which delete() has been called"
            raise LogError(s)

    def path(self, filename):
        """Return the path of a file inside the bundle.

        :param filename: name of the file within the bundle
        :returns: an absolute path inside the bundle directory

        """
        self._check_gone()

        return os.path.join(self._basedir, filename)

    def write(self, filename, data):
        """Write a complete file into the bundle, replacing any earlier
        contents.

        :param filename: name of the file within the bundle
        :param data: the text to write

        """
        with open(self.path(filename), 'w') as f:
            f.write(data)

    def message(self, filename, message):
        """Append a line to a log file inside the bundle. The file stays
        open for further messages until the bundle is closed.

        :param filename: name of the log file within the bundle
        :param message: the line to append, without a trailing newline

        """
        self._check_gone()

        stream = self._streams.get(filename)
        if stream is None:
            stream = open(self.path(filename), 'a')
            self._streams[filename] = stream

        stream.write("{0}\n".format(message))

    def flush(self):
        self._check_gone()

        for stream in self._streams.values():
            stream.flush()

    def close(self):
        self._check_gone()

        for stream in self._streams.values():
            stream.close()

        self._streams = {}

    def delete(self):
        """Close all log files and remove the bundle directory. Any later
        operation on the bundle raises a LogError.

        """
        if not self._gone:
            self.close()
            shutil.rmtree(self._basedir)
            self._gone = True

    def archive(self):
        """Pack the bundle into a gzipped tarball in the temporary
        directory. The bundle itself is left in place.

        :returns: the absolute filename of the archive

        """
        self.flush()

        tmp_name = os.path.join(tempfile.gettempdir(),
                                "guidetree-{0}".format(uuid.uuid4().hex))

        return shutil.make_archive(tmp_name, 'gztar', self._basedir)

def path_to_url(path):
    return urllib.parse.urljoin('file:', urllib.request.pathname2url(path))
