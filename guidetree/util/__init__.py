"""Utility package containing the clustering algorithm and support methods.

"""

from .support import *
from .cluster import *
