"""Core package. This package contains the base types shared by the rest
of the system: exceptions, containers, option environments and log bundles.

"""

from .exception import *
from .component import *
from .logging import *
