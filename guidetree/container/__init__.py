"""Package containing common container types.

"""

from .sequence import *
from .score import *
from .align import *
from .matrix import *
from .tree import *
